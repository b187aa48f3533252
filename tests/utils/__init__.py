"""
Test utilities for statebox.

Provides the element type and the recording listener shared by the tests.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Row:
    """A keyed element used across IdList tests."""

    id: int
    val: str


class Recorder:
    """Callable listener that records the arguments of every call."""

    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)

    @property
    def count(self):
        return len(self.calls)


__all__ = ["Row", "Recorder"]
