"""
StateBox Value Data
===================

Small immutable key/value records, handy as IdList elements or config rows.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


def _format_part(part: Any) -> str:
    if isinstance(part, float):
        return f"{part:.2f}"
    return str(part)


@dataclass(frozen=True)
class PairData(Generic[K, V]):
    """A key/value pair rendered as ``[key,value]``."""

    key: K
    value: V

    def __str__(self) -> str:
        return f"[{_format_part(self.key)},{_format_part(self.value)}]"
