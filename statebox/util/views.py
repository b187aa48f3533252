"""
StateBox Read-Only Views
========================

Live, read-only views over a container's backing store. A view re-resolves
the container's storage binding on every access, so it follows a deferred
store that is swapped after the view was handed out. Views expose no
mutation surface; all writes must go through the owning container.
"""

from collections.abc import Mapping, Sequence
from typing import Iterator

from ..errors import KeyNotFoundError
from .storage_binding import StorageBinding


class ReadOnlyListView(Sequence):
    """Read-only sequence over a list-shaped store."""

    __slots__ = ("_binding",)

    def __init__(self, binding: StorageBinding) -> None:
        self._binding = binding

    def __getitem__(self, index):
        return self._binding.resolve()[index]

    def __len__(self) -> int:
        return len(self._binding.resolve())

    def __iter__(self) -> Iterator:
        return iter(self._binding.resolve())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Sequence):
            return list(self) == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"ReadOnlyListView({list(self)!r})"


class ReadOnlyDictView(Mapping):
    """Read-only mapping over a map-shaped store."""

    __slots__ = ("_binding",)

    def __init__(self, binding: StorageBinding) -> None:
        self._binding = binding

    def __getitem__(self, key):
        mapping = self._binding.resolve()
        # never trigger a __missing__ default through a read-only view
        if key not in mapping:
            raise KeyNotFoundError(key)
        return mapping[key]

    def __contains__(self, key: object) -> bool:
        return key in self._binding.resolve()

    def __len__(self) -> int:
        return len(self._binding.resolve())

    def __iter__(self) -> Iterator:
        return iter(self._binding.resolve())

    def __repr__(self) -> str:
        return f"ReadOnlyDictView({dict(self)!r})"
