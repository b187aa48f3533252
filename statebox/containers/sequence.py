"""
StateBox ObservableList - Index-Addressed Observable Sequence
=============================================================

An ObservableList wraps a mutable sequence and notifies broadcast listeners
on append, index assignment and removal by index. Listeners are called as
``callback(index, value)``.

Indices are positional, not identities: removing index ``i`` shifts every
later element down by one. The index handed to a listener is the position at
the time of the call and goes stale after the next structural mutation, so
there is no per-index observation in this container.

Example:
    ```python
    from statebox import ObservableList, UpdateKind

    scores = ObservableList([10, 20, 30])
    scores.observe(UpdateKind.REMOVED, lambda i, v: print(f"removed {v} at {i}"))
    scores.remove_at(1)   # prints "removed 20 at 1"
    scores.get(1)         # 30
    ```
"""

import operator
from collections.abc import MutableSequence
from typing import Any, Callable, Generic, Iterator, List, TypeVar

from ..errors import IndexOutOfRangeError
from ..update_kind import UpdateKind
from ..util.listener_registry import ListenerRegistry
from ..util.storage_binding import StorageBinding, bind_storage
from ..util.views import ReadOnlyListView

T = TypeVar("T")

IndexListener = Callable[[int, T], None]


class ObservableList(Generic[T]):
    """
    Observable index-addressed sequence.

    Args:
        store: The backing sequence, a resolver returning it, or a
            ``StorageBinding``. A fresh ``list`` is owned when omitted.
    """

    __slots__ = ("_binding", "_listeners")

    def __init__(self, store: Any = None) -> None:
        self._binding: StorageBinding = bind_storage(
            store, default_factory=list, shape=MutableSequence
        )
        self._listeners: ListenerRegistry = ListenerRegistry()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def count(self) -> int:
        return len(self._binding.resolve())

    def get(self, index: int) -> T:
        items = self._binding.resolve()
        return items[self._check_index(index, len(items))]

    def as_read_only(self) -> ReadOnlyListView:
        return ReadOnlyListView(self._binding)

    def to_list(self) -> List[T]:
        return list(self._binding.resolve())

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set(self, index: int, value: T) -> None:
        items = self._binding.resolve()
        index = self._check_index(index, len(items))
        items[index] = value
        self._listeners.dispatch(index, UpdateKind.UPDATED, value)

    def add(self, value: T) -> None:
        items = self._binding.resolve()
        items.append(value)
        self._listeners.dispatch(len(items) - 1, UpdateKind.ADDED, value)

    def remove_at(self, index: int) -> T:
        """Remove the element at ``index``, dispatch REMOVED and return it."""
        items = self._binding.resolve()
        index = self._check_index(index, len(items))
        removed = items[index]
        del items[index]
        self._listeners.dispatch(index, UpdateKind.REMOVED, removed)
        return removed

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def observe(self, kind: UpdateKind, callback: IndexListener) -> None:
        self._listeners.observe_any(kind, callback)

    def stop_observing(self, kind: UpdateKind, callback: IndexListener) -> None:
        self._listeners.stop_observing_any(kind, callback)

    @staticmethod
    def _check_index(index: Any, count: int) -> int:
        """Return ``index`` as a plain int in [0, count) or raise."""
        # bool is an int subclass but never a meaningful position
        if isinstance(index, bool):
            raise TypeError("List indices must be integers, not bool")
        try:
            position = operator.index(index)
        except TypeError:
            raise TypeError(
                f"List indices must be integers, not {type(index).__name__}"
            ) from None
        if not 0 <= position < count:
            raise IndexOutOfRangeError(position, count)
        return position

    # Magic methods mirror the explicit surface
    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[T]:
        return iter(self._binding.resolve())

    def __contains__(self, value: object) -> bool:
        return value in self._binding.resolve()

    def __getitem__(self, index: int) -> T:
        return self.get(index)

    def __setitem__(self, index: int, value: T) -> None:
        self.set(index, value)

    def __delitem__(self, index: int) -> None:
        self.remove_at(index)

    def __repr__(self) -> str:
        try:
            items = repr(self.to_list())
        except LookupError:
            items = "<unresolved>"
        return f"ObservableList({items})"
