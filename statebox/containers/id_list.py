"""
StateBox IdList - Key-Addressed Observable Sequence
===================================================

An IdList wraps a plain mutable sequence whose elements carry their own key.
The key is never stored separately: a caller-supplied ``key_resolver``
derives it from each element. This lets the same container sit on top of
data whose canonical storage is an ordered sequence (configuration rows,
serialized arrays) while still offering get/set/add/remove by key.

Lookups and removals are linear scans. Containers in this role hold tens or
hundreds of elements, not millions.

Key uniqueness
--------------

``add`` refuses a key that is already present. Every other way of putting a
duplicate into the backing sequence (writing to it directly, or a
``key_resolver`` that is not pure) breaks the one-element-per-key invariant
and is the caller's responsibility.

Observation
-----------

Listeners are called as ``callback(key, value)``:

- **keyed** listeners (``observe``) run only for their key and kind
- **broadcast** listeners (``observe_any``) run for every key of their kind

``set`` on an absent key behaves exactly like ``add`` and fires ADDED;
on a present key it replaces the element in place and fires UPDATED.

Example:
    ```python
    from statebox import IdList, PairData, UpdateKind

    rows = IdList(lambda row: row.key)
    rows.add(PairData(1, "a"))
    rows.observe(1, UpdateKind.UPDATED, lambda key, row: print(key, row))
    rows.set(PairData(1, "b"))   # prints "1 [1,b]"
    rows.get(1)                  # PairData(key=1, value='b')
    ```
"""

from collections.abc import MutableSequence
from typing import Any, Callable, Generic, Hashable, Iterator, List, Optional, Tuple, TypeVar

from ..errors import DuplicateKeyError, KeyNotFoundError
from ..update_kind import UpdateKind
from ..util.listener_registry import ListenerRegistry
from ..util.storage_binding import StorageBinding, bind_storage
from ..util.views import ReadOnlyListView

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

KeyListener = Callable[[K, V], None]


class IdList(Generic[K, V]):
    """
    Observable sequence addressed by a key derived from each element.

    Args:
        key_resolver: Pure function returning the key of an element.
        store: The backing sequence, a resolver returning it, or a
            ``StorageBinding``. A fresh ``list`` is owned when omitted.
    """

    __slots__ = ("_key_resolver", "_binding", "_listeners")

    def __init__(self, key_resolver: Callable[[V], K], store: Any = None) -> None:
        if not callable(key_resolver):
            raise TypeError("IdList key_resolver must be callable")
        self._key_resolver = key_resolver
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

    def key_of(self, value: V) -> K:
        return self._key_resolver(value)

    def try_get(self, key: K) -> Tuple[bool, Optional[V]]:
        """Return ``(True, element)`` for a present key, ``(False, None)`` otherwise."""
        items = self._binding.resolve()
        index = self._find_index(items, key)
        if index < 0:
            return False, None
        return True, items[index]

    def get(self, key: K) -> V:
        """Return the element for ``key`` or raise :class:`KeyNotFoundError`."""
        found, value = self.try_get(key)
        if not found:
            raise KeyNotFoundError(key)
        return value

    def contains_key(self, key: K) -> bool:
        return self._find_index(self._binding.resolve(), key) >= 0

    def keys(self) -> List[K]:
        return [self._key_resolver(item) for item in self._binding.resolve()]

    def as_read_only(self) -> ReadOnlyListView:
        return ReadOnlyListView(self._binding)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, value: V) -> None:
        """
        Append ``value`` and dispatch ADDED.

        Raises:
            DuplicateKeyError: the derived key is already present. The list is
                left untouched and nothing is dispatched.
        """
        key = self._key_resolver(value)
        items = self._binding.resolve()
        if self._find_index(items, key) >= 0:
            raise DuplicateKeyError(key)
        items.append(value)
        self._listeners.dispatch(key, UpdateKind.ADDED, value)

    def set(self, value: V) -> None:
        """
        Upsert ``value`` by its derived key.

        A present key is replaced at its current position and UPDATED is
        dispatched. An absent key is appended exactly as :meth:`add` would,
        dispatching ADDED only.
        """
        key = self._key_resolver(value)
        items = self._binding.resolve()
        index = self._find_index(items, key)
        if index < 0:
            items.append(value)
            self._listeners.dispatch(key, UpdateKind.ADDED, value)
            return
        items[index] = value
        self._listeners.dispatch(key, UpdateKind.UPDATED, value)

    def remove(self, key: K) -> V:
        """
        Remove the element for ``key``, dispatch REMOVED and return it.

        Raises:
            KeyNotFoundError: no element has this key.
        """
        items = self._binding.resolve()
        index = self._find_index(items, key)
        if index < 0:
            raise KeyNotFoundError(
                key, f"Cannot remove an element with key {key!r}, because it does not exist"
            )
        return self._remove_at(items, index, key)

    def remove_data(self, value: V) -> V:
        """Remove the element sharing ``value``'s key; raises if absent."""
        return self.remove(self._key_resolver(value))

    def try_remove(self, key: K) -> bool:
        """Remove the element for ``key`` if present. Returns whether it was."""
        items = self._binding.resolve()
        index = self._find_index(items, key)
        if index < 0:
            return False
        self._remove_at(items, index, key)
        return True

    def remove_if_present(self, value: V) -> bool:
        """Remove the element sharing ``value``'s key if present."""
        return self.try_remove(self._key_resolver(value))

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def observe(self, key: K, kind: UpdateKind, callback: KeyListener) -> None:
        self._listeners.observe(key, kind, callback)

    def observe_and_fire_now(self, key: K, kind: UpdateKind, callback: KeyListener) -> None:
        """
        Call ``callback`` right away with the element for ``key``, then observe.

        Raises:
            KeyNotFoundError: ``key`` has no element; nothing is registered.
        """
        self._listeners.observe_and_fire_now(key, kind, callback, self.get)

    def observe_any(self, kind: UpdateKind, callback: KeyListener) -> None:
        self._listeners.observe_any(kind, callback)

    def stop_observing(self, key: K, kind: UpdateKind, callback: KeyListener) -> None:
        self._listeners.stop_observing(key, kind, callback)

    def stop_observing_any(self, kind: UpdateKind, callback: KeyListener) -> None:
        self._listeners.stop_observing_any(kind, callback)

    def stop_observing_key(self, key: K) -> None:
        self._listeners.stop_observing_key(key)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _find_index(self, items, key: K) -> int:
        resolver = self._key_resolver
        for index, item in enumerate(items):
            if resolver(item) == key:
                return index
        return -1

    def _remove_at(self, items, index: int, key: K) -> V:
        removed = items[index]
        del items[index]
        self._listeners.dispatch(key, UpdateKind.REMOVED, removed)
        return removed

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[V]:
        return iter(self._binding.resolve())

    def __contains__(self, key: object) -> bool:
        return self.contains_key(key)

    def __repr__(self) -> str:
        try:
            items = repr(list(self._binding.resolve()))
        except LookupError:
            items = "<unresolved>"
        return f"IdList({items})"
