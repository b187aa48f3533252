"""
StateBox ObservableDictionary - Key-Addressed Observable Map
============================================================

An ObservableDictionary wraps a mutable mapping and notifies listeners when a
key is added, reassigned or removed. Listeners are called as
``callback(key, value)``.

Upsert and removal policy:

- ``set`` (and ``d[key] = value``) fires ADDED when the key was absent and
  UPDATED when it was present, so ``set`` on a new key is observably the same
  as ``add``.
- ``remove`` on an absent key returns ``False`` and fires nothing.
"""

from collections.abc import MutableMapping
from typing import (
    Any,
    Callable,
    Generic,
    Hashable,
    ItemsView,
    Iterable,
    Iterator,
    KeysView,
    Optional,
    Tuple,
    TypeVar,
    ValuesView,
)

from ..errors import DuplicateKeyError, KeyNotFoundError
from ..update_kind import UpdateKind
from ..util.listener_registry import ListenerRegistry
from ..util.storage_binding import StorageBinding, bind_storage
from ..util.views import ReadOnlyDictView

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

KeyListener = Callable[[K, V], None]


class ObservableDictionary(Generic[K, V]):
    """
    Observable key-addressed map.

    Args:
        store: The backing mapping, a resolver returning it, or a
            ``StorageBinding``. The mapping is wrapped, not copied. A fresh
            ``dict`` is owned when omitted.
    """

    __slots__ = ("_binding", "_listeners")

    def __init__(self, store: Any = None) -> None:
        self._binding: StorageBinding = bind_storage(
            store, default_factory=dict, shape=MutableMapping
        )
        self._listeners: ListenerRegistry = ListenerRegistry()

    @classmethod
    def from_list(
        cls, key_resolver: Callable[[V], K], items: Iterable[V]
    ) -> "ObservableDictionary[K, V]":
        """
        Build a dictionary keyed by ``key_resolver`` from a sequence.

        Raises:
            DuplicateKeyError: two items resolve to the same key.
        """
        mapping = {}
        for item in items:
            key = key_resolver(item)
            if key in mapping:
                raise DuplicateKeyError(key)
            mapping[key] = item
        return cls(mapping)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def count(self) -> int:
        return len(self._binding.resolve())

    def get(self, key: K) -> V:
        """Return the value for ``key`` or raise :class:`KeyNotFoundError`."""
        mapping = self._binding.resolve()
        # a mapping with __missing__ would insert a default on lookup
        if key not in mapping:
            raise KeyNotFoundError(key)
        return mapping[key]

    def try_get(self, key: K) -> Tuple[bool, Optional[V]]:
        mapping = self._binding.resolve()
        if key in mapping:
            return True, mapping[key]
        return False, None

    def contains_key(self, key: K) -> bool:
        return key in self._binding.resolve()

    def keys(self) -> KeysView:
        return self._binding.resolve().keys()

    def values(self) -> ValuesView:
        return self._binding.resolve().values()

    def items(self) -> ItemsView:
        return self._binding.resolve().items()

    def as_read_only(self) -> ReadOnlyDictView:
        return ReadOnlyDictView(self._binding)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set(self, key: K, value: V) -> None:
        """Upsert ``value`` under ``key``; ADDED if new, UPDATED otherwise."""
        mapping = self._binding.resolve()
        kind = UpdateKind.UPDATED if key in mapping else UpdateKind.ADDED
        mapping[key] = value
        self._listeners.dispatch(key, kind, value)

    def add(self, key: K, value: V) -> None:
        """
        Insert ``value`` under a new ``key`` and dispatch ADDED.

        Raises:
            DuplicateKeyError: ``key`` is already present; the stored value is
                kept and nothing is dispatched.
        """
        mapping = self._binding.resolve()
        if key in mapping:
            raise DuplicateKeyError(key)
        mapping[key] = value
        self._listeners.dispatch(key, UpdateKind.ADDED, value)

    def remove(self, key: K) -> bool:
        """Remove ``key`` if present and dispatch REMOVED. Returns whether it was."""
        mapping = self._binding.resolve()
        if key not in mapping:
            return False
        removed = mapping.pop(key)
        self._listeners.dispatch(key, UpdateKind.REMOVED, removed)
        return True

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def observe(self, key: K, kind: UpdateKind, callback: KeyListener) -> None:
        self._listeners.observe(key, kind, callback)

    def observe_and_fire_now(self, key: K, kind: UpdateKind, callback: KeyListener) -> None:
        """
        Call ``callback`` right away with the value for ``key``, then observe.

        Raises:
            KeyNotFoundError: ``key`` is absent; nothing is registered.
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

    # Magic methods mirror the explicit surface
    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[K]:
        return iter(self._binding.resolve())

    def __contains__(self, key: object) -> bool:
        return self.contains_key(key)

    def __getitem__(self, key: K) -> V:
        return self.get(key)

    def __setitem__(self, key: K, value: V) -> None:
        self.set(key, value)

    def __delitem__(self, key: K) -> None:
        if not self.remove(key):
            raise KeyNotFoundError(key)

    def __repr__(self) -> str:
        try:
            items = repr(dict(self._binding.resolve()))
        except LookupError:
            items = "<unresolved>"
        return f"ObservableDictionary({items})"
