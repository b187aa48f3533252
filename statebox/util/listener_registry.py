"""
StateBox Listener Registry - Per-Key and Per-Kind Listener Bookkeeping
======================================================================

This module provides the listener bookkeeping shared by every container in
statebox. A registry keeps two kinds of listeners:

- **Keyed listeners** are registered against one key and one update kind and
  only run for mutations of that key with that kind.
- **Broadcast listeners** are registered against an update kind alone and run
  for every mutation of that kind, whatever the key.

Dispatch order is fixed: keyed listeners for ``(key, kind)`` in registration
order, then broadcast listeners for ``kind`` in registration order.
Listeners run inline on the mutating call. An exception raised by a listener
propagates to the caller that triggered the mutation and the remaining
listeners for that dispatch are skipped.

Registering the same callback twice keeps both registrations; it then runs
twice per dispatch and has to be stopped twice.

Example:
    ```python
    from statebox import UpdateKind
    from statebox.util import ListenerRegistry

    registry = ListenerRegistry()
    registry.observe("hp", UpdateKind.UPDATED, lambda k, v: print(k, v))
    registry.dispatch("hp", UpdateKind.UPDATED, 10)  # prints "hp 10"
    ```
"""

import logging
from typing import Any, Callable, Dict, Generic, Hashable, List, Optional, TypeVar

from ..errors import InvalidUpdateKindError
from ..update_kind import UpdateKind

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

Listener = Callable[..., None]

_BROADCAST = object()


class KindBuckets:
    """
    One ordered listener list per update kind.

    The bucket for a kind is selected by matching every member of
    :class:`UpdateKind` explicitly; anything else raises
    :class:`InvalidUpdateKindError`.
    """

    __slots__ = ("added", "updated", "removed")

    def __init__(self) -> None:
        self.added: List[Listener] = []
        self.updated: List[Listener] = []
        self.removed: List[Listener] = []

    def bucket(self, kind: UpdateKind) -> List[Listener]:
        if kind is UpdateKind.ADDED:
            return self.added
        if kind is UpdateKind.UPDATED:
            return self.updated
        if kind is UpdateKind.REMOVED:
            return self.removed
        raise InvalidUpdateKindError(kind)

    def is_empty(self) -> bool:
        return not (self.added or self.updated or self.removed)

    def __len__(self) -> int:
        return len(self.added) + len(self.updated) + len(self.removed)


def _remove_first(listeners: List[Listener], callback: Listener) -> bool:
    try:
        listeners.remove(callback)
    except ValueError:
        return False
    return True


class ListenerRegistry(Generic[K, V]):
    """
    Keyed and broadcast listener registrations for one container.

    Args:
        pass_key: When true (the default) listeners are called as
            ``callback(key, value)``. Containers without keys, such as
            ObservableField, pass ``False`` so listeners receive only the value.
    """

    __slots__ = ("_keyed", "_broadcast", "_pass_key")

    def __init__(self, pass_key: bool = True) -> None:
        self._keyed: Dict[K, KindBuckets] = {}
        self._broadcast = KindBuckets()
        self._pass_key = pass_key

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def observe(self, key: K, kind: UpdateKind, callback: Listener) -> None:
        """Register ``callback`` for mutations of ``key`` with ``kind``."""
        buckets = self._keyed.get(key)
        if buckets is None:
            buckets = KindBuckets()
            # validate before the key entry is created
            buckets.bucket(kind)
            self._keyed[key] = buckets
        buckets.bucket(kind).append(callback)
        logger.debug("Observing key %r for %s with %r", key, kind, callback)

    def observe_any(self, kind: UpdateKind, callback: Listener) -> None:
        """Register ``callback`` for every mutation with ``kind``."""
        self._broadcast.bucket(kind).append(callback)
        logger.debug("Observing any key for %s with %r", kind, callback)

    def observe_and_fire_now(
        self,
        key: K,
        kind: UpdateKind,
        callback: Listener,
        lookup: Callable[[K], V],
    ) -> None:
        """
        Invoke ``callback`` with the element currently held for ``key``, then
        register it as :meth:`observe` does.

        ``lookup`` is the owning container's strict getter; its missing-key
        error propagates and nothing is registered in that case.
        """
        # fail on a bad kind before running the callback
        self._broadcast.bucket(kind)
        current = lookup(key)
        self._invoke(callback, key, current)
        self.observe(key, kind, callback)

    def stop_observing(self, key: K, kind: UpdateKind, callback: Listener) -> None:
        """Remove one registration of ``callback`` for ``(key, kind)`` if present."""
        buckets = self._keyed.get(key)
        if buckets is None:
            # still reject unknown kinds
            self._broadcast.bucket(kind)
            return
        if _remove_first(buckets.bucket(kind), callback):
            logger.debug("Stopped observing key %r for %s with %r", key, kind, callback)
        if buckets.is_empty():
            del self._keyed[key]

    def stop_observing_any(self, kind: UpdateKind, callback: Listener) -> None:
        """Remove one broadcast registration of ``callback`` for ``kind`` if present."""
        if _remove_first(self._broadcast.bucket(kind), callback):
            logger.debug("Stopped observing any key for %s with %r", kind, callback)

    def stop_observing_key(self, key: K) -> None:
        """Drop every keyed listener for ``key``. Broadcast listeners are kept."""
        buckets = self._keyed.pop(key, None)
        if buckets is not None:
            logger.debug("Stopped observing key %r (%d listeners)", key, len(buckets))

    def clear(self) -> None:
        """Drop every keyed and broadcast registration."""
        self._keyed.clear()
        self._broadcast = KindBuckets()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, key: Optional[K], kind: UpdateKind, value: V) -> None:
        """
        Run the keyed listeners for ``(key, kind)`` then the broadcast
        listeners for ``kind``.

        Each bucket is copied before it runs, so a listener that registers or
        unregisters during dispatch only affects later dispatches.
        """
        broadcast = tuple(self._broadcast.bucket(kind))
        buckets = self._keyed.get(key)
        keyed = tuple(buckets.bucket(kind)) if buckets is not None else ()

        if not keyed and not broadcast:
            return

        logger.debug(
            "Dispatching %s for key %r to %d keyed and %d broadcast listeners",
            kind,
            key,
            len(keyed),
            len(broadcast),
        )
        for callback in keyed:
            self._invoke(callback, key, value)
        for callback in broadcast:
            self._invoke(callback, key, value)

    def _invoke(self, callback: Listener, key: Optional[K], value: V) -> None:
        if self._pass_key:
            callback(key, value)
        else:
            callback(value)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def listener_count(self, kind: UpdateKind, key: Any = _BROADCAST) -> int:
        """
        Number of registrations for ``kind``.

        With a ``key`` only the keyed registrations for that key are counted,
        otherwise only the broadcast ones.
        """
        if key is _BROADCAST:
            return len(self._broadcast.bucket(kind))
        buckets = self._keyed.get(key)
        if buckets is None:
            self._broadcast.bucket(kind)
            return 0
        return len(buckets.bucket(kind))

    def has_listeners(self, key: K) -> bool:
        return key in self._keyed

    def __repr__(self) -> str:
        return (
            f"ListenerRegistry(keys={len(self._keyed)}, "
            f"broadcast={len(self._broadcast)})"
        )
