"""
StateBox Utils - Shared Container Internals
===========================================

This package contains the pieces every container is built from.

Classes:
- ListenerRegistry: keyed and broadcast listener bookkeeping
- KindBuckets: one listener list per update kind
- StorageBinding: how a container resolves its backing store
- OwnedStorage / DeferredStorage: the two binding strategies
- ValueCell / AccessorCell: single value stores used by fields
- ReadOnlyListView / ReadOnlyDictView: live read-only views
"""

from .listener_registry import KindBuckets, Listener, ListenerRegistry
from .storage_binding import (
    AccessorCell,
    DeferredStorage,
    OwnedStorage,
    StorageBinding,
    ValueCell,
    bind_storage,
)
from .views import ReadOnlyDictView, ReadOnlyListView

__all__ = [
    "ListenerRegistry",
    "KindBuckets",
    "Listener",
    "StorageBinding",
    "OwnedStorage",
    "DeferredStorage",
    "ValueCell",
    "AccessorCell",
    "bind_storage",
    "ReadOnlyListView",
    "ReadOnlyDictView",
]
