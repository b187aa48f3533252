"""
StateBox - Observable Containers for Application State
======================================================

In-memory, typed containers that tell interested listeners whenever their
contents are added, updated or removed. A subsystem can mutate a container
without knowing who reads it, and readers react to a specific key or to every
change of one kind without polling.

Containers reach their backing store through a storage binding: they either
own it or resolve it through an accessor on every access, so the store may
be created later or replaced by its owner.
"""

__version__ = "0.1.0"

from .configs import Config, ConfigsProvider, EnumSelector
from .containers import IdList, ObservableDictionary, ObservableField, ObservableList
from .errors import (
    DuplicateKeyError,
    IndexOutOfRangeError,
    InvalidSelectionError,
    InvalidUpdateKindError,
    KeyNotFoundError,
    StateBoxError,
    StorageUnavailableError,
)
from .update_kind import UpdateKind
from .util import DeferredStorage, ListenerRegistry, OwnedStorage, StorageBinding
from .value_data import PairData

__all__ = [
    "__version__",
    # Containers
    "ObservableField",
    "ObservableList",
    "IdList",
    "ObservableDictionary",
    # Shared vocabulary
    "UpdateKind",
    "ListenerRegistry",
    "StorageBinding",
    "OwnedStorage",
    "DeferredStorage",
    # Configuration data
    "ConfigsProvider",
    "Config",
    "EnumSelector",
    "PairData",
    # Exceptions
    "StateBoxError",
    "KeyNotFoundError",
    "DuplicateKeyError",
    "IndexOutOfRangeError",
    "InvalidUpdateKindError",
    "StorageUnavailableError",
    "InvalidSelectionError",
]
