"""
StateBox Storage Binding - How a Container Reaches Its Backing Store
====================================================================

A container never talks to its backing store directly. It holds a
:class:`StorageBinding` and asks it for the store on every read and write.

Two strategies are provided:

- :class:`OwnedStorage` keeps one store instance fixed at construction.
- :class:`DeferredStorage` holds a resolver function and calls it on every
  access. The store can therefore be created after the container (for example
  once an asynchronous load finishes), or swapped by whoever owns it, without
  rebuilding the container.

Fields hold a single value, so their store is a cell exposing ``.value``:
:class:`ValueCell` owns the value, :class:`AccessorCell` forwards to a
getter/setter pair owned elsewhere.

Example:
    ```python
    from statebox.util import DeferredStorage

    state = {}
    binding = DeferredStorage(lambda: state.get("inventory"))
    binding.resolve()                # raises StorageUnavailableError
    state["inventory"] = []
    binding.resolve()                # []
    ```
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import MutableMapping, MutableSequence
from typing import Any, Callable, Generic, Optional, Tuple, TypeVar, Union

from ..errors import StorageUnavailableError

logger = logging.getLogger(__name__)

S = TypeVar("S")
T = TypeVar("T")

StoreShape = Union[type, Tuple[type, ...]]


# ============================================================================
# SINGLE VALUE STORES
# ============================================================================


class ValueCell(Generic[T]):
    """A single owned slot."""

    __slots__ = ("value",)

    def __init__(self, value: T) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"ValueCell({self.value!r})"


class AccessorCell(Generic[T]):
    """A single slot whose value lives elsewhere, reached through a getter/setter pair."""

    __slots__ = ("_getter", "_setter")

    def __init__(self, getter: Callable[[], T], setter: Callable[[T], None]) -> None:
        self._getter = getter
        self._setter = setter

    @property
    def value(self) -> T:
        return self._getter()

    @value.setter
    def value(self, new_value: T) -> None:
        self._setter(new_value)


VALUE_CELL_TYPES = (ValueCell, AccessorCell)


# ============================================================================
# BINDINGS
# ============================================================================


class StorageBinding(ABC, Generic[S]):
    """Resolves the store a container reads from and writes to."""

    @abstractmethod
    def resolve(self) -> S:
        """Return the current store."""

    @property
    def is_deferred(self) -> bool:
        return False


class OwnedStorage(StorageBinding[S]):
    """A store instance fixed at construction."""

    __slots__ = ("_store",)

    def __init__(self, store: S) -> None:
        self._store = store

    def resolve(self) -> S:
        return self._store

    def __repr__(self) -> str:
        return f"OwnedStorage({type(self._store).__name__})"


class DeferredStorage(StorageBinding[S]):
    """
    A store reached through a resolver called on every access.

    The resolved store is never cached. A resolver returning ``None`` means
    the store does not exist yet and raises :class:`StorageUnavailableError`;
    any exception raised by the resolver itself propagates unchanged. When
    ``shape`` is given, a resolved store of another type raises ``TypeError``.
    """

    __slots__ = ("_resolver", "_shape")

    def __init__(
        self, resolver: Callable[[], Optional[S]], shape: Optional[StoreShape] = None
    ) -> None:
        if not callable(resolver):
            raise TypeError("DeferredStorage resolver must be callable")
        self._resolver = resolver
        self._shape = shape

    def resolve(self) -> S:
        store = self._resolver()
        if store is None:
            logger.debug("Deferred storage %r resolved to None", self._resolver)
            raise StorageUnavailableError(
                "The backing store is not available yet; its resolver returned None"
            )
        if self._shape is not None:
            _check_shape(store, self._shape)
        return store

    @property
    def is_deferred(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"DeferredStorage({self._resolver!r})"


def _is_store_instance(candidate: Any) -> bool:
    return isinstance(
        candidate, (MutableSequence, MutableMapping) + VALUE_CELL_TYPES
    )


def _check_shape(store: Any, shape: StoreShape) -> None:
    if not isinstance(store, shape):
        expected = shape if isinstance(shape, tuple) else (shape,)
        names = " or ".join(t.__name__ for t in expected)
        raise TypeError(f"Expected a {names} store, got {type(store).__name__}")


def bind_storage(
    store: Any,
    default_factory: Optional[Callable[[], Any]] = None,
    shape: Optional[StoreShape] = None,
) -> StorageBinding:
    """
    Normalize what a container constructor received into a binding.

    - a :class:`StorageBinding` is used as-is
    - a store instance (mutable sequence or mapping, value cell) is owned
    - any other callable becomes a :class:`DeferredStorage` resolver
    - ``None`` owns a fresh store from ``default_factory``

    ``shape`` is the store type the container works with. An owned store of
    another shape is rejected here with ``TypeError``; a deferred store is
    checked each time it resolves.
    """
    if isinstance(store, StorageBinding):
        return store
    if store is None:
        if default_factory is None:
            raise TypeError("A store, a resolver or a default factory is required")
        return OwnedStorage(default_factory())
    if _is_store_instance(store):
        if shape is not None:
            _check_shape(store, shape)
        return OwnedStorage(store)
    if callable(store):
        return DeferredStorage(store, shape)
    raise TypeError(f"Cannot bind storage of type {type(store).__name__}")
