"""
StateBox ObservableField - Single Value Container
=================================================

An ObservableField holds one value and notifies its listeners with
``UpdateKind.UPDATED`` every time the value is written, even when the new
value equals the old one.

The value is reached through a storage binding. It can be owned by the field,
live behind a getter/setter pair owned by another object, or be resolved
lazily from a cell that does not exist yet when the field is built.

Example:
    ```python
    from statebox import ObservableField, UpdateKind

    health = ObservableField(100)
    health.observe(UpdateKind.UPDATED, lambda hp: print(f"hp is now {hp}"))
    health.value = 80   # prints "hp is now 80"
    health.value = 80   # prints again, writes are never deduplicated
    ```

A field has no implicit conversion to its value; read ``field.value``
explicitly.
"""

from typing import Any, Callable, Generic, TypeVar

from ..update_kind import UpdateKind
from ..util.listener_registry import ListenerRegistry
from ..util.storage_binding import (
    VALUE_CELL_TYPES,
    AccessorCell,
    StorageBinding,
    ValueCell,
    bind_storage,
)

T = TypeVar("T")


class ObservableField(Generic[T]):
    """
    A single observable value.

    Args:
        initial_value: The value owned by a new field. Ignored when ``store``
            is given.
        store: A ``ValueCell``/``AccessorCell``, a resolver returning one, or
            any ``StorageBinding``.
    """

    __slots__ = ("_binding", "_listeners")

    def __init__(self, initial_value: T = None, *, store: Any = None) -> None:
        self._binding: StorageBinding = bind_storage(
            store,
            default_factory=lambda: ValueCell(initial_value),
            shape=VALUE_CELL_TYPES,
        )
        self._listeners: ListenerRegistry = ListenerRegistry(pass_key=False)

    @classmethod
    def from_accessors(
        cls, getter: Callable[[], T], setter: Callable[[T], None]
    ) -> "ObservableField[T]":
        """Build a field over a value owned elsewhere."""
        return cls(store=AccessorCell(getter, setter))

    @property
    def value(self) -> T:
        return self._binding.resolve().value

    @value.setter
    def value(self, new_value: T) -> None:
        self.set(new_value)

    def get(self) -> T:
        return self.value

    def set(self, new_value: T) -> None:
        """Write ``new_value`` and dispatch UPDATED."""
        self._binding.resolve().value = new_value
        self._listeners.dispatch(None, UpdateKind.UPDATED, new_value)

    def observe(self, kind: UpdateKind, callback: Callable[[T], None]) -> None:
        """
        Call ``callback(value)`` on every mutation of ``kind``.

        Only UPDATED ever fires for a field; ADDED and REMOVED listeners are
        accepted and stay silent.
        """
        self._listeners.observe_any(kind, callback)

    def stop_observing(self, kind: UpdateKind, callback: Callable[[T], None]) -> None:
        self._listeners.stop_observing_any(kind, callback)

    def __repr__(self) -> str:
        try:
            current = repr(self.value)
        except LookupError:
            current = "<unresolved>"
        return f"ObservableField({current})"
