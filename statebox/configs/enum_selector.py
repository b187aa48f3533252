"""
StateBox EnumSelector - String-Backed Enum Selection
====================================================

An EnumSelector stores an enum selection as the member *name*. Serialized
data (config rows, editor assets) then survives reordering of the enum's
members, and a renamed or deleted member shows up as an invalid selection
instead of silently pointing at another member.

Subclasses bind the enum they select from:

```python
class Element(Enum):
    FIRE = 1
    WATER = 2

class ElementSelector(EnumSelector[Element]):
    enum_type = Element

selector = ElementSelector.from_value(Element.WATER)
selector.selection          # "WATER"
selector.value              # Element.WATER
ElementSelector.choices()   # ["FIRE", "WATER"]
```

Conversions between the selector and the member are explicit; rendering and
repairing invalid selections belong to whatever editor displays them.
"""

from enum import Enum
from typing import ClassVar, Generic, List, Optional, Type, TypeVar

from ..errors import InvalidSelectionError

E = TypeVar("E", bound=Enum)


class EnumSelector(Generic[E]):
    """A selection of one member of ``enum_type``, stored by name."""

    enum_type: ClassVar[Type[Enum]]

    __slots__ = ("_selection",)

    def __init__(self, selection: Optional[str] = None) -> None:
        if selection is None:
            selection = next(iter(self._enum())).name
        self._selection = selection

    @classmethod
    def from_value(cls, member: E) -> "EnumSelector[E]":
        return cls(cls._check_member(member).name)

    @classmethod
    def _enum(cls) -> Type[Enum]:
        enum_type = getattr(cls, "enum_type", None)
        if enum_type is None:
            raise TypeError(f"{cls.__name__} must define enum_type")
        return enum_type

    @classmethod
    def _check_member(cls, member: E) -> E:
        if not isinstance(member, cls._enum()):
            raise TypeError(
                f"{member!r} is not a member of {cls._enum().__name__}"
            )
        return member

    @classmethod
    def choices(cls) -> List[str]:
        """Member names sorted alphabetically, as an editor would list them."""
        return sorted(cls._enum().__members__)

    @property
    def selection(self) -> str:
        return self._selection

    @property
    def value(self) -> E:
        try:
            return self._enum()[self._selection]
        except KeyError:
            raise InvalidSelectionError(
                f"Invalid enum constant: {self._enum().__name__}.{self._selection}"
            ) from None

    def set_value(self, member: E) -> None:
        self._selection = self._check_member(member).name

    def has_valid_selection(self) -> bool:
        return self._selection in self._enum().__members__

    def __eq__(self, other: object) -> bool:
        if isinstance(other, EnumSelector) and type(other) is type(self):
            return self._selection == other._selection
        return NotImplemented

    def __hash__(self) -> int:
        return hash((type(self), self._selection))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._selection!r})"
