"""
StateBox Errors
===============

Every error raised by a container, the listener registry or the config
registry derives from :class:`StateBoxError`. Each one also derives from the
builtin exception a Python caller would expect for the same failure, so
``except KeyError`` keeps working around an ``IdList.get`` call.
"""


class StateBoxError(Exception):
    """Base class for all statebox errors."""

    pass


class KeyNotFoundError(StateBoxError, KeyError):
    """Raised when a key-addressed lookup or removal targets an absent key."""

    def __init__(self, key, message=None):
        self.key = key
        super().__init__(message or f"Can not find an element for key {key!r}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class DuplicateKeyError(StateBoxError, KeyError):
    """Raised when an add-style operation targets a key that already exists."""

    def __init__(self, key, message=None):
        self.key = key
        super().__init__(
            message or f"Cannot add an element with key {key!r}, because it already exists"
        )

    def __str__(self) -> str:
        return str(self.args[0])


class IndexOutOfRangeError(StateBoxError, IndexError):
    """Raised when a list index falls outside ``[0, count)``."""

    def __init__(self, index, count: int):
        self.index = index
        self.count = count
        super().__init__(f"Index {index!r} is out of range for a list of {count} elements")


class InvalidUpdateKindError(StateBoxError, ValueError):
    """Raised when something other than an UpdateKind member reaches a registry."""

    def __init__(self, kind):
        self.kind = kind
        super().__init__(f"Wrong update kind: {kind!r}")


class StorageUnavailableError(StateBoxError, LookupError):
    """Raised when a deferred storage binding cannot resolve its store yet."""

    pass


class InvalidSelectionError(StateBoxError, ValueError):
    """Raised when an enum selector holds a name that is not a member."""

    pass
