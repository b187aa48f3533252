"""
StateBox Update Kinds
=====================

The shared vocabulary every container uses to classify a mutation.
"""

from enum import Enum


class UpdateKind(Enum):
    """Classification of a container mutation."""

    ADDED = "added"
    UPDATED = "updated"
    REMOVED = "removed"

    def __str__(self) -> str:
        return self.value
