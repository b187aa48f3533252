"""
StateBox Containers
===================

The four observable container shapes:

- ObservableField: a single value
- ObservableList: an index-addressed sequence
- IdList: a sequence addressed by a key derived from each element
- ObservableDictionary: a key-addressed map
"""

from .dictionary import ObservableDictionary
from .field import ObservableField
from .id_list import IdList
from .sequence import ObservableList

__all__ = [
    "ObservableField",
    "ObservableList",
    "IdList",
    "ObservableDictionary",
]
