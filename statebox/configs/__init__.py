"""
StateBox Configs
================

Static configuration helpers that feed the observable containers:

- ConfigsProvider: typed registry of id-indexed config collections
- EnumSelector: string-backed enum selection
"""

from .enum_selector import EnumSelector
from .provider import Config, ConfigsProvider

__all__ = [
    "Config",
    "ConfigsProvider",
    "EnumSelector",
]
