"""
StateBox Configs Provider - Typed Configuration Registry
========================================================

Holds the static configuration data of an application (game design tables,
imported spreadsheet rows and the like). Each config type is registered once
with its full list of rows; rows are indexed by their ``config_id`` into an
immutable mapping and looked up by type.

The provider has no notification behaviour. It is typically used to seed the
initial contents of observable containers:

```python
provider = ConfigsProvider()
provider.add_configs(WeaponConfig, rows)

weapons = IdList(lambda w: w.config_id, provider.get_configs_list(WeaponConfig))
```
"""

import logging
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Protocol, Type, TypeVar, runtime_checkable

from ..errors import DuplicateKeyError, KeyNotFoundError

logger = logging.getLogger(__name__)


@runtime_checkable
class Config(Protocol):
    """A configuration row identified by an integer id."""

    @property
    def config_id(self) -> int: ...


C = TypeVar("C", bound=Config)


class ConfigsProvider:
    """Registry of immutable, id-indexed config collections keyed by config type."""

    def __init__(self) -> None:
        self._configs: Dict[type, Mapping[int, Config]] = {}

    def add_configs(self, config_type: Type[C], configs: Iterable[C]) -> None:
        """
        Register every row of ``config_type``.

        Raises:
            DuplicateKeyError: the type is already registered, or two rows share
                a ``config_id``.
        """
        if config_type in self._configs:
            raise DuplicateKeyError(
                config_type, f"Configs of type {config_type.__name__} are already registered"
            )

        indexed: Dict[int, C] = {}
        for config in configs:
            if config.config_id in indexed:
                raise DuplicateKeyError(
                    config.config_id,
                    f"Duplicate config id {config.config_id!r} for {config_type.__name__}",
                )
            indexed[config.config_id] = config

        self._configs[config_type] = MappingProxyType(indexed)
        logger.debug("Registered %d configs of type %s", len(indexed), config_type.__name__)

    def has_configs(self, config_type: type) -> bool:
        return config_type in self._configs

    def get_configs_dictionary(self, config_type: Type[C]) -> Mapping[int, C]:
        try:
            return self._configs[config_type]
        except KeyError:
            raise KeyNotFoundError(
                config_type, f"No configs registered for type {config_type.__name__}"
            ) from None

    def get_configs_list(self, config_type: Type[C]) -> List[C]:
        """A new list of the rows of ``config_type``, in registration order."""
        return list(self.get_configs_dictionary(config_type).values())

    def get_config(self, config_type: Type[C], config_id: int) -> C:
        configs = self.get_configs_dictionary(config_type)
        try:
            return configs[config_id]
        except KeyError:
            raise KeyNotFoundError(
                config_id, f"No {config_type.__name__} config with id {config_id!r}"
            ) from None
