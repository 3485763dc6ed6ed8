"""Entity storage interface consumed by the level loaders."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class StorageError(Exception):
    """A storage operation was rejected; nothing was created."""


class Archetype(ABC):
    """A fixed component layout that entities can be generated from."""

    @property
    @abstractmethod
    def components(self) -> tuple[type, ...]:
        ...

    @abstractmethod
    def generate(self, count: int, *values: Any) -> None:
        """Create ``count`` entities, each holding a copy of ``values``."""
        ...


class Storage(ABC):
    """All storages must create entities and hand out archetypes."""

    @abstractmethod
    def new_entities(self, count: int, *components: type) -> list:
        """Create ``count`` entities with default-valued components."""
        ...

    @abstractmethod
    def new_or_existing_archetype(self, *components: type) -> Archetype:
        ...
