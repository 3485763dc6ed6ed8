"""In-memory entity storage."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Optional

from storage.base import Archetype, Storage, StorageError


@dataclass
class Entity:
    id: int
    components: dict[type, Any] = field(default_factory=dict)

    def get(self, component: type) -> Optional[Any]:
        return self.components.get(component)

    def has(self, *components: type) -> bool:
        return all(c in self.components for c in components)


class MemoryArchetype(Archetype):
    def __init__(self, storage: MemoryStorage, components: tuple[type, ...]):
        self._storage = storage
        self._components = components

    @property
    def components(self) -> tuple[type, ...]:
        return self._components

    def generate(self, count: int, *values: Any) -> None:
        by_type: dict[type, Any] = {}
        for v in values:
            if type(v) not in self._components:
                raise StorageError(
                    f"{type(v).__name__} is not part of archetype "
                    f"({', '.join(c.__name__ for c in self._components)})"
                )
            by_type[type(v)] = v
        self._storage._create(count, self._components, by_type)


class MemoryStorage(Storage):
    """Keeps entities in a list. Ids are unique per storage instance."""

    def __init__(self) -> None:
        self.entities: list[Entity] = []
        self._archetypes: dict[frozenset[type], MemoryArchetype] = {}
        self._next_id = 1

    def new_entities(self, count: int, *components: type) -> list[Entity]:
        return self._create(count, components, {})

    def new_or_existing_archetype(self, *components: type) -> MemoryArchetype:
        if not components:
            raise StorageError("An archetype needs at least one component")
        key = frozenset(components)
        if len(key) != len(components):
            raise StorageError("Duplicate component in archetype")
        archetype = self._archetypes.get(key)
        if archetype is None:
            archetype = MemoryArchetype(self, tuple(components))
            self._archetypes[key] = archetype
        return archetype

    def query(self, *components: type) -> list[Entity]:
        """Entities holding every one of ``components``."""
        return [e for e in self.entities if e.has(*components)]

    def __len__(self) -> int:
        return len(self.entities)

    def _create(self, count: int, components: tuple[type, ...], values: dict[type, Any]) -> list[Entity]:
        if count < 0:
            raise StorageError(f"Cannot create {count} entities")
        # Build everything first so a failure leaves the storage untouched
        created: list[Entity] = []
        for i in range(count):
            comps: dict[type, Any] = {}
            for c in components:
                if c in values:
                    comps[c] = copy.deepcopy(values[c])
                    continue
                try:
                    comps[c] = c()
                except TypeError as e:
                    raise StorageError(f"{c.__name__} has no default value") from e
            created.append(Entity(id=self._next_id + i, components=comps))
        self._next_id += count
        self.entities.extend(created)
        return created
