"""Entity instances, typed field access and handler dispatch."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

from pydantic import (
    Field, StrictBool, StrictFloat, StrictInt, StrictStr,
    TypeAdapter, ValidationError,
)

from ldtk.errors import FieldDecodeError, FieldNotFoundError
from ldtk.model import LDtkModel
from storage.base import Storage

if TYPE_CHECKING:
    from ldtk.project import Project

logger = logging.getLogger(__name__)


_STRING = TypeAdapter(StrictStr)
_INT = TypeAdapter(StrictInt)
_FLOAT = TypeAdapter(StrictFloat)
_BOOL = TypeAdapter(StrictBool)


class FieldInstance(LDtkModel):
    identifier: StrictStr = Field("", alias="__identifier")
    field_type: StrictStr = Field("", alias="__type")
    value: Any = Field(None, alias="__value")


class EntityInstance(LDtkModel):
    """A placed entity as exported by LDtk."""

    identifier: StrictStr = Field("", alias="__identifier")
    iid: StrictStr = ""
    px: tuple[StrictInt, StrictInt] = (0, 0)
    width: StrictInt = 0
    height: StrictInt = 0
    field_instances: list[FieldInstance] = Field(default_factory=list, alias="fieldInstances")

    @property
    def x(self) -> int:
        return self.px[0]

    @property
    def y(self) -> int:
        return self.px[1]

    def field(self, name: str) -> Optional[FieldInstance]:
        """First field instance called ``name``, or None."""
        for f in self.field_instances:
            if f.identifier == name:
                return f
        return None

    def _decode(self, name: str, adapter: TypeAdapter, zero: Any) -> Any:
        f = self.field(name)
        if f is None:
            raise FieldNotFoundError(f"field '{name}' not found")
        # LDtk writes null for unset optional fields
        if f.value is None:
            return zero
        try:
            return adapter.validate_python(f.value)
        except ValidationError as e:
            raise FieldDecodeError(
                f"field '{name}' of entity '{self.identifier}' has an incompatible value: {f.value!r}"
            ) from e

    # ── Typed accessors ────────────────────────────────────────────────

    def get_string_field(self, name: str) -> str:
        return self._decode(name, _STRING, "")

    def get_int_field(self, name: str) -> int:
        return self._decode(name, _INT, 0)

    def get_float_field(self, name: str) -> float:
        return float(self._decode(name, _FLOAT, 0.0))

    def get_bool_field(self, name: str) -> bool:
        return self._decode(name, _BOOL, False)

    def string_field_or(self, name: str, default: str) -> str:
        try:
            return self.get_string_field(name)
        except (FieldNotFoundError, FieldDecodeError):
            return default

    def int_field_or(self, name: str, default: int) -> int:
        try:
            return self.get_int_field(name)
        except (FieldNotFoundError, FieldDecodeError):
            return default

    def float_field_or(self, name: str, default: float) -> float:
        try:
            return self.get_float_field(name)
        except (FieldNotFoundError, FieldDecodeError):
            return default

    def bool_field_or(self, name: str, default: bool) -> bool:
        try:
            return self.get_bool_field(name)
        except (FieldNotFoundError, FieldDecodeError):
            return default


EntityHandler = Callable[[EntityInstance, Storage], None]


class EntityRegistry:
    """Maps LDtk entity identifiers to the handlers that materialise them."""

    def __init__(self) -> None:
        self._handlers: dict[str, EntityHandler] = {}

    def register(self, entity_type: str, handler: EntityHandler) -> None:
        self._handlers[entity_type] = handler

    def handles(self, entity_type: str) -> Callable[[EntityHandler], EntityHandler]:
        """Decorator form of register()."""
        def decorator(handler: EntityHandler) -> EntityHandler:
            self.register(entity_type, handler)
            return handler
        return decorator

    def get(self, entity_type: str) -> Optional[EntityHandler]:
        return self._handlers.get(entity_type)

    def __contains__(self, entity_type: object) -> bool:
        return entity_type in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)


def load_entities(
    project: Project,
    level_name: str,
    storage: Storage,
    registry: EntityRegistry,
) -> int:
    """Run the registered handler for every entity instance in a level.

    Instances without a handler are logged and skipped. The first handler
    that raises aborts the load. Returns the number of instances handled.
    """
    if not project.has_level(level_name):
        logger.warning(f"Level '{level_name}' not found")
        return 0
    level = project.get_level(level_name)

    processed = 0
    for instances in level.entity_layers.values():
        for entity in instances:
            handler = registry.get(entity.identifier)
            if handler is None:
                logger.warning(f"No handler registered for entity type: {entity.identifier}")
                continue
            handler(entity, storage)
            processed += 1
    return processed
