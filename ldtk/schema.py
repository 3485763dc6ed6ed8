"""Pydantic models for the LDtk project JSON."""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import Field, StrictInt, StrictStr

from ldtk.entities import EntityInstance
from ldtk.model import LDtkModel


# ── Enums ──────────────────────────────────────────────────────────────────

class LayerType(str, enum.Enum):
    ENTITIES = "Entities"
    INT_GRID = "IntGrid"
    TILES = "Tiles"


# ── Levels and layers ──────────────────────────────────────────────────────

class GridTile(LDtkModel):
    """A tile placed on a Tiles layer. ``f`` is the flip bitmask."""
    src: tuple[StrictInt, StrictInt] = (0, 0)
    px: tuple[StrictInt, StrictInt] = (0, 0)
    t: StrictInt = 0
    f: StrictInt = 0


class LayerInstance(LDtkModel):
    identifier: StrictStr = Field("", alias="__identifier")
    layer_type: StrictStr = Field("", alias="__type")
    c_wid: StrictInt = Field(0, alias="__cWid")
    c_hei: StrictInt = Field(0, alias="__cHei")
    grid_size: StrictInt = Field(0, alias="__gridSize")
    int_grid_csv: list[StrictInt] = Field(default_factory=list, alias="intGridCsv")
    tileset_def_uid: Optional[StrictInt] = Field(None, alias="__tilesetDefUid")
    tileset_rel_path: Optional[StrictStr] = Field(None, alias="__tilesetRelPath")
    entity_instances: list[EntityInstance] = Field(default_factory=list, alias="entityInstances")
    grid_tiles: list[GridTile] = Field(default_factory=list, alias="gridTiles")


class LevelHeader(LDtkModel):
    """Identifier-only view of a level, decoded before the full level."""
    identifier: StrictStr = ""


class LevelDocument(LDtkModel):
    identifier: StrictStr = ""
    px_wid: StrictInt = Field(0, alias="pxWid")
    px_hei: StrictInt = Field(0, alias="pxHei")
    layer_instances: list[LayerInstance] = Field(default_factory=list, alias="layerInstances")


# ── Project ────────────────────────────────────────────────────────────────

class TilesetDef(LDtkModel):
    identifier: StrictStr = ""
    rel_path: Optional[StrictStr] = Field(None, alias="relPath")
    px_wid: StrictInt = Field(0, alias="pxWid")
    px_hei: StrictInt = Field(0, alias="pxHei")
    tile_grid_size: StrictInt = Field(0, alias="tileGridSize")
    uid: StrictInt = 0


class ProjectDefs(LDtkModel):
    tilesets: list[TilesetDef] = Field(default_factory=list)


class ProjectDocument(LDtkModel):
    """Top-level document. Levels stay raw so each can fail on its own."""
    levels: list[Any] = Field(default_factory=list)
    defs: ProjectDefs = Field(default_factory=ProjectDefs)
