"""Project parsing: source selection, decoding and the per-level cache."""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Protocol

import numpy as np
from pydantic import ValidationError

from config_io.config import Config, SourceConfig
from ldtk.entities import EntityInstance
from ldtk.errors import LevelNotFoundError, ProjectFormatError, ProjectReadError
from ldtk.layers import TileLayerData, classify_layers
from ldtk.schema import LayerInstance, LevelDocument, LevelHeader, ProjectDocument, TilesetDef

logger = logging.getLogger(__name__)


class AssetSource(Protocol):
    """Anything that resolves names to readable files.

    ``pathlib.Path`` directories and ``importlib.resources.files()`` both fit.
    """

    def joinpath(self, *descendants: str) -> Any:
        ...


@dataclass(frozen=True)
class ParsedLevel:
    """A decoded level with its layers pre-sorted by kind.

    Shared by every caller of the owning Project; treat as read-only.
    """
    identifier: str
    px_wid: int
    px_hei: int
    layer_instances: list[LayerInstance]
    entity_layers: dict[str, list[EntityInstance]]
    int_grid_layers: dict[str, np.ndarray]
    tile_layers: dict[str, TileLayerData]
    raw: Any = None


class Project:
    """Parsed LDtk project. Build it with parse_project()."""

    def __init__(self, document: ProjectDocument, levels: dict[str, ParsedLevel]):
        self.document = document
        self._levels = levels

    @property
    def raw_levels(self) -> list[Any]:
        return self.document.levels

    @property
    def tilesets(self) -> list[TilesetDef]:
        return self.document.defs.tilesets

    @property
    def level_names(self) -> list[str]:
        return list(self._levels)

    def has_level(self, level_name: str) -> bool:
        return level_name in self._levels

    def get_level(self, level_name: str) -> ParsedLevel:
        level = self._levels.get(level_name)
        if level is None:
            raise LevelNotFoundError(f"level '{level_name}' not found")
        return level

    def width_for(self, level_name: str) -> int:
        """Level width in pixels, 0 if the level is unknown."""
        level = self._levels.get(level_name)
        if level is None:
            logger.warning(f"Level '{level_name}' not found")
            return 0
        return level.px_wid

    def height_for(self, level_name: str) -> int:
        """Level height in pixels, 0 if the level is unknown."""
        level = self._levels.get(level_name)
        if level is None:
            logger.warning(f"Level '{level_name}' not found")
            return 0
        return level.px_hei

    def tileset_for(self, uid: int) -> Optional[TilesetDef]:
        for ts in self.tilesets:
            if ts.uid == uid:
                return ts
        return None

    def cell_size_for(self, level_name: str, layer_identifier: str) -> int:
        """Grid size of the first layer called ``layer_identifier``, else 0."""
        level = self._levels.get(level_name)
        if level is None:
            return 0
        for layer in level.layer_instances:
            if layer.identifier == layer_identifier:
                return layer.grid_size
        return 0


# ── Source selection ───────────────────────────────────────────────────────

def is_browser_runtime() -> bool:
    """True under Pyodide/WASI, where there is no real filesystem."""
    return sys.platform in ("emscripten", "wasi")


def use_embedded_source(config: SourceConfig) -> bool:
    return os.environ.get(config.env_var) == config.production_value or is_browser_runtime()


def _read_source(source: Optional[AssetSource], path: str | Path | None, config: SourceConfig) -> bytes:
    if use_embedded_source(config):
        if source is None:
            raise ProjectReadError("Embedded mode is active but no asset source was given")
        try:
            return source.joinpath(config.embedded_filename).read_bytes()
        except OSError as e:
            logger.error(f"Error reading LDtk file from embedded assets: {e}")
            raise ProjectReadError(
                f"Failed to read '{config.embedded_filename}' from embedded assets: {e}"
            ) from e

    if path is None:
        raise ProjectReadError("No project path given")
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise ProjectReadError(f"Failed to read LDtk file {path}: {e}") from e


# ── Parsing ────────────────────────────────────────────────────────────────

def parse_project(
    source: Optional[AssetSource],
    path: str | Path | None,
    config: Config | None = None,
) -> Project:
    """Read and decode an LDtk project, pre-parsing every level.

    ``source`` is used in production or in a browser runtime, ``path``
    otherwise. A level that fails to decode is logged and left out; the rest
    of the project is still returned.
    """
    config = config or Config()
    data = _read_source(source, path, config.source)

    try:
        document = ProjectDocument.model_validate(json.loads(data))
    except (ValueError, ValidationError, RecursionError) as e:
        logger.error(f"Error parsing LDtk file: {e}")
        raise ProjectFormatError(f"Invalid LDtk project: {e}") from e

    levels: dict[str, ParsedLevel] = {}
    for index, raw_level in enumerate(document.levels):
        level = _parse_level(index, raw_level)
        if level is not None:
            levels[level.identifier] = level

    logger.debug(f"Parsed {len(levels)}/{len(document.levels)} levels")
    return Project(document, levels)


def _parse_level(index: int, raw_level: Any) -> Optional[ParsedLevel]:
    try:
        header = LevelHeader.model_validate(raw_level)
    except ValidationError as e:
        logger.warning(f"Skipping level #{index}: no readable identifier ({e.error_count()} errors)")
        return None

    try:
        doc = LevelDocument.model_validate(raw_level)
    except ValidationError as e:
        logger.warning(f"Error parsing level '{header.identifier}': {e}")
        return None

    layers = classify_layers(doc.layer_instances)
    return ParsedLevel(
        identifier=header.identifier,
        px_wid=doc.px_wid,
        px_hei=doc.px_hei,
        layer_instances=doc.layer_instances,
        entity_layers=layers.entities,
        int_grid_layers=layers.int_grids,
        tile_layers=layers.tiles,
        raw=raw_level,
    )
