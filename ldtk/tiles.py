"""Turn Tiles layers into one sprite-bundle entity per layer."""

from __future__ import annotations

import logging
from typing import Sequence

from blueprint.client import SpriteBundle, Tile
from blueprint.spatial import Position
from config_io.config import Config
from ldtk.project import Project
from ldtk.schema import GridTile
from storage.base import Storage

logger = logging.getLogger(__name__)

FLIP_X = 1
FLIP_Y = 2


def normalize_tileset_path(path: str, prefixes: Sequence[str]) -> str:
    """Strip each prefix once, in the given order."""
    for prefix in prefixes:
        if path.startswith(prefix):
            path = path[len(prefix):]
    return path


def decode_flips(mask: int) -> tuple[bool, bool]:
    """(flipped_x, flipped_y) from an LDtk flip bitmask."""
    return bool(mask & FLIP_X), bool(mask & FLIP_Y)


def _to_cells(px: int, tile_size: int) -> int:
    # Rounds toward zero, not down: -1px is cell 0
    return int(px / tile_size)


def to_tile(grid_tile: GridTile, tile_size: int) -> Tile:
    flipped_x, flipped_y = decode_flips(grid_tile.f)
    return Tile(
        source_x=_to_cells(grid_tile.src[0], tile_size),
        source_y=_to_cells(grid_tile.src[1], tile_size),
        tile_id=grid_tile.t,
        flipped_x=flipped_x,
        flipped_y=flipped_y,
        x=float(grid_tile.px[0]),
        y=float(grid_tile.px[1]),
    )


def load_tiles(project: Project, level_name: str, storage: Storage, config: Config | None = None) -> int:
    """Create one entity per tile layer, holding the whole layer as a tile set.

    Layers are processed in file order; each gets a render priority one
    above the previous. Returns the number of entities created.
    """
    if not project.has_level(level_name):
        logger.warning(f"Level '{level_name}' not found")
        return 0
    level = project.get_level(level_name)
    tcfg = (config or Config()).tiles

    layer_index = 0
    for layer_id, tile_data in level.tile_layers.items():
        tileset = project.tileset_for(tile_data.tileset_uid)
        if tileset is None or not tileset.rel_path:
            logger.debug(f"No tileset image for layer '{layer_id}' (uid {tile_data.tileset_uid})")
            continue
        if tileset.tile_grid_size <= 0:
            logger.warning(f"Tileset '{tileset.identifier}' has no tile size, skipping layer '{layer_id}'")
            continue

        tileset_path = normalize_tileset_path(tileset.rel_path, tcfg.strip_prefixes)

        archetype = storage.new_or_existing_archetype(SpriteBundle, Position)

        bundle = (
            SpriteBundle()
            .add_sprite(tileset_path, True)
            .with_priority(tcfg.base_priority + layer_index)
            .with_offset(0.0, 0.0)
        )
        bundle.blueprints[0].tile_set.extend(
            to_tile(t, tileset.tile_grid_size) for t in tile_data.tiles
        )

        archetype.generate(1, Position(0.0, 0.0), bundle)
        layer_index += 1

    return layer_index
