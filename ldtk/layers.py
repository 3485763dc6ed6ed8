"""Split a level's raw layers into entity, int-grid and tile buckets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from ldtk.entities import EntityInstance
from ldtk.schema import GridTile, LayerInstance, LayerType


@dataclass(frozen=True)
class TileLayerData:
    tileset_uid: int
    tileset_rel_path: Optional[str]
    tiles: list[GridTile]


@dataclass
class ClassifiedLayers:
    """Layer data keyed by layer identifier, one dict per layer kind."""
    entities: dict[str, list[EntityInstance]] = field(default_factory=dict)
    int_grids: dict[str, np.ndarray] = field(default_factory=dict)
    tiles: dict[str, TileLayerData] = field(default_factory=dict)


def csv_to_grid(csv: Sequence[int], c_wid: int, c_hei: int) -> np.ndarray:
    """Reshape a flat row-major CSV into a (c_hei, c_wid) grid.

    Missing trailing cells are zero; surplus values are dropped.
    """
    c_wid, c_hei = max(c_wid, 0), max(c_hei, 0)
    flat = np.zeros(c_wid * c_hei, dtype=np.int64)
    n = min(len(csv), flat.size)
    if n:
        flat[:n] = csv[:n]
    return flat.reshape(c_hei, c_wid)


def classify_layers(layers: Sequence[LayerInstance]) -> ClassifiedLayers:
    out = ClassifiedLayers()
    for layer in layers:
        if layer.layer_type == LayerType.ENTITIES:
            out.entities[layer.identifier] = layer.entity_instances
        elif layer.layer_type == LayerType.INT_GRID:
            out.int_grids[layer.identifier] = csv_to_grid(
                layer.int_grid_csv, layer.c_wid, layer.c_hei,
            )
        elif layer.layer_type == LayerType.TILES:
            if layer.tileset_def_uid is None:
                continue
            out.tiles[layer.identifier] = TileLayerData(
                tileset_uid=layer.tileset_def_uid,
                tileset_rel_path=layer.tileset_rel_path,
                tiles=list(layer.grid_tiles),
            )
        # Other layer types (AutoLayer, ...) carry nothing we load
    return out
