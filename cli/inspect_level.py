"""CLI command: summarise what an LDtk project would load."""

from __future__ import annotations

import argparse
import logging
import sys
from collections import Counter
from pathlib import Path
from typing import Any

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from blueprint.spatial import Position, Shape
from config_io.config import Config, load_config
from config_io.utils import save_json
from ldtk.errors import LDtkError
from ldtk.intgrid import load_int_grid
from ldtk.merge import merge_rectangles
from ldtk.project import Project, parse_project
from ldtk.tiles import load_tiles
from storage.memory import MemoryStorage


def summarize_level(project: Project, level_name: str, config: Config) -> dict[str, Any]:
    """Layer contents of one level plus what the loaders would create."""
    level = project.get_level(level_name)

    int_grids: dict[str, Any] = {}
    max_value = 0
    for layer_id, grid in level.int_grid_layers.items():
        cell_size = project.cell_size_for(level_name, layer_id)
        values = sorted(int(v) for v in set(grid.flat) if v > 0)
        max_value = max([max_value, *values])
        int_grids[layer_id] = {
            "cells": f"{grid.shape[1]}x{grid.shape[0]}",
            "cell_size": cell_size,
            "rectangles": {
                str(v): len(merge_rectangles(grid, v, cell_size)) for v in values
            } if cell_size else {},
        }

    # Materialise bodies and tile layers into a throwaway storage
    storage = MemoryStorage()
    archetype = storage.new_or_existing_archetype(Position, Shape)
    bodies = load_int_grid(project, level_name, *([archetype] * max_value))
    tile_entities = load_tiles(project, level_name, storage, config)

    entity_counts: Counter[str] = Counter()
    for instances in level.entity_layers.values():
        entity_counts.update(e.identifier for e in instances)

    return {
        "identifier": level.identifier,
        "px_wid": level.px_wid,
        "px_hei": level.px_hei,
        "entity_layers": sorted(level.entity_layers),
        "entities": dict(sorted(entity_counts.items())),
        "int_grid_layers": int_grids,
        "tile_layers": {
            layer_id: len(data.tiles) for layer_id, data in level.tile_layers.items()
        },
        "bodies": bodies,
        "tile_entities": tile_entities,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Inspect an LDtk project")
    parser.add_argument("--project", type=str, default=None, help="Path to the .ldtk file")
    parser.add_argument("--assets", type=str, default=None,
                        help="Directory holding the embedded data.ldtk (production mode)")
    parser.add_argument("--level", type=str, action="append", default=None,
                        help="Level identifier; repeat for several (default: all)")
    parser.add_argument("--config", type=str, default=None, help="Path to YAML config file")
    parser.add_argument("--out", type=str, default=None, help="Write the report as JSON")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    config = load_config(args.config)
    source = Path(args.assets) if args.assets else None

    try:
        project = parse_project(source, args.project, config)
        names = args.level or project.level_names
        report = [summarize_level(project, name, config) for name in names]
    except LDtkError as e:
        logging.error(str(e))
        sys.exit(1)

    logging.info(f"Loaded {len(project.level_names)} levels, {len(project.tilesets)} tilesets")

    for summary in report:
        print(f"\n=== {summary['identifier']} ({summary['px_wid']}x{summary['px_hei']} px) ===")
        print(f"  Entities: {summary['entities'] or 'none'}")
        for layer_id, info in summary["int_grid_layers"].items():
            print(f"  IntGrid '{layer_id}': {info['cells']} cells @ {info['cell_size']}px, "
                  f"rectangles per value {info['rectangles']}")
        for layer_id, count in summary["tile_layers"].items():
            print(f"  Tiles '{layer_id}': {count} tiles")
        print(f"  Bodies: {summary['bodies']}  Tile entities: {summary['tile_entities']}")

    if args.out:
        save_json(report, args.out)
        print(f"\nReport saved: {args.out}")


if __name__ == "__main__":
    main()
