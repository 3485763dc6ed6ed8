"""Turn IntGrid layers into collision bodies."""

from __future__ import annotations

import logging

from blueprint.spatial import Position, new_rectangle
from ldtk.merge import merge_rectangles
from ldtk.project import Project
from storage.base import Archetype

logger = logging.getLogger(__name__)


def load_int_grid(project: Project, level_name: str, *archetypes: Archetype) -> int:
    """Generate one body per merged rectangle of every IntGrid layer.

    ``archetypes[v - 1]`` serves grid value ``v``. Values above
    ``len(archetypes)`` are ignored. Each body gets a Position at the
    rectangle centre and a rectangular Shape of the rectangle's size.
    Returns the number of bodies generated.
    """
    if not project.has_level(level_name):
        logger.warning(f"Level '{level_name}' not found")
        return 0
    level = project.get_level(level_name)

    generated = 0
    for layer_id, grid in level.int_grid_layers.items():
        cell_size = project.cell_size_for(level_name, layer_id)
        if cell_size == 0:
            logger.warning(f"Couldn't find grid size for layer '{layer_id}'")
            continue

        for grid_value, archetype in enumerate(archetypes, start=1):
            for rect in merge_rectangles(grid, grid_value, cell_size):
                cx, cy = rect.center
                archetype.generate(
                    1,
                    Position(cx, cy),
                    new_rectangle(rect.width, rect.height),
                )
                generated += 1

    return generated
