"""Spatial component records attached to generated entities."""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass
class Position:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class AAB:
    """Axis-aligned bounding box size."""
    width: float = 0.0
    height: float = 0.0


@dataclass
class Shape:
    """Polygon with local vertices around the owner's position."""
    local_aab: AAB = field(default_factory=AAB)
    vertices: list[tuple[float, float]] = field(default_factory=list)
    # Circle skin: distance from the centre to the furthest vertex
    radius: float = 0.0


def new_rectangle(width: float, height: float) -> Shape:
    hw, hh = width / 2, height / 2
    # Clockwise from top-left
    vertices = [(-hw, -hh), (hw, -hh), (hw, hh), (-hw, hh)]
    return Shape(
        local_aab=AAB(width=width, height=height),
        vertices=vertices,
        radius=max(math.hypot(vx, vy) for vx, vy in vertices),
    )
