"""Visual component records: tiles and sprite bundles."""

from __future__ import annotations

from dataclasses import dataclass, field

SPRITE_LIMIT = 40  # Max sprites per bundle


@dataclass(frozen=True)
class Tile:
    source_x: int  # column in the tileset, in tiles
    source_y: int  # row in the tileset, in tiles
    tile_id: int
    flipped_x: bool
    flipped_y: bool
    x: float  # world position in pixels
    y: float


@dataclass
class SpriteBlueprint:
    path: str
    active: bool = True
    priority: int = 0
    offset: tuple[float, float] = (0.0, 0.0)
    tile_set: list[Tile] = field(default_factory=list)


@dataclass
class SpriteBundle:
    """Ordered sprites for one entity. Builder methods act on the last sprite."""
    blueprints: list[SpriteBlueprint] = field(default_factory=list)

    def add_sprite(self, path: str, active: bool = True) -> SpriteBundle:
        if len(self.blueprints) >= SPRITE_LIMIT:
            raise ValueError("Sprite limit exceeded")
        self.blueprints.append(SpriteBlueprint(path=path, active=active))
        return self

    def with_priority(self, priority: int) -> SpriteBundle:
        self._last("prioritize").priority = priority
        return self

    def with_offset(self, x: float, y: float) -> SpriteBundle:
        self._last("offset").offset = (x, y)
        return self

    def _last(self, action: str) -> SpriteBlueprint:
        if not self.blueprints:
            raise ValueError(f"No sprite to {action}")
        return self.blueprints[-1]
