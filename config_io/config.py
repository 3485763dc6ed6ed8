"""Configuration loading and defaults."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


# ── Sub-configs ────────────────────────────────────────────────────────────

class SourceConfig(BaseModel):
    """Where project data is read from."""
    env_var: str = "BAPPA_ENV"
    production_value: str = "production"
    embedded_filename: str = "data.ldtk"


class TilesConfig(BaseModel):
    base_priority: int = 10
    # Stripped in order, each at most once
    strip_prefixes: list[str] = Field(default_factory=lambda: [
        "../", "assets/", "images/",
    ])


# ── Top-level config ───────────────────────────────────────────────────

class Config(BaseModel):
    source: SourceConfig = Field(default_factory=SourceConfig)
    tiles: TilesConfig = Field(default_factory=TilesConfig)


def load_config(path: str | Path | None = None, overrides: dict[str, Any] | None = None) -> Config:
    """Load config from YAML file, applying optional overrides."""
    data: dict[str, Any] = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            with open(p) as f:
                data = yaml.safe_load(f) or {}
    if overrides:
        _deep_merge(data, overrides)
    return Config(**data)


def _deep_merge(base: dict, overlay: dict) -> None:
    for k, v in overlay.items():
        if k in base and isinstance(base[k], dict) and isinstance(v, dict):
            _deep_merge(base[k], v)
        else:
            base[k] = v
