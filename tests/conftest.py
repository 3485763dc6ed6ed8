"""Shared fixtures: a small LDtk project exercising every layer kind."""

import json
from pathlib import Path

import pytest

from ldtk.project import parse_project


TILESET_PATH = "../assets/images/tiles.png"


def _level_0() -> dict:
    return {
        "identifier": "Level_0",
        "iid": "a1",
        "pxWid": 48,
        "pxHei": 32,
        "layerInstances": [
            {
                "__identifier": "Entities",
                "__type": "Entities",
                "__cWid": 3,
                "__cHei": 2,
                "__gridSize": 16,
                "entityInstances": [
                    {
                        "__identifier": "Player",
                        "iid": "p-1",
                        "px": [8, 16],
                        "width": 16,
                        "height": 16,
                        "fieldInstances": [
                            {"__identifier": "name", "__type": "String", "__value": "hero"},
                            {"__identifier": "lives", "__type": "Int", "__value": 3},
                            {"__identifier": "speed", "__type": "Float", "__value": 1.5},
                            {"__identifier": "armed", "__type": "Bool", "__value": True},
                            {"__identifier": "nickname", "__type": "String", "__value": None},
                            {"__identifier": "lives", "__type": "Int", "__value": 99},
                        ],
                    },
                    {"__identifier": "Coin", "iid": "c-1", "px": [32, 0], "width": 8, "height": 8,
                     "fieldInstances": []},
                    {"__identifier": "Coin", "iid": "c-2", "px": [40, 0], "width": 8, "height": 8,
                     "fieldInstances": []},
                ],
            },
            {
                "__identifier": "Collisions",
                "__type": "IntGrid",
                "__cWid": 3,
                "__cHei": 2,
                "__gridSize": 16,
                "intGridCsv": [1, 1, 0, 1, 2, 2],
                "__tilesetDefUid": None,
                "__tilesetRelPath": None,
            },
            {
                "__identifier": "Ground",
                "__type": "Tiles",
                "__cWid": 3,
                "__cHei": 2,
                "__gridSize": 16,
                "__tilesetDefUid": 1,
                "__tilesetRelPath": TILESET_PATH,
                "gridTiles": [
                    {"src": [16, 0], "px": [0, 0], "t": 1, "f": 0},
                    {"src": [0, 16], "px": [16, 0], "t": 4, "f": 3},
                ],
            },
            {
                "__identifier": "Unbound",
                "__type": "Tiles",
                "__gridSize": 16,
                "__tilesetDefUid": None,
                "gridTiles": [{"src": [0, 0], "px": [0, 0], "t": 0, "f": 0}],
            },
            {
                "__identifier": "Decor",
                "__type": "Tiles",
                "__gridSize": 16,
                "__tilesetDefUid": 99,
                "gridTiles": [{"src": [0, 0], "px": [0, 0], "t": 0, "f": 0}],
            },
            {
                "__identifier": "Shading",
                "__type": "AutoLayer",
                "__gridSize": 16,
            },
        ],
    }


def make_project_dict() -> dict:
    return {
        "jsonVersion": "1.5.3",
        "levels": [
            _level_0(),
            {"identifier": "Level_1", "pxWid": 16, "pxHei": 16, "layerInstances": []},
            {"identifier": "Broken", "pxWid": "wide", "pxHei": 16, "layerInstances": []},
            42,
        ],
        "defs": {
            "tilesets": [
                {
                    "identifier": "Tiles",
                    "relPath": TILESET_PATH,
                    "pxWid": 64,
                    "pxHei": 64,
                    "tileGridSize": 16,
                    "uid": 1,
                },
            ],
        },
    }


@pytest.fixture
def project_dict() -> dict:
    return make_project_dict()


@pytest.fixture
def write_project(tmp_path, monkeypatch):
    """Write a project dict to disk in development mode; returns the path."""
    monkeypatch.delenv("BAPPA_ENV", raising=False)
    monkeypatch.setattr("ldtk.project.is_browser_runtime", lambda: False)

    def _write(data: dict, name: str = "world.ldtk") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def project(write_project, project_dict):
    return parse_project(None, write_project(project_dict))
