"""Pytest fixtures for tileset combine tests.

Builds a ``TilesetOfTilesets`` sample on disk:

    TilesetOfTilesets/
        tileset.json            root: parent.b3dm + child -> tileset2.json
        tileset2.json           children: tileset3/tileset3.json, lr, ur, ul
        tileset3/tileset3.json  root: ll.b3dm
        parent.b3dm lr.b3dm ur.b3dm ul.b3dm tileset3/ll.b3dm
"""

import json
from pathlib import Path

import pytest

REGION = [-1.3197, 0.6988, -1.3196, 0.6989, 0, 88]

ROOT_TILESET = {
    "asset": {"version": "0.0", "tilesetVersion": "1.2.3"},
    "properties": {"id": {"minimum": 0, "maximum": 9}},
    "geometricError": 240,
    "root": {
        "boundingVolume": {"region": REGION},
        "geometricError": 70,
        "refine": "ADD",
        "content": {"url": "parent.b3dm"},
        "children": [
            {
                "boundingVolume": {"region": REGION},
                "geometricError": 70,
                "content": {"url": "tileset2.json"},
            }
        ],
    },
}

TILESET_2 = {
    "asset": {"version": "0.0"},
    "geometricError": 70,
    "root": {
        "boundingVolume": {"region": REGION},
        "geometricError": 70,
        "refine": "ADD",
        "children": [
            {
                "boundingVolume": {"region": REGION},
                "geometricError": 0,
                "content": {"url": "tileset3/tileset3.json"},
            },
            {
                "boundingVolume": {"region": REGION},
                "geometricError": 0,
                "content": {"url": "lr.b3dm"},
            },
            {
                "boundingVolume": {"region": REGION},
                "geometricError": 0,
                "content": {"url": "ur.b3dm"},
            },
            {
                "boundingVolume": {"region": REGION},
                "geometricError": 0,
                "content": {"url": "ul.b3dm"},
            },
        ],
    },
}

TILESET_3 = {
    "asset": {"version": "0.0"},
    "geometricError": 0,
    "root": {
        "boundingVolume": {"region": REGION},
        "geometricError": 0,
        "refine": "ADD",
        "content": {"url": "ll.b3dm"},
    },
}

CONTENT_FILES = ["parent.b3dm", "lr.b3dm", "ur.b3dm", "ul.b3dm", "tileset3/ll.b3dm"]

EXPECTED_URLS = ["parent.b3dm", "tileset3/ll.b3dm", "lr.b3dm", "ur.b3dm", "ul.b3dm"]


def write_json(path: Path, data: dict) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def build_tileset_of_tilesets(directory: Path) -> Path:
    """Write the sample tree into ``directory`` and return it."""
    write_json(directory / "tileset.json", ROOT_TILESET)
    write_json(directory / "tileset2.json", TILESET_2)
    write_json(directory / "tileset3" / "tileset3.json", TILESET_3)
    for name in CONTENT_FILES:
        content = directory / name
        content.parent.mkdir(parents=True, exist_ok=True)
        content.write_bytes(b"b3dm" + name.encode("utf-8") + bytes(range(16)))
    return directory


@pytest.fixture
def tileset_directory(tmp_path):
    """A fresh TilesetOfTilesets tree under tmp_path."""
    return build_tileset_of_tilesets(tmp_path / "TilesetOfTilesets")


@pytest.fixture
def combined_directory(tmp_path):
    """Output location for combine runs (not created)."""
    return tmp_path / "TilesetOfTilesets-combined"


@pytest.fixture
def expected_urls():
    """Merged content urls of the sample, in document order."""
    return list(EXPECTED_URLS)


@pytest.fixture
def make_tileset():
    """Write a manifest dict as JSON to a path."""
    return write_json
