"""Pytest fixtures for CLI tests."""

import json

import pytest
import structlog
from typer.testing import CliRunner


@pytest.fixture
def cli_runner():
    """Typer CLI runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_structlog():
    """The CLI configures structlog globally; undo it after each test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def simple_tileset(tmp_path):
    """Root tileset with one external tileset in a subdirectory."""
    directory = tmp_path / "simple"
    (directory / "sub").mkdir(parents=True)
    (directory / "tileset.json").write_text(
        json.dumps({"asset": {"version": "1.0"}, "root": {"content": {"url": "sub/ext.json"}}}),
        encoding="utf-8",
    )
    (directory / "sub" / "ext.json").write_text(
        json.dumps({"root": {"content": {"url": "tile.b3dm"}}}),
        encoding="utf-8",
    )
    (directory / "sub" / "tile.b3dm").write_bytes(b"b3dm-tile")
    return directory
