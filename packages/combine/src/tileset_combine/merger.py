"""Manifest merger: inline external tilesets into one tree.

Walks the tile tree of a tileset manifest with an explicit stack. A tile
whose content points at another manifest is resolved recursively and the
external root's ``content``/``children`` are spliced onto that tile. Every
other content reference is rewritten to be relative to the input
directory, with forward slashes.

Example:
    >>> tileset = await merge_tileset(Path("data/tileset.json"), Path("data"))
    >>> tileset["root"]["children"][0]["content"]["url"]
    'tileset3/ll.b3dm'
"""

from __future__ import annotations

import asyncio
import gzip
import json
import os
import zlib
from pathlib import Path, PurePosixPath
from typing import Any, Optional, Sequence

from tileset_common import TilesetNotFoundError, TilesetParseError, get_logger

from tileset_combine.gzip_utils import is_gzipped

logger = get_logger(__name__)

TILESET_EXTENSIONS: tuple[str, ...] = (".json",)

# Content key of 3D Tiles 1.0 first, then the 1.1 spelling
CONTENT_URL_KEYS = ("url", "uri")


def is_tileset_file(path: str | Path, extensions: Sequence[str] = TILESET_EXTENSIONS) -> bool:
    """True if ``path`` names a tileset manifest (by extension)."""
    return PurePosixPath(str(path).replace("\\", "/")).suffix in extensions


def relative_content_url(tileset_directory: Path, url: str, input_directory: Path) -> str:
    """Rewrite a content url so it is relative to ``input_directory``.

    Args:
        tileset_directory: Directory of the manifest that holds the reference
        url: Reference as written in that manifest
        input_directory: Common base of every rewritten url

    Returns:
        Normalised relative path using forward slashes
    """
    absolute = os.path.normpath(os.path.join(tileset_directory, url))
    relative = os.path.relpath(absolute, os.path.normpath(input_directory))
    return relative.replace(os.sep, "/")


def _content_url_key(content: dict[str, Any]) -> Optional[str]:
    for key in CONTENT_URL_KEYS:
        if isinstance(content.get(key), str):
            return key
    return None


def _read_bytes(path: Path) -> bytes:
    return path.read_bytes()


def decode_tileset(data: bytes, source: str | Path = "<bytes>") -> dict[str, Any]:
    """Decode manifest bytes, gunzipping first when the magic bytes match.

    Raises:
        TilesetParseError: Corrupt gzip stream or invalid JSON
    """
    try:
        if is_gzipped(data):
            data = gzip.decompress(data)
        return json.loads(data.decode("utf-8"))
    except (OSError, EOFError, zlib.error) as e:
        raise TilesetParseError(f"Invalid gzip data in tileset {source}: {e}") from e
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise TilesetParseError(f"Invalid JSON in tileset {source}: {e}") from e


async def read_tileset(path: str | Path) -> dict[str, Any]:
    """Read and decode a tileset manifest.

    Raises:
        TilesetNotFoundError: The file does not exist
        TilesetParseError: The file is not valid (gzipped) JSON
    """
    path = Path(path)
    try:
        data = await asyncio.to_thread(_read_bytes, path)
    except FileNotFoundError as e:
        raise TilesetNotFoundError(f"Tileset not found: {path}") from e

    tileset = decode_tileset(data, path)
    logger.debug("tileset_loaded", path=str(path), gzipped=is_gzipped(data), size=len(data))
    return tileset


def splice_tile(tile: dict[str, Any], external_tileset: dict[str, Any]) -> None:
    """Replace a tile's content and children with an external tileset's root.

    The tile's own ``content`` and ``children`` are dropped even if the
    external root lacks them.
    """
    external_root = external_tileset.get("root") or {}
    for key in ("content", "children"):
        if key in external_root:
            tile[key] = external_root[key]
        else:
            tile.pop(key, None)


async def merge_tileset(
    tileset_path: str | Path,
    input_directory: str | Path,
    extensions: Sequence[str] = TILESET_EXTENSIONS,
) -> dict[str, Any]:
    """Load a tileset and inline every external tileset it references.

    External references are resolved relative to the directory of the
    manifest that contains them. All nested merges started while walking
    this manifest run concurrently and are awaited together; each one owns
    the manifest it loaded until it is spliced in here.

    Args:
        tileset_path: Manifest to load
        input_directory: Base that all content urls are made relative to
        extensions: File extensions treated as tileset manifests

    Returns:
        The loaded manifest with its ``root`` fully merged. Top-level fields
        other than ``root`` are returned untouched.

    Raises:
        TilesetNotFoundError: This or any nested manifest is missing
        TilesetParseError: This or any nested manifest is malformed
    """
    tileset_path = Path(tileset_path)
    input_directory = Path(input_directory)
    tileset = await read_tileset(tileset_path)

    root = tileset.get("root")
    if root is None:
        return tileset

    tileset_directory = tileset_path.parent
    external_tiles: list[dict[str, Any]] = []
    pending = []

    stack = [root]
    while stack:
        tile = stack.pop()

        content = tile.get("content")
        if isinstance(content, dict):
            key = _content_url_key(content)
            if key is not None:
                url = content[key]
                if is_tileset_file(url, extensions):
                    external_path = tileset_directory / url
                    logger.debug(
                        "external_tileset_found",
                        parent=str(tileset_path),
                        url=url,
                    )
                    external_tiles.append(tile)
                    pending.append(merge_tileset(external_path, input_directory, extensions))
                else:
                    content[key] = relative_content_url(tileset_directory, url, input_directory)

        children = tile.get("children")
        if children:
            stack.extend(children)

    if pending:
        external_tilesets = await asyncio.gather(*pending)
        for tile, external_tileset in zip(external_tiles, external_tilesets):
            splice_tile(tile, external_tileset)

    return tileset
