"""Combine a tileset of external tilesets into a single tileset.

Usage:
    >>> result = await combine_tileset("data/TilesetOfTilesets", verbose=True)
    >>> result.output_path
    PosixPath('data/TilesetOfTilesets-combined/tileset.json')

``combine_tileset`` validates its arguments eagerly: a missing input
directory raises ``InvalidArgumentError`` at call time, before the returned
awaitable is created. Everything else (missing or malformed manifests,
copy failures) surfaces when the awaitable is awaited.
"""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Optional, Sequence

from tileset_common import InvalidArgumentError, get_logger, get_settings

from tileset_combine.gzip_utils import is_gzipped_file
from tileset_combine.merger import TILESET_EXTENSIONS, merge_tileset
from tileset_combine.writer import copy_content_files, write_tileset

logger = get_logger(__name__)


@dataclass
class CombineResult:
    """Outcome of a combine run.

    Attributes:
        output_path: Path of the combined manifest
        output_directory: Directory holding the manifest and content files
        gzipped: Whether the combined manifest was written gzipped
        external_tilesets: Number of external tilesets folded in
    """

    output_path: Path
    output_directory: Path
    gzipped: bool
    external_tilesets: int


def default_output_directory(input_directory: str | Path, suffix: str) -> Path:
    """``<parent>/<input-basename><suffix>``, next to the input."""
    input_directory = Path(os.path.normpath(input_directory))
    return input_directory.parent / f"{input_directory.name}{suffix}"


def combine_tileset(
    input_directory: Optional[str | Path],
    output_directory: Optional[str | Path] = None,
    *,
    root_json: Optional[str] = None,
    verbose: bool = False,
    concurrency: Optional[int] = None,
    extensions: Sequence[str] = TILESET_EXTENSIONS,
) -> Awaitable[CombineResult]:
    """Combine all external tilesets into a single tileset manifest.

    Args:
        input_directory: Path to the tileset directory (required)
        output_directory: Output directory
            (default: ``<input>-combined`` next to the input)
        root_json: Root manifest path relative to the input directory
            (default: settings.root_json, ``tileset.json``)
        verbose: Log how many external tilesets were combined
        concurrency: Max simultaneous file copies (default: settings)
        extensions: File extensions treated as tileset manifests

    Returns:
        Awaitable resolving to a CombineResult

    Raises:
        InvalidArgumentError: ``input_directory`` is missing (raised
            immediately, not on await)
    """
    if input_directory is None or str(input_directory) == "":
        raise InvalidArgumentError("input_directory is required")

    settings = get_settings()
    root_json = root_json or settings.root_json
    concurrency = concurrency or settings.copy_concurrency

    input_path = Path(os.path.normpath(input_directory))
    if output_directory is None:
        output_path = default_output_directory(input_path, "-combined")
    else:
        output_path = Path(os.path.normpath(output_directory))

    return _combine(
        input_path,
        output_path,
        root_json,
        verbose=verbose,
        concurrency=concurrency,
        extensions=tuple(extensions),
    )


async def _combine(
    input_directory: Path,
    output_directory: Path,
    root_json: str,
    verbose: bool,
    concurrency: int,
    extensions: tuple[str, ...],
) -> CombineResult:
    root_json_path = input_directory / root_json
    output_json_path = output_directory / Path(root_json).name

    logger.info(
        "combine_started",
        input=str(input_directory),
        output=str(output_directory),
        root_json=root_json,
    )

    tileset = await merge_tileset(root_json_path, input_directory, extensions)
    gzipped = await is_gzipped_file(root_json_path)

    _, tilesets_skipped = await asyncio.gather(
        write_tileset(tileset, gzipped, output_json_path),
        copy_content_files(
            input_directory,
            output_directory,
            extensions,
            concurrency=concurrency,
            exclude=output_directory,
        ),
    )

    external_tilesets = max(tilesets_skipped - 1, 0)
    if verbose:
        logger.info("external_tilesets_combined", count=external_tilesets)

    return CombineResult(
        output_path=output_json_path,
        output_directory=output_directory,
        gzipped=gzipped,
        external_tilesets=external_tilesets,
    )
