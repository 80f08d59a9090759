"""Gzip or ungzip every file of a tileset directory.

Copies the input tree to the output directory, compressing (or
decompressing) files on the way:

- ``gzip=True``: gzip every file
- ``gzip=True, tiles_only=True``: gzip tile content only, copy manifests as is
- ``gzip=False``: gunzip every gzipped file, copy the rest
"""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Awaitable, Optional

from tileset_common import (
    InvalidArgumentError,
    TilesetNotFoundError,
    get_logger,
    get_settings,
)

from tileset_combine.combine import default_output_directory
from tileset_combine.gzip_utils import compress, decompress, is_gzipped_file
from tileset_combine.writer import copy_file, list_files

logger = get_logger(__name__)

TILE_EXTENSIONS: tuple[str, ...] = (".b3dm", ".i3dm", ".pnts", ".cmpt", ".vctr")


@dataclass
class GzipResult:
    """Outcome of a gzip/ungzip run."""

    output_directory: Path
    gzip: bool
    processed: int
    copied: int


def is_tile_file(path: str | Path) -> bool:
    """True if ``path`` is a tile content file (by extension)."""
    return PurePosixPath(str(path).replace("\\", "/")).suffix in TILE_EXTENSIONS


def gzip_tileset(
    input_directory: Optional[str | Path],
    output_directory: Optional[str | Path] = None,
    *,
    gzip: bool = True,
    tiles_only: bool = False,
    verbose: bool = False,
    concurrency: Optional[int] = None,
) -> Awaitable[GzipResult]:
    """Gzip or ungzip a tileset directory into ``output_directory``.

    Args:
        input_directory: Tileset directory (required)
        output_directory: Destination
            (default: ``<input>-gzipped`` or ``<input>-ungzipped``)
        gzip: Compress when True, decompress when False
        tiles_only: With ``gzip``, only compress tile content files
        verbose: Log a summary when done
        concurrency: Max files processed at once (default: settings)

    Raises:
        InvalidArgumentError: ``input_directory`` is missing (raised
            immediately, not on await)
    """
    if input_directory is None or str(input_directory) == "":
        raise InvalidArgumentError("input_directory is required")

    input_path = Path(os.path.normpath(input_directory))
    if output_directory is None:
        suffix = "-gzipped" if gzip else "-ungzipped"
        output_path = default_output_directory(input_path, suffix)
    else:
        output_path = Path(os.path.normpath(output_directory))

    return _gzip_tileset(
        input_path,
        output_path,
        gzip=gzip,
        tiles_only=tiles_only,
        verbose=verbose,
        concurrency=concurrency or get_settings().copy_concurrency,
    )


async def _gzip_tileset(
    input_directory: Path,
    output_directory: Path,
    gzip: bool,
    tiles_only: bool,
    verbose: bool,
    concurrency: int,
) -> GzipResult:
    if not input_directory.is_dir():
        raise TilesetNotFoundError(f"Input directory not found: {input_directory}")

    files = await asyncio.to_thread(list_files, input_directory, output_directory)
    semaphore = asyncio.Semaphore(concurrency)

    async def process(relative: Path) -> bool:
        source = input_directory / relative
        target = output_directory / relative
        async with semaphore:
            if not gzip:
                if not await is_gzipped_file(source):
                    await asyncio.to_thread(copy_file, source, target)
                    return False
                await asyncio.to_thread(decompress, source, target)
                return True
            if tiles_only and not is_tile_file(relative):
                await asyncio.to_thread(copy_file, source, target)
                return False
            await asyncio.to_thread(compress, source, target)
            return True

    outcomes = await asyncio.gather(*(process(f) for f in files))
    processed = sum(1 for outcome in outcomes if outcome)

    result = GzipResult(
        output_directory=output_directory,
        gzip=gzip,
        processed=processed,
        copied=len(files) - processed,
    )
    if verbose:
        logger.info(
            "tileset_gzipped" if gzip else "tileset_ungzipped",
            output=str(output_directory),
            processed=result.processed,
            copied=result.copied,
        )
    return result
