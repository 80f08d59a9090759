"""Output writer for combined tilesets.

Provides:
- write_tileset: serialise the merged manifest, gzipped or plain
- copy_content_files: mirror every non-manifest file into the output tree
"""

from __future__ import annotations

import asyncio
import gzip
import json
import os
import shutil
from pathlib import Path
from typing import Any, Optional, Sequence

from tileset_common import get_logger

from tileset_combine.merger import TILESET_EXTENSIONS, is_tileset_file

logger = get_logger(__name__)

DEFAULT_COPY_CONCURRENCY = 1024


def serialize_tileset(tileset: dict[str, Any], gzipped: bool = False) -> bytes:
    """Encode a manifest as UTF-8 JSON, gzip-compressed when ``gzipped``."""
    if gzipped:
        text = json.dumps(tileset, separators=(",", ":"), ensure_ascii=False)
        return gzip.compress(text.encode("utf-8"))
    text = json.dumps(tileset, indent=2, ensure_ascii=False)
    return text.encode("utf-8")


def _write_bytes(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


async def write_tileset(tileset: dict[str, Any], gzipped: bool, output_path: str | Path) -> Path:
    """Write the merged manifest to ``output_path``.

    Args:
        tileset: Merged manifest
        gzipped: Gzip the output (mirrors the root input manifest)
        output_path: Destination file, parent directories are created

    Returns:
        The written path
    """
    output_path = Path(output_path)
    data = serialize_tileset(tileset, gzipped)
    await asyncio.to_thread(_write_bytes, output_path, data)
    logger.info("tileset_written", path=str(output_path), gzipped=gzipped, size=len(data))
    return output_path


def _is_within(path: Path, directory: Path) -> bool:
    try:
        path.relative_to(directory)
    except ValueError:
        return False
    return True


def list_files(input_directory: Path, exclude: Optional[Path] = None) -> list[Path]:
    """All regular files under ``input_directory``, relative to it.

    Anything beneath ``exclude`` is skipped.
    """
    input_directory = input_directory.resolve()
    exclude = exclude.resolve() if exclude is not None else None

    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(input_directory):
        current = Path(dirpath)
        if exclude is not None:
            dirnames[:] = [d for d in dirnames if not _is_within(current / d, exclude)]
        for filename in filenames:
            files.append((current / filename).relative_to(input_directory))
    files.sort()
    return files


def copy_file(source: Path, target: Path) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, target)


async def copy_content_files(
    input_directory: str | Path,
    output_directory: str | Path,
    extensions: Sequence[str] = TILESET_EXTENSIONS,
    concurrency: int = DEFAULT_COPY_CONCURRENCY,
    exclude: Optional[str | Path] = None,
) -> int:
    """Copy every non-manifest file to the same relative path in the output.

    Manifests are skipped since their content now lives in the combined
    manifest. At most ``concurrency`` copies are in flight; the first copy
    failure aborts the whole operation.

    Args:
        input_directory: Tileset directory to mirror
        output_directory: Destination root
        extensions: File extensions treated as tileset manifests
        concurrency: Upper bound on simultaneous copies
        exclude: Directory not to walk (e.g. an output nested in the input)

    Returns:
        Number of manifest files skipped
    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be >= 1, got {concurrency}")

    input_directory = Path(input_directory)
    output_directory = Path(output_directory)
    exclude_path = Path(exclude) if exclude is not None else None

    files = await asyncio.to_thread(list_files, input_directory, exclude_path)

    content_files = [f for f in files if not is_tileset_file(f, extensions)]
    tilesets_skipped = len(files) - len(content_files)

    semaphore = asyncio.Semaphore(concurrency)

    async def copy_one(relative: Path) -> None:
        async with semaphore:
            await asyncio.to_thread(
                copy_file, input_directory / relative, output_directory / relative
            )

    await asyncio.gather(*(copy_one(f) for f in content_files))

    logger.info(
        "content_files_copied",
        input=str(input_directory),
        output=str(output_directory),
        copied=len(content_files),
        tilesets_skipped=tilesets_skipped,
    )
    return tilesets_skipped
