"""Byte-level gzip helpers.

Compression is detected by sniffing the gzip magic number, never by file
extension: a gzipped ``tileset.json`` keeps its name.
"""

from __future__ import annotations

import asyncio
import gzip
from pathlib import Path
from typing import Optional, Union

GZIP_MAGIC = b"\x1f\x8b"

PathLike = Union[str, Path]


def is_gzipped(data: bytes) -> bool:
    """True if ``data`` starts with the gzip magic bytes (0x1f 0x8b)."""
    return data[:2] == GZIP_MAGIC


def _read_magic(path: Path) -> bytes:
    with open(path, "rb") as f:
        return f.read(2)


async def is_gzipped_file(path: PathLike) -> bool:
    """Check whether the file at ``path`` is gzip-compressed."""
    magic = await asyncio.to_thread(_read_magic, Path(path))
    return is_gzipped(magic)


def compress(path: PathLike, output_path: Optional[PathLike] = None) -> Path:
    """Gzip a single file.

    Args:
        path: File to compress
        output_path: Destination (default: overwrite ``path`` in place)

    Returns:
        Path of the compressed file. Already-gzipped input is copied as is.
    """
    source = Path(path)
    target = Path(output_path) if output_path is not None else source
    data = source.read_bytes()
    if not is_gzipped(data):
        data = gzip.compress(data)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)
    return target


def decompress(path: PathLike, output_path: Optional[PathLike] = None) -> Path:
    """Inverse of :func:`compress`. Plain input is copied unchanged."""
    source = Path(path)
    target = Path(output_path) if output_path is not None else source
    data = source.read_bytes()
    if is_gzipped(data):
        data = gzip.decompress(data)
    elif target == source:
        return target
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)
    return target
