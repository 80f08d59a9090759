"""Tileset Combine - flatten a tileset of external tilesets.

This package provides:
- combine_tileset: merge a tileset tree into one manifest plus content files
- merge_tileset / read_tileset: the in-memory manifest merger
- write_tileset / copy_content_files: the output writer
- gzip_tileset, compress, decompress: gzip helpers for tileset directories
"""

from tileset_combine.combine import CombineResult, combine_tileset
from tileset_combine.gzip_tileset import GzipResult, gzip_tileset
from tileset_combine.gzip_utils import compress, decompress, is_gzipped, is_gzipped_file
from tileset_combine.merger import (
    TILESET_EXTENSIONS,
    is_tileset_file,
    merge_tileset,
    read_tileset,
    relative_content_url,
)
from tileset_combine.writer import copy_content_files, write_tileset

__version__ = "0.1.0"

__all__ = [
    # Top-level operations
    "combine_tileset",
    "CombineResult",
    "gzip_tileset",
    "GzipResult",
    # Merger
    "TILESET_EXTENSIONS",
    "is_tileset_file",
    "merge_tileset",
    "read_tileset",
    "relative_content_url",
    # Writer
    "write_tileset",
    "copy_content_files",
    # Gzip helpers
    "compress",
    "decompress",
    "is_gzipped",
    "is_gzipped_file",
]
