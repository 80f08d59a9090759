"""Tileset Common - shared errors, logging and settings.

This package provides:
- Error hierarchy rooted at TilesetError
- structlog configuration and get_logger
- Settings (pydantic-settings) with environment overrides
"""

from tileset_common.config import Settings, get_settings
from tileset_common.errors import (
    InvalidArgumentError,
    TilesetError,
    TilesetNotFoundError,
    TilesetParseError,
)
from tileset_common.logging_config import configure_logging, get_logger

__version__ = "0.1.0"

__all__ = [
    # Errors
    "TilesetError",
    "InvalidArgumentError",
    "TilesetNotFoundError",
    "TilesetParseError",
    # Logging
    "configure_logging",
    "get_logger",
    # Settings
    "Settings",
    "get_settings",
]
