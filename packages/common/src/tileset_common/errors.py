"""Custom error types for tileset-tools.

All errors follow the "fail fast" principle with explicit messages.
"""


class TilesetError(Exception):
    """Base exception for all tileset-tools errors."""

    pass


class InvalidArgumentError(TilesetError, ValueError):
    """A required argument was missing or unusable.

    Raised synchronously, before any file is touched.
    """

    pass


class TilesetNotFoundError(TilesetError, FileNotFoundError):
    """A tileset manifest (root or external) does not exist on disk."""

    pass


class TilesetParseError(TilesetError, ValueError):
    """A tileset manifest could not be decoded.

    Covers both corrupt gzip streams and malformed JSON after decompression.
    """

    pass
