"""Exceptions raised while translating tilesets into ArcGIS documents.

Metadata errors are raised at the point a required key is read and carry
the service id and key in ``details`` so the HTTP layer can report them.

Example:
    Handle a tileset with no zoom range:
        >>> from arcgis_tiles.core import errors
        >>> try:
        ...     accessor.get_int("minzoom")
        ... except errors.MissingZoomRangeError as e:
        ...     print(e)
        ... # Tileset metadata is missing a valid integer (key=minzoom)
"""

from __future__ import annotations

from typing import Any


class ArcGISAdapterError(Exception):
    """Base exception for all adapter errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize exception.

        Args:
            message: Error message.
            details: Optional dictionary with additional context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ServiceNotFoundError(ArcGISAdapterError):
    """The service identifier does not resolve to a tileset."""


class TilesetMetadataError(ArcGISAdapterError):
    """Required tileset metadata is absent or malformed."""


class MissingZoomRangeError(TilesetMetadataError):
    """``minzoom`` or ``maxzoom`` is absent or not an integer."""


class MissingBoundsError(TilesetMetadataError):
    """``bounds`` is absent."""


class MalformedBoundsError(TilesetMetadataError):
    """``bounds`` is not a sequence of four numbers."""


class UnreadableTilesetError(TilesetMetadataError):
    """The tileset's backing file cannot be read as a tileset database."""
