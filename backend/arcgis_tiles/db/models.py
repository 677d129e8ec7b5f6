"""Data models for tileset descriptors.

A tileset descriptor is the tile server's own record of a servable tileset:
its image format and the free-form metadata map stored alongside the tiles
(the MBTiles ``metadata`` table, or a JSONB column in PostgreSQL). Values in
the metadata map are dynamically typed; consumers read them through
``arcgis_tiles.services.metadata.MetadataAccessor``.

Example:
    Creating a descriptor for a raster tileset:
        >>> from arcgis_tiles.db.models import TilesetDescriptor
        >>> tileset = TilesetDescriptor(
        ...     id="usa/elevation",
        ...     format="png",
        ...     metadata={
        ...         "name": "Elevation",
        ...         "minzoom": 0,
        ...         "maxzoom": 12,
        ...         "bounds": [-20037508.34, -20037508.34,
        ...                    20037508.34, 20037508.34],
        ...     },
        ... )
"""

from __future__ import annotations

import dataclasses
import datetime
from typing import Any


@dataclasses.dataclass
class TilesetDescriptor:
    """Represents a tileset the tile server can serve.

    Attributes:
        id: Service identifier (for MBTiles, the path relative to the
            tileset directory without suffix).
        format: Tile image format as stored ("png", "jpg", "pbf", ...).
        metadata: Loosely-typed metadata map. Keys read by this package:
            name, description, attribution, tags, credits, minzoom,
            maxzoom, bounds.
        created_at: Timestamp when the tileset was registered.
    """

    id: str
    format: str
    metadata: dict[str, Any] = dataclasses.field(default_factory=dict)
    created_at: datetime.datetime = dataclasses.field(
        default_factory=lambda: datetime.datetime.now(tz=datetime.UTC)
    )
