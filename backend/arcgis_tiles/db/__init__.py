"""Tileset registry interfaces and repository implementations.

This package provides the lookup side of the tile server as seen by the
ArcGIS layer: a repository protocol keyed by service identifier, with
in-memory (testing), MBTiles directory and PostgreSQL implementations.

Example:
    Use in a service or FastAPI dependency:
        >>> from arcgis_tiles.db import database
        >>> repo = database.get_tileset_repository(settings)
        >>> tileset = repo.get("usa/roads")
"""
