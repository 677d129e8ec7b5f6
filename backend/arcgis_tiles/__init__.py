"""ArcGIS MapServer compatibility layer for an XYZ tile service.

This package exposes the metadata of tilesets held by a non-ArcGIS tile
server through the ArcGIS MapServer REST schema, so that desktop GIS tools
and web mapping SDKs that only speak ArcGIS can add those tilesets as
cached map services.

- Reads tileset descriptors (image format plus a free-form metadata map)
  from a pluggable registry: MBTiles files on disk or a PostgreSQL table
- Computes the Web Mercator (EPSG:3857) level-of-detail pyramid from the
  tileset zoom range
- Builds the service root, layer list and legend documents expected by
  ArcGIS clients, with explicit errors for missing required metadata

See README and module sub-docstrings for details on architecture and usage.
"""
