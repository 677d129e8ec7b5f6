"""Tileset registry backed by a directory of MBTiles files.

Every ``*.mbtiles`` file below the tileset directory is one service. The
service identifier is the file path relative to that directory, with POSIX
separators and without the suffix, so ``<dir>/usa/roads.mbtiles`` is served
as ``usa/roads``.

MBTiles stores its metadata as text name/value pairs. The values the
ArcGIS documents need are parsed into their natural types here (zoom levels
as integers, bounds as floats); anything that fails to parse is kept as the
raw string and rejected later by the metadata accessor.

Example:
    Look up a tileset from disk:
        >>> from pathlib import Path
        >>> from arcgis_tiles.db.mbtiles import MBTilesRepository
        >>> repo = MBTilesRepository(Path("/srv/tilesets"))
        >>> tileset = repo.get("usa/roads")
        >>> tileset.metadata["maxzoom"]
        14
"""

from __future__ import annotations

import contextlib
import json
import sqlite3
from typing import TYPE_CHECKING, Any

from arcgis_tiles.core import errors
from arcgis_tiles.core import logging as app_logging
from arcgis_tiles.db import models as db_models

if TYPE_CHECKING:
    import pathlib
    from collections.abc import Iterable

logger = app_logging.get_logger(__name__)

SUFFIX = ".mbtiles"

INT_KEYS = ("minzoom", "maxzoom")
FLOAT_LIST_KEYS = ("bounds", "center")

# Leading bytes of a tile and the format name they identify
_TILE_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\x89PNG\r\n\x1a\n", "png"),
    (b"\xff\xd8\xff", "jpg"),
    (b"GIF87a", "gif"),
    (b"GIF89a", "gif"),
    (b"\x1f\x8b", "pbf"),
    (b"\x78\x9c", "pbf"),
)


def _parse_value(key: str, value: str) -> Any:
    """Convert a text metadata value to the type its key implies."""
    try:
        if key in INT_KEYS:
            return int(value)
        if key in FLOAT_LIST_KEYS:
            return [float(part) for part in value.split(",")]
    except ValueError:
        return value
    return value


def detect_tile_format(data: bytes) -> str:
    """Identify a tile's format from its leading bytes.

    Args:
        data: Raw tile bytes.

    Returns:
        Format name ("png", "jpg", "gif", "webp", "pbf"), or an empty
        string when the bytes are not recognised.
    """
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "webp"
    for signature, name in _TILE_SIGNATURES:
        if data.startswith(signature):
            return name
    return ""


def read_tileset(
    path: pathlib.Path,
    service_id: str,
) -> db_models.TilesetDescriptor:
    """Read the metadata table of one MBTiles file.

    Args:
        path: Path to the ``.mbtiles`` file.
        service_id: Identifier to give the resulting descriptor.

    Returns:
        TilesetDescriptor with parsed metadata. When the metadata has no
        ``format`` entry, the format is detected from the first stored tile.

    Raises:
        sqlite3.DatabaseError: If the file is not a readable MBTiles database.
    """
    uri = f"{path.resolve().as_uri()}?mode=ro"
    with contextlib.closing(sqlite3.connect(uri, uri=True)) as conn:
        rows = conn.execute("SELECT name, value FROM metadata").fetchall()
        metadata: dict[str, Any] = {}
        for name, value in rows:
            if name == "json":
                try:
                    extra = json.loads(value)
                except ValueError:
                    logger.warning(
                        "Ignoring invalid json metadata",
                        service_id=service_id,
                    )
                    continue
                if isinstance(extra, dict):
                    metadata.update(extra)
                continue
            if isinstance(value, str):
                value = _parse_value(name, value)
            metadata[name] = value

        tile_format = metadata.get("format")
        if not isinstance(tile_format, str) or not tile_format:
            row = conn.execute("SELECT tile_data FROM tiles LIMIT 1").fetchone()
            tile_format = detect_tile_format(bytes(row[0])) if row else ""

    if tile_format == "jpeg":
        tile_format = "jpg"

    return db_models.TilesetDescriptor(
        id=service_id,
        format=tile_format,
        metadata=metadata,
    )


class MBTilesRepository:
    """Read-only tileset registry over a directory of MBTiles files."""

    def __init__(self, root: pathlib.Path) -> None:
        self.root = root.resolve()

    def _path_for(self, service_id: str) -> pathlib.Path | None:
        """Resolve a service id to a file inside the root directory."""
        path = (self.root / f"{service_id}{SUFFIX}").resolve()
        if not path.is_relative_to(self.root) or not path.is_file():
            return None
        return path

    def _service_id(self, path: pathlib.Path) -> str:
        return path.relative_to(self.root).with_suffix("").as_posix()

    def add(
        self,
        tileset: db_models.TilesetDescriptor,
    ) -> db_models.TilesetDescriptor:
        raise NotImplementedError(
            "MBTiles tilesets are registered by placing files in the "
            "tileset directory"
        )

    def get(self, service_id: str) -> db_models.TilesetDescriptor | None:
        """Read one tileset, or return None if no file backs the id.

        Raises:
            UnreadableTilesetError: If the file exists but is not a
                readable MBTiles database.
        """
        path = self._path_for(service_id)
        if path is None:
            return None
        try:
            return read_tileset(path, service_id)
        except sqlite3.DatabaseError as exc:
            raise errors.UnreadableTilesetError(
                "Tileset file is not a readable MBTiles database",
                {"service_id": service_id, "error": str(exc)},
            ) from exc

    def all(self) -> Iterable[db_models.TilesetDescriptor]:
        if not self.root.is_dir():
            return
        for path in sorted(self.root.rglob(f"*{SUFFIX}")):
            service_id = self._service_id(path)
            try:
                yield read_tileset(path, service_id)
            except sqlite3.DatabaseError as exc:
                logger.warning(
                    "Skipping unreadable tileset",
                    service_id=service_id,
                    error=str(exc),
                )
