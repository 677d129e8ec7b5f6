"""Pytest fixtures shared by the tileset and ArcGIS endpoint tests."""

from __future__ import annotations

import sqlite3
from typing import TYPE_CHECKING, Any

import pytest
from fastapi import testclient

from arcgis_tiles import main
from arcgis_tiles.api import dependencies
from arcgis_tiles.db import database
from arcgis_tiles.db import models as db_models

if TYPE_CHECKING:
    import pathlib
    from collections.abc import Callable, Iterator

WORLD_BOUNDS = [-20037508.34, -20037508.34, 20037508.34, 20037508.34]

PNG_TILE = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def _make_tileset(
    service_id: str = "roads",
    tile_format: str = "png",
    **overrides: Any,
) -> db_models.TilesetDescriptor:
    """Build a descriptor with complete metadata, overridable per key.

    Passing a key with value None removes it from the metadata.
    """
    metadata: dict[str, Any] = {
        "name": "Roads",
        "description": "Road network",
        "attribution": "OpenStreetMap contributors",
        "tags": "roads,transport",
        "credits": "Mapping team",
        "minzoom": 0,
        "maxzoom": 4,
        "bounds": list(WORLD_BOUNDS),
    }
    for key, value in overrides.items():
        if value is None:
            metadata.pop(key, None)
        else:
            metadata[key] = value
    return db_models.TilesetDescriptor(
        id=service_id,
        format=tile_format,
        metadata=metadata,
    )


def _write_mbtiles(
    path: pathlib.Path,
    metadata: dict[str, str],
    tile: bytes | None = PNG_TILE,
) -> pathlib.Path:
    """Create an MBTiles file with the given metadata rows and one tile."""
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path)
    try:
        conn.execute("CREATE TABLE metadata (name TEXT, value TEXT)")
        conn.execute(
            "CREATE TABLE tiles (zoom_level INTEGER, tile_column INTEGER, "
            "tile_row INTEGER, tile_data BLOB)"
        )
        conn.executemany(
            "INSERT INTO metadata (name, value) VALUES (?, ?)",
            list(metadata.items()),
        )
        if tile is not None:
            conn.execute(
                "INSERT INTO tiles VALUES (0, 0, 0, ?)",
                (sqlite3.Binary(tile),),
            )
        conn.commit()
    finally:
        conn.close()
    return path


@pytest.fixture
def make_tileset() -> Callable[..., db_models.TilesetDescriptor]:
    """Provide the tileset descriptor factory."""
    return _make_tileset


@pytest.fixture
def write_mbtiles() -> Callable[..., pathlib.Path]:
    """Provide the MBTiles file writer."""
    return _write_mbtiles


@pytest.fixture
def repo() -> database.InMemoryTilesetRepository:
    """Provide an in-memory registry holding the default tileset."""
    repository = database.InMemoryTilesetRepository()
    repository.add(_make_tileset())
    return repository


@pytest.fixture
def client(
    repo: database.InMemoryTilesetRepository,
) -> Iterator[testclient.TestClient]:
    """Provide a test client whose registry is the in-memory repo."""
    app = main.create_app()
    app.dependency_overrides[dependencies.get_repo] = lambda: repo
    try:
        yield testclient.TestClient(app)
    finally:
        app.dependency_overrides.clear()
