"""API endpoint tests for the service catalog.

See Also:
    - backend/arcgis_tiles/api/services.py for the endpoint.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import testclient

from arcgis_tiles import main
from arcgis_tiles.api import dependencies
from arcgis_tiles.db import database

if TYPE_CHECKING:
    from collections.abc import Callable

    from arcgis_tiles.db import models as db_models

    TilesetFactory = Callable[..., db_models.TilesetDescriptor]


def test_list_services_empty() -> None:
    """Test listing services when the registry is empty."""
    repo = database.InMemoryTilesetRepository()
    app = main.create_app()
    app.dependency_overrides[dependencies.get_repo] = lambda: repo
    client = testclient.TestClient(app)
    try:
        response = client.get("/services")
        assert response.status_code == 200
        assert response.json() == []
    finally:
        app.dependency_overrides.clear()


def test_list_services(
    client: testclient.TestClient,
    repo: database.InMemoryTilesetRepository,
    make_tileset: TilesetFactory,
) -> None:
    """Test each tileset is listed with its MapServer URL."""
    repo.add(make_tileset(service_id="usa/terrain", tile_format="jpg", name=None))
    response = client.get("/services")
    assert response.status_code == 200
    entries = {entry["id"]: entry for entry in response.json()}
    assert set(entries) == {"roads", "usa/terrain"}
    assert entries["roads"] == {
        "id": "roads",
        "name": "Roads",
        "imageType": "png",
        "url": "http://testserver/arcgis/rest/services/roads/MapServer",
    }
    assert entries["usa/terrain"]["name"] == ""
    assert entries["usa/terrain"]["imageType"] == "jpg"
