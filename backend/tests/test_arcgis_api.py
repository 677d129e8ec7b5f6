"""API endpoint tests for the ArcGIS MapServer endpoints.

This module covers the HTTP contract of the three MapServer endpoints:
    - 200 responses with the expected documents for a known service,
    - 404 for unknown service identifiers on every endpoint,
    - 500 ArcGIS error envelopes for missing required metadata,
    - ``f=pjson`` output and nested service identifiers.

The tileset registry is always injected through dependency overrides with
an in-memory repository (see conftest.py).

See Also:
    - backend/arcgis_tiles/api/arcgis.py for the endpoints.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import testclient

    from arcgis_tiles.db import database
    from arcgis_tiles.db import models as db_models

    TilesetFactory = Callable[..., db_models.TilesetDescriptor]

BASE = "/arcgis/rest/services"


def test_get_service(client: testclient.TestClient) -> None:
    """Test the service root endpoint returns the MapServer document."""
    response = client.get(f"{BASE}/roads/MapServer", params={"f": "json"})
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == "roads"
    assert body["supportedImageFormatTypes"] == "PNG"
    assert len(body["tileInfo"]["lods"]) == 5
    assert body["tileInfo"]["lods"][0] == {
        "level": 0,
        "resolution": 156543.033928,
        "scale": 96 * 39.37 * 156543.033928,
    }


def test_get_service_layers(client: testclient.TestClient) -> None:
    """Test the layers endpoint returns a single root layer."""
    response = client.get(f"{BASE}/roads/MapServer/layers")
    assert response.status_code == 200
    layers = response.json()["layers"]
    assert len(layers) == 1
    assert layers[0]["id"] == 0
    assert layers[0]["parentLayer"] is None


def test_get_service_legend(client: testclient.TestClient) -> None:
    """Test the legend endpoint returns the placeholder legend."""
    response = client.get(f"{BASE}/roads/MapServer/legend")
    assert response.status_code == 200
    layers = response.json()["layers"]
    assert len(layers) == 1
    assert layers[0]["layerId"] == 0
    assert layers[0]["legend"] == []


@pytest.mark.parametrize("suffix", ["MapServer", "MapServer/layers", "MapServer/legend"])
def test_unknown_service_not_found(
    client: testclient.TestClient,
    suffix: str,
) -> None:
    """Test unknown services return 404 on every endpoint."""
    response = client.get(f"{BASE}/missing/{suffix}")
    assert response.status_code == 404
    assert "not found" in response.json()["detail"].lower()


def test_missing_bounds_is_server_error(
    client: testclient.TestClient,
    repo: database.InMemoryTilesetRepository,
    make_tileset: TilesetFactory,
) -> None:
    """Test missing bounds produce an ArcGIS error envelope, not a crash."""
    repo.add(make_tileset(service_id="nobounds", bounds=None))
    response = client.get(f"{BASE}/nobounds/MapServer")
    assert response.status_code == 500
    error = response.json()["error"]
    assert error["code"] == 500
    assert "bounds" in error["message"].lower()
    assert "key=bounds" in error["details"]


def test_missing_zoom_is_server_error(
    client: testclient.TestClient,
    repo: database.InMemoryTilesetRepository,
    make_tileset: TilesetFactory,
) -> None:
    """Test a missing zoom range produces an ArcGIS error envelope."""
    repo.add(make_tileset(service_id="nozoom", maxzoom=None))
    response = client.get(f"{BASE}/nozoom/MapServer")
    assert response.status_code == 500
    assert "key=maxzoom" in response.json()["error"]["details"]


def test_zoom_outside_grid_is_server_error(
    client: testclient.TestClient,
    repo: database.InMemoryTilesetRepository,
    make_tileset: TilesetFactory,
) -> None:
    """Test an oversized zoom level produces an ArcGIS error envelope."""
    repo.add(make_tileset(service_id="deep", maxzoom="2000"))
    response = client.get(f"{BASE}/deep/MapServer")
    assert response.status_code == 500
    error = response.json()["error"]
    assert error["code"] == 500
    assert "key=maxzoom" in error["details"]
    assert "value=2000" in error["details"]


def test_malformed_bounds_on_layers(
    client: testclient.TestClient,
    repo: database.InMemoryTilesetRepository,
    make_tileset: TilesetFactory,
) -> None:
    """Test malformed bounds fail the layers endpoint too."""
    repo.add(make_tileset(service_id="badbounds", bounds=[0.0, 1.0]))
    response = client.get(f"{BASE}/badbounds/MapServer/layers")
    assert response.status_code == 500
    assert response.json()["error"]["code"] == 500


def test_missing_attribution_still_succeeds(
    client: testclient.TestClient,
    repo: database.InMemoryTilesetRepository,
    make_tileset: TilesetFactory,
) -> None:
    """Test a missing optional field defaults to an empty string."""
    repo.add(make_tileset(service_id="anon", attribution=None))
    response = client.get(f"{BASE}/anon/MapServer")
    assert response.status_code == 200
    assert response.json()["copyrightText"] == ""
    assert response.json()["documentInfo"]["Author"] == ""


def test_nested_service_id(
    client: testclient.TestClient,
    repo: database.InMemoryTilesetRepository,
    make_tileset: TilesetFactory,
) -> None:
    """Test service identifiers containing slashes resolve."""
    repo.add(make_tileset(service_id="usa/roads"))
    response = client.get(f"{BASE}/usa/roads/MapServer")
    assert response.status_code == 200
    assert response.json()["id"] == "usa/roads"

    response = client.get(f"{BASE}/usa/roads/MapServer/legend")
    assert response.status_code == 200


def test_pjson_output(client: testclient.TestClient) -> None:
    """Test f=pjson returns the same document, indented."""
    plain = client.get(f"{BASE}/roads/MapServer", params={"f": "json"})
    pretty = client.get(f"{BASE}/roads/MapServer", params={"f": "pjson"})
    assert pretty.status_code == 200
    assert pretty.headers["content-type"].startswith("application/json")
    assert "\n" in pretty.text
    assert json.loads(pretty.text) == plain.json()


def test_repeated_requests_identical(client: testclient.TestClient) -> None:
    """Test two requests for the same service return identical bytes."""
    first = client.get(f"{BASE}/roads/MapServer")
    second = client.get(f"{BASE}/roads/MapServer")
    assert first.content == second.content
