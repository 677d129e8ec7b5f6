"""ArcGIS MapServer REST endpoints.

This module serves tileset metadata in the shape ArcGIS clients expect from
a cached MapServer: the service root (tile grid, extents, document info),
the layer list and the legend. Service identifiers may contain slashes, as
tilesets in nested directories are served under their relative path.

ArcGIS clients append ``f=json`` or ``f=pjson`` to every request; both
return the same document, ``pjson`` indented for reading.

Example:
    Describe a service:
        >>> response = client.get("/arcgis/rest/services/roads/MapServer?f=json")
        >>> response.json()["tileInfo"]["lods"][0]
        >>> # Returns: {"level": 0, "resolution": 156543.033928,
        >>> #           "scale": 591657527.591555}

    Add the service in an ArcGIS web map:
        >>> new TileLayer({
        ...     url: "http://api/arcgis/rest/services/roads/MapServer"
        ... });
"""

from __future__ import annotations

import json
from typing import Any, Literal

import fastapi
from fastapi import responses

from arcgis_tiles.api import dependencies
from arcgis_tiles.db import models as db_models
from arcgis_tiles.services import arcgis

router = fastapi.APIRouter(prefix="/arcgis/rest/services", tags=["arcgis"])

OutputFormat = Literal["json", "pjson"]


def _respond(document: dict[str, Any], f: OutputFormat) -> responses.Response:
    """Serialize a document, indented when ``f`` is "pjson"."""
    if f == "pjson":
        return responses.Response(
            content=json.dumps(document, indent=2),
            media_type="application/json",
        )

    return responses.JSONResponse(document)


@router.get("/{service_id:path}/MapServer")
async def get_service(
    service_id: str,
    f: OutputFormat = "json",
    tileset: db_models.TilesetDescriptor = fastapi.Depends(  # noqa: B008
        dependencies.get_tileset
    ),
) -> responses.Response:
    """Describe a tileset as an ArcGIS cached map service.

    Args:
        service_id: Service identifier (tileset id).
        f: Output format ("json" or "pjson").
        tileset: Tileset descriptor (injected via FastAPI Depends).

    Returns:
        The MapServer root document.

    Raises:
        ServiceNotFoundError: If the service does not exist (404).
        TilesetMetadataError: If the zoom range or bounds are missing or
            malformed (500).
    """
    return _respond(arcgis.build_service_description(service_id, tileset), f)


@router.get("/{service_id:path}/MapServer/layers")
async def get_service_layers(
    service_id: str,
    f: OutputFormat = "json",
    tileset: db_models.TilesetDescriptor = fastapi.Depends(  # noqa: B008
        dependencies.get_tileset
    ),
) -> responses.Response:
    """List the single root layer of a tileset service.

    Raises:
        ServiceNotFoundError: If the service does not exist (404).
        TilesetMetadataError: If the bounds are missing or malformed (500).
    """
    return _respond(arcgis.build_layer_list(service_id, tileset), f)


@router.get("/{service_id:path}/MapServer/legend")
async def get_service_legend(
    service_id: str,
    f: OutputFormat = "json",
    tileset: db_models.TilesetDescriptor = fastapi.Depends(  # noqa: B008
        dependencies.get_tileset
    ),
) -> responses.Response:
    """Return the placeholder legend of a tileset service."""
    return _respond(arcgis.build_legend(service_id, tileset), f)
