"""Catalog of tilesets available as ArcGIS services.

Example:
    List services:
        >>> response = client.get("/services")
        >>> response.json()
        >>> # Returns: [{"id": "usa/roads", "name": "Roads",
        >>> #            "imageType": "png",
        >>> #            "url": "http://api/arcgis/rest/services/usa/roads/MapServer"}]
"""

from __future__ import annotations

from typing_extensions import TypedDict

import fastapi

from arcgis_tiles.api import dependencies
from arcgis_tiles.db import database
from arcgis_tiles.services import metadata as metadata_service

router = fastapi.APIRouter(prefix="/services", tags=["services"])


class ServiceEntry(TypedDict):
    id: str
    name: str
    imageType: str
    url: str


@router.get("")
async def list_services(
    request: fastapi.Request,
    repo: database.TilesetRepositoryProtocol = fastapi.Depends(  # noqa: B008
        dependencies.get_repo
    ),
) -> list[ServiceEntry]:
    """List every tileset with the URL of its MapServer root.

    Args:
        request: Incoming request, used to build absolute service URLs.
        repo: Tileset repository (injected via FastAPI Depends).

    Returns:
        One entry per tileset, in repository order.
    """
    base_url = str(request.base_url).rstrip("/")
    entries = []
    for tileset in repo.all():
        accessor = metadata_service.MetadataAccessor(tileset.metadata)
        entries.append(
            ServiceEntry(
                id=tileset.id,
                name=accessor.get_string("name"),
                imageType=tileset.format,
                url=f"{base_url}/arcgis/rest/services/{tileset.id}/MapServer",
            )
        )
    return entries
