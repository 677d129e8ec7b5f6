"""Shared FastAPI dependencies for tileset lookup."""

from __future__ import annotations

import functools

import fastapi

from arcgis_tiles.core import config, errors
from arcgis_tiles.db import database
from arcgis_tiles.db import models as db_models


@functools.lru_cache
def get_repo() -> database.TilesetRepositoryProtocol:
    """Resolve the tileset repository dependency.

    The repository is built once per process from the cached settings.

    Returns:
        TilesetRepositoryProtocol implementation selected by
        ``settings.registry_backend``.
    """
    return database.get_tileset_repository(config.get_settings())


def get_tileset(
    service_id: str,
    repo: database.TilesetRepositoryProtocol = fastapi.Depends(get_repo),  # noqa: B008
) -> db_models.TilesetDescriptor:
    """Look up the tileset behind a service identifier.

    Args:
        service_id: Service identifier from the request path.
        repo: Tileset repository (injected via FastAPI Depends).

    Returns:
        The tileset descriptor.

    Raises:
        ServiceNotFoundError: If the identifier does not resolve.
    """
    tileset = repo.get(service_id)
    if tileset is None:
        raise errors.ServiceNotFoundError(
            "Service not found",
            {"service_id": service_id},
        )

    return tileset
