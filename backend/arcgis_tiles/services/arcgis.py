"""Builders for ArcGIS MapServer JSON documents.

Each builder is a pure function of a service identifier and a tileset
descriptor. Documents are freshly built on every call with a fixed key
order, so identical input always serializes to identical JSON.

Only a single synthetic root layer is modeled: tile servers have no notion
of an ArcGIS layer hierarchy, so the whole tileset is presented as layer 0.

Example:
    Build the service root for a tileset:
        >>> from arcgis_tiles.db.models import TilesetDescriptor
        >>> from arcgis_tiles.services import arcgis
        >>> tileset = TilesetDescriptor(
        ...     id="roads",
        ...     format="png",
        ...     metadata={"name": "Roads", "minzoom": 0, "maxzoom": 2,
        ...               "bounds": [-1000.0, -1000.0, 1000.0, 1000.0]},
        ... )
        >>> doc = arcgis.build_service_description("roads", tileset)
        >>> doc["supportedImageFormatTypes"]
        'PNG'
        >>> len(doc["tileInfo"]["lods"])
        3
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any

from arcgis_tiles.core import definitions, errors
from arcgis_tiles.core import logging as app_logging
from arcgis_tiles.services import extent as extent_service
from arcgis_tiles.services import lods as lods_service
from arcgis_tiles.services import metadata as metadata_service

if TYPE_CHECKING:
    from arcgis_tiles.db import models as db_models

logger = app_logging.get_logger(__name__)

Document = dict[str, Any]


def _spatial_reference() -> Document:
    return dataclasses.asdict(extent_service.WEB_MERCATOR)


def _zoom(
    accessor: metadata_service.MetadataAccessor,
    service_id: str,
    key: str,
) -> int:
    level = accessor.get_int(key)
    if not definitions.MIN_ZOOM <= level <= definitions.MAX_ZOOM:
        raise errors.MissingZoomRangeError(
            f"Zoom level must be between {definitions.MIN_ZOOM} and "
            f"{definitions.MAX_ZOOM}",
            {"key": key, "service_id": service_id, "value": level},
        )
    return level


def _extent(accessor: metadata_service.MetadataAccessor) -> Document:
    bounds = accessor.get_float_array("bounds", 4)
    return dataclasses.asdict(extent_service.convert_extent(bounds))


def _tile_info(lods: list[lods_service.LOD]) -> Document:
    return {
        "rows": definitions.TILE_SIZE,
        "cols": definitions.TILE_SIZE,
        "dpi": definitions.DPI,
        "origin": {
            "x": definitions.ORIGIN_X,
            "y": definitions.ORIGIN_Y,
        },
        "spatialReference": _spatial_reference(),
        "lods": [dataclasses.asdict(lod) for lod in lods],
    }


def build_service_description(
    service_id: str,
    tileset: db_models.TilesetDescriptor,
) -> Document:
    """Build the MapServer service root document.

    Args:
        service_id: Identifier the service was requested under.
        tileset: Descriptor of the tileset behind the service.

    Returns:
        The service root document, including tile grid information with
        one LOD per zoom level and the tileset extent.

    Raises:
        MissingZoomRangeError: If minzoom or maxzoom is absent, not an
            integer or outside the tile grid zoom range.
        MissingBoundsError: If bounds is absent.
        MalformedBoundsError: If bounds is not four numbers.
    """
    accessor = metadata_service.MetadataAccessor(tileset.metadata, service_id)
    name = accessor.get_string("name")
    description = accessor.get_string("description")
    attribution = accessor.get_string("attribution")

    min_zoom = _zoom(accessor, service_id, "minzoom")
    max_zoom = _zoom(accessor, service_id, "maxzoom")
    lods = lods_service.compute_lods(min_zoom, max_zoom)

    extent = _extent(accessor)

    logger.debug(
        "Building service description",
        service_id=service_id,
        min_zoom=min_zoom,
        max_zoom=max_zoom,
    )

    document_info = {
        "Title": name,
        "Author": attribution,
        "Comments": "",
        "Subject": "",
        "Category": "",
        "Keywords": accessor.get_string("tags"),
        "Credits": accessor.get_string("credits"),
    }

    root_layer = {
        "id": definitions.ROOT_LAYER_ID,
        "name": name,
        "parentLayerId": definitions.NO_PARENT_LAYER_ID,
        "defaultVisibility": True,
        "subLayerIds": None,
        "minScale": 0,
        "maxScale": 0,
    }

    return {
        "currentVersion": definitions.CURRENT_VERSION,
        "id": service_id,
        "name": name,
        "mapName": name,
        "capabilities": definitions.CAPABILITIES,
        "description": description,
        "serviceDescription": description,
        "copyrightText": attribution,
        "singleFusedMapCache": True,
        "supportedImageFormatTypes": tileset.format.upper(),
        "units": definitions.UNITS,
        "layers": [root_layer],
        "tables": [],
        "spatialReference": _spatial_reference(),
        "tileInfo": _tile_info(lods),
        "documentInfo": document_info,
        "initialExtent": extent,
        "fullExtent": dict(extent),
        "exportTilesAllowed": False,
        "maxExportTilesCount": 0,
        "resampling": False,
    }


def build_layer_list(
    service_id: str,
    tileset: db_models.TilesetDescriptor,
) -> Document:
    """Build the MapServer layers document.

    The single root layer carries the tileset's name, description,
    attribution and extent. Fields that would describe features,
    symbology or sub-layers are emitted empty.

    Raises:
        MissingBoundsError: If bounds is absent.
        MalformedBoundsError: If bounds is not four numbers.
    """
    accessor = metadata_service.MetadataAccessor(tileset.metadata, service_id)

    layer = {
        "id": definitions.ROOT_LAYER_ID,
        "name": accessor.get_string("name"),
        "type": "",
        "description": accessor.get_string("description"),
        "geometryType": "",
        "copyrightText": accessor.get_string("attribution"),
        "parentLayer": None,
        "subLayers": [],
        "minScale": 0,
        "maxScale": 0,
        "defaultVisibility": False,
        "extent": _extent(accessor),
        "hasAttachments": False,
        "htmlPopupType": definitions.HTML_POPUP_TYPE,
        "drawingInfo": None,
        "displayField": "",
        "fields": [],
        "typeIdField": "",
        "types": "",
        "relationships": [],
        "capabilities": "",
    }

    return {"layers": [layer]}


def build_legend(
    service_id: str,
    tileset: db_models.TilesetDescriptor,
) -> Document:
    """Build the MapServer legend document.

    Symbology is not derived from tileset styles, so the root layer is
    listed with an empty legend.
    """
    accessor = metadata_service.MetadataAccessor(tileset.metadata, service_id)

    # TODO: derive legend elements from style metadata once styled layer
    # information is exposed by the tileset registry.
    layer = {
        "layerId": definitions.ROOT_LAYER_ID,
        "layerName": accessor.get_string("name"),
        "layerType": "",
        "minScale": 0,
        "maxScale": 0,
        "legend": [],
    }

    return {"layers": [layer]}
