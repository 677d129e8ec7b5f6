"""Bounds to ArcGIS extent conversion.

Bounds are taken to already be Web Mercator meters; no reprojection is
performed. The converter only validates and repackages the four values and
attaches the fixed spatial reference.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any

from arcgis_tiles.core import definitions
from arcgis_tiles.services import metadata

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclasses.dataclass(frozen=True)
class SpatialReference:
    wkid: int = definitions.WEB_MERCATOR_WKID


WEB_MERCATOR = SpatialReference()


@dataclasses.dataclass(frozen=True)
class Extent:
    """Bounding box in the ArcGIS JSON shape.

    Field names follow the ArcGIS schema so that ``dataclasses.asdict``
    produces the wire form directly.
    """

    xmin: float
    ymin: float
    xmax: float
    ymax: float
    spatialReference: SpatialReference = WEB_MERCATOR  # noqa: N815


def convert_extent(
    bounds: Sequence[float] | None,
    spatial_reference: SpatialReference = WEB_MERCATOR,
) -> Extent:
    """Convert ``[xmin, ymin, xmax, ymax]`` bounds to an Extent.

    Args:
        bounds: Four numbers in xmin, ymin, xmax, ymax order.
        spatial_reference: Spatial reference to attach.

    Returns:
        Extent with the same four values.

    Raises:
        MissingBoundsError: If ``bounds`` is None.
        MalformedBoundsError: If ``bounds`` does not hold exactly four
            numbers.

    Example:
        >>> convert_extent([1, 2, 3, 4])
        Extent(xmin=1.0, ymin=2.0, xmax=3.0, ymax=4.0, spatialReference=SpatialReference(wkid=3857))
    """
    details: dict[str, Any] = {"key": "bounds"}
    xmin, ymin, xmax, ymax = metadata.to_float_array(bounds, 4, details)
    return Extent(
        xmin=xmin,
        ymin=ymin,
        xmax=xmax,
        ymax=ymax,
        spatialReference=spatial_reference,
    )
