"""Web Mercator level-of-detail pyramid.

ArcGIS clients pick which zoom tier to request from the ``lods`` array of a
cached service's ``tileInfo``. Each entry pairs a zoom level with its ground
resolution (meters per pixel) and the equivalent map scale denominator at
the assumed screen DPI.
"""

from __future__ import annotations

import dataclasses

from arcgis_tiles.core import definitions


@dataclasses.dataclass(frozen=True)
class LOD:
    """One zoom level of the tile pyramid.

    Attributes:
        level: Zoom level.
        resolution: Meters per pixel at this level.
        scale: Scale denominator at this level.
    """

    level: int
    resolution: float
    scale: float


def resolution(level: int) -> float:
    """Return meters per pixel at ``level`` for 256 pixel tiles."""
    return definitions.SCALE_FACTOR / 2**level


def scale(level_resolution: float) -> float:
    """Return the scale denominator for a resolution at the fixed DPI."""
    return definitions.DPI * definitions.INCHES_PER_METER * level_resolution


def compute_lods(min_zoom: int, max_zoom: int) -> list[LOD]:
    """Compute the LOD entries for every zoom level in a range.

    Args:
        min_zoom: Lowest zoom level, inclusive.
        max_zoom: Highest zoom level, inclusive.

    Returns:
        One LOD per level in ascending order. Empty when
        ``min_zoom > max_zoom``.

    Example:
        >>> lods = compute_lods(0, 1)
        >>> lods[0].resolution
        156543.033928
        >>> lods[1].resolution
        78271.516964
    """
    lods = []
    for level in range(min_zoom, max_zoom + 1):
        level_resolution = resolution(level)
        lods.append(
            LOD(
                level=level,
                resolution=level_resolution,
                scale=scale(level_resolution),
            )
        )
    return lods
