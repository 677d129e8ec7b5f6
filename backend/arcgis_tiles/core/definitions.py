"""Fixed tiling scheme and ArcGIS schema constants.

All served tilesets are assumed to use the standard 256x256 Web Mercator
(EPSG:3857) XYZ tiling scheme. The values below describe that grid and the
fixed strings ArcGIS clients look for in a cached MapServer description.
"""

from typing import Final

# Web Mercator spatial reference
WEB_MERCATOR_WKID: Final = 3857

# Meters per pixel at zoom 0 for a 256 pixel tile
SCALE_FACTOR: Final = 156543.033928

# Tile imagery is not inspected for its real DPI
DPI: Final = 96

INCHES_PER_METER: Final = 39.37

TILE_SIZE: Final = 256

# Top-left corner of the tile grid in meters
ORIGIN_X: Final = -20037508.342787
ORIGIN_Y: Final = 20037508.342787

CURRENT_VERSION: Final = "10.4"
CAPABILITIES: Final = "Map,TilesOnly"
UNITS: Final = "esriMeters"
HTML_POPUP_TYPE: Final = "esriServerHTMLPopupTypeAsHTMLText"

ROOT_LAYER_ID: Final = 0
NO_PARENT_LAYER_ID: Final = -1

# Zoom levels the tile grid is defined for
MIN_ZOOM: Final = 0
MAX_ZOOM: Final = 30
