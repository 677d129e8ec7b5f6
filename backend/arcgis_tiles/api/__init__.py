"""API router subpackage for the ArcGIS compatibility service.

Each module exposes its own APIRouter for composition in the application's
main FastAPI instance.

Submodules:
    - arcgis: MapServer root, layers and legend endpoints.
    - services: Catalog of the tilesets available as MapServer services.
"""
