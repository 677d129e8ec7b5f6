"""Pure translation services from tileset metadata to ArcGIS documents.

Submodules:
    - metadata: Typed accessor over the loosely-typed metadata mapping.
    - lods: Web Mercator level-of-detail pyramid.
    - extent: Bounds to ArcGIS extent conversion.
    - arcgis: Service root, layer list and legend document builders.
"""
