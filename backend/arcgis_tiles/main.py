"""FastAPI application entrypoint and configuration.

This module provides the main FastAPI application factory that configures
logging, sets up CORS middleware, includes the ArcGIS and catalog routers,
maps adapter errors to HTTP responses and exposes a health check endpoint.

Example:
    The application can be run with uvicorn:
        $ uvicorn arcgis_tiles.main:app --reload

    Or imported and used programmatically:
        >>> from arcgis_tiles.main import app
        >>> # Use app in ASGI server
"""

import fastapi
from fastapi import responses
from fastapi.middleware import cors

from arcgis_tiles.api import arcgis, services
from arcgis_tiles.core import config, errors
from arcgis_tiles.core import logging as app_logging

logger = app_logging.get_logger(__name__)


async def _service_not_found(
    request: fastapi.Request,
    exc: Exception,
) -> responses.JSONResponse:
    """Report an unknown service identifier as a 404."""
    return responses.JSONResponse(status_code=404, content={"detail": str(exc)})


async def _tileset_metadata_error(
    request: fastapi.Request,
    exc: Exception,
) -> responses.JSONResponse:
    """Report unusable tileset metadata in the ArcGIS error envelope."""
    details = getattr(exc, "details", {})
    logger.warning(
        "Tileset metadata rejected",
        path=request.url.path,
        error_type=type(exc).__name__,
        **details,
    )
    message = getattr(exc, "message", str(exc))
    return responses.JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": 500,
                "message": message,
                "details": [f"{key}={value}" for key, value in details.items()],
            }
        },
    )


def create_app() -> fastapi.FastAPI:
    """Create and configure the FastAPI application.

    Configures structured logging from settings, includes the ArcGIS and
    service catalog routers, registers error handlers and adds a health
    check endpoint. CORS origins are configured from settings so browser
    mapping SDKs can call the service directly.

    Returns:
        Configured FastAPI application instance ready for ASGI server.
    """
    settings = config.get_settings()
    app_logging.configure_logging(
        level=settings.log_level,
        format_type=settings.log_format,
    )
    app = fastapi.FastAPI(title="ArcGIS Tiles", version="0.1.0")

    app.include_router(arcgis.router)
    app.include_router(services.router)

    app.add_exception_handler(errors.ServiceNotFoundError, _service_not_found)
    app.add_exception_handler(
        errors.TilesetMetadataError,
        _tileset_metadata_error,
    )

    app.add_middleware(
        cors.CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health() -> dict[str, str]:  # type: ignore[misc]
        """Health check endpoint for monitoring and load balancers.

        Returns:
            Dictionary with status "ok" if the service is running.
        """
        return {"status": "ok"}

    logger.info(
        "Application created",
        registry_backend=settings.registry_backend,
    )
    return app


app = create_app()
