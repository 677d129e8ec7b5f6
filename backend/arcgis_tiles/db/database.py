"""Tileset registries: protocol, in-memory and PostgreSQL repositories."""

from __future__ import annotations

import contextlib
import datetime
from typing import TYPE_CHECKING, Any, Protocol, cast

import psycopg2
import psycopg2.extensions
import psycopg2.extras

from arcgis_tiles.db import mbtiles
from arcgis_tiles.db import models as db_models

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from arcgis_tiles.core import config


class TilesetRepositoryProtocol(Protocol):
    """Protocol interface for storing and retrieving tileset descriptors.

    Implementations provide lookup of TilesetDescriptor objects by service
    identifier, backed by memory (testing), MBTiles files or PostgreSQL.
    """

    def add(
        self,
        tileset: db_models.TilesetDescriptor,
    ) -> db_models.TilesetDescriptor: ...

    def get(self, service_id: str) -> db_models.TilesetDescriptor | None: ...

    def all(self) -> Iterable[db_models.TilesetDescriptor]: ...


class InMemoryTilesetRepository(TilesetRepositoryProtocol):
    """Simple in-memory store for tests and local development.

    Stores tileset descriptors in a dictionary. Data is lost when the
    process exits.
    """

    def __init__(self) -> None:
        self._store: dict[str, db_models.TilesetDescriptor] = {}

    def add(
        self,
        tileset: db_models.TilesetDescriptor,
    ) -> db_models.TilesetDescriptor:
        """Add or replace a tileset in the repository.

        Args:
            tileset: Tileset descriptor to store.

        Returns:
            The stored descriptor.
        """
        self._store[tileset.id] = tileset
        return tileset

    def get(self, service_id: str) -> db_models.TilesetDescriptor | None:
        return self._store.get(service_id)

    def all(self) -> Iterable[db_models.TilesetDescriptor]:
        return self._store.values()


class PostgresTilesetRepository(TilesetRepositoryProtocol):
    """PostgreSQL-backed repository for tileset descriptors.

    The metadata map is kept in a JSONB column so that its values keep the
    JSON types they were written with. The tilesets table is created on
    initialization.
    """

    CREATE_TABLE_SQL = """
    CREATE TABLE IF NOT EXISTS tilesets (
      id TEXT PRIMARY KEY,
      format TEXT NOT NULL,
      metadata JSONB NOT NULL DEFAULT '{}'::jsonb,
      created_at TIMESTAMPTZ DEFAULT now()
    );
    """

    def __init__(self, settings: config.Settings) -> None:
        """Initialize repository with database settings.

        Args:
            settings: Application settings containing database connection URL.
        """
        self.settings = settings
        self._ensure_schema()

    @contextlib.contextmanager
    def _connection(self) -> Iterator[psycopg2.extensions.connection]:
        """Open a connection for one operation and close it afterwards."""
        conn = psycopg2.connect(
            self.settings.database_url,
            cursor_factory=psycopg2.extras.RealDictCursor,
        )
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._connection() as conn, conn.cursor() as cur:
            cur.execute(self.CREATE_TABLE_SQL)
            conn.commit()

    def add(
        self,
        tileset: db_models.TilesetDescriptor,
    ) -> db_models.TilesetDescriptor:
        with self._connection() as conn, conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO tilesets (id, format, metadata, created_at)
                VALUES (%(id)s, %(format)s, %(metadata)s, %(created_at)s)
                ON CONFLICT (id) DO UPDATE SET
                    format = EXCLUDED.format,
                    metadata = EXCLUDED.metadata;
                """,
                self._to_row(tileset),
            )
            conn.commit()
        return tileset

    def get(self, service_id: str) -> db_models.TilesetDescriptor | None:
        with self._connection() as conn, conn.cursor() as cur:
            cur.execute("SELECT * FROM tilesets WHERE id = %s", (service_id,))
            row = cur.fetchone()
            if row is None:
                return None
            else:
                return self._from_row(cast(dict[str, object], row))

    def all(self) -> Iterable[db_models.TilesetDescriptor]:
        with self._connection() as conn, conn.cursor() as cur:
            cur.execute("SELECT * FROM tilesets ORDER BY id")
            for row in cur.fetchall():
                yield self._from_row(cast(dict[str, object], row))

    @staticmethod
    def _to_row(tileset: db_models.TilesetDescriptor) -> dict[str, object]:
        """Convert a TilesetDescriptor to a parameter dictionary.

        Args:
            tileset: Descriptor to convert.

        Returns:
            Dictionary suitable for parameterized SQL insertion, with the
            metadata map wrapped for JSONB adaptation.
        """
        return {
            "id": tileset.id,
            "format": tileset.format,
            "metadata": psycopg2.extras.Json(tileset.metadata),
            "created_at": tileset.created_at,
        }

    @staticmethod
    def _from_row(row: dict[str, object]) -> db_models.TilesetDescriptor:
        """Convert a database row dictionary to a TilesetDescriptor.

        Args:
            row: Dictionary from database query result.

        Returns:
            TilesetDescriptor with the decoded metadata map.
        """
        metadata = row.get("metadata")
        created_at = row.get("created_at")
        return db_models.TilesetDescriptor(
            id=str(row["id"]),
            format=str(row["format"]),
            metadata=(
                cast(dict[str, Any], metadata)
                if isinstance(metadata, dict)
                else {}
            ),
            created_at=(
                created_at
                if isinstance(created_at, datetime.datetime)
                else datetime.datetime.now(datetime.UTC)
            ),
        )


def get_tileset_repository(
    settings: config.Settings,
) -> TilesetRepositoryProtocol:
    """Factory function to create the configured tileset repository.

    Args:
        settings: Application settings selecting the registry backend.

    Returns:
        PostgresTilesetRepository when ``registry_backend`` is "postgres",
        otherwise an MBTilesRepository over ``tileset_dir``.
    """
    if settings.registry_backend == "postgres":
        return PostgresTilesetRepository(settings)

    return mbtiles.MBTilesRepository(settings.tileset_dir)
