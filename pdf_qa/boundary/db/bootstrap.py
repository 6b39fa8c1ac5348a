"""
Idempotent schema bootstrap.

Brings an empty or older database up to the current row layout: installs
the pgvector extension, creates missing tables, adds columns introduced
after the first deployments and realigns the embedding column with the
configured vector dimension.

Dependencies: sqlalchemy, pgvector, pdf_qa.boundary.db
System role: Infrastructure readiness, run once from the API lifespan
"""

import asyncio
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from pdf_qa.boundary.db.base import Base
from pdf_qa.boundary.db.models import ChunkModel, DocumentModel

logger = logging.getLogger(__name__)

# (table, column, column DDL) added by later layouts
LATE_COLUMNS: tuple[tuple[str, str, str], ...] = (
    (DocumentModel.__tablename__, "created_at", "TIMESTAMPTZ DEFAULT now()"),
    (DocumentModel.__tablename__, "metadata", "JSONB"),
    (DocumentModel.__tablename__, "stage_reference", "VARCHAR(255)"),
    (ChunkModel.__tablename__, "char_start", "INTEGER"),
    (ChunkModel.__tablename__, "char_end", "INTEGER"),
    (ChunkModel.__tablename__, "source_meta", "JSONB"),
    (ChunkModel.__tablename__, "created_at", "TIMESTAMPTZ DEFAULT now()"),
)

_EMBEDDING_TYPE_SQL = text(
    """
    SELECT format_type(a.atttypid, a.atttypmod)
    FROM pg_attribute a
    WHERE a.attrelid = to_regclass(:table_name)
      AND a.attname = 'embedding'
      AND NOT a.attisdropped
    """
)


class InfrastructureBootstrapper:
    """
    Once-guarded schema readiness.

    Concurrent callers wait on the same lock; after the first success every
    call returns immediately. A failed attempt leaves the bootstrapper
    un-ready so the next call retries.
    """

    def __init__(self, engine: AsyncEngine, vector_dim: int) -> None:
        """
        Initialize bootstrapper.

        Args:
            engine: Async engine for the application database
            vector_dim: Expected embedding dimension
        """
        self._engine = engine
        self._vector_dim = vector_dim
        self._lock = asyncio.Lock()
        self._ready = False

    @property
    def is_ready(self) -> bool:
        return self._ready

    async def ensure_ready(self) -> None:
        """Create or upgrade the schema once per bootstrapper."""
        if self._ready:
            return
        async with self._lock:
            if self._ready:
                return
            async with self._engine.begin() as conn:
                await conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
                await conn.run_sync(Base.metadata.create_all)
                await self._add_late_columns(conn)
                await self._align_vector_dimension(conn)
            self._ready = True
            logger.info(
                "Database schema ready",
                extra={"vector_dim": self._vector_dim},
            )

    async def _add_late_columns(self, conn: AsyncConnection) -> None:
        for table_name, column_name, ddl in LATE_COLUMNS:
            await conn.execute(
                text(f"ALTER TABLE {table_name} ADD COLUMN IF NOT EXISTS {column_name} {ddl}")
            )

    async def _align_vector_dimension(self, conn: AsyncConnection) -> None:
        table_name = ChunkModel.__tablename__
        result = await conn.execute(_EMBEDDING_TYPE_SQL, {"table_name": table_name})
        declared = result.scalar_one_or_none()
        expected = f"vector({self._vector_dim})"
        if declared is None or declared.lower() == expected:
            return

        logger.warning(
            "Realigning embedding column dimension",
            extra={"declared": declared, "expected": expected},
        )
        await conn.execute(
            text(f"ALTER TABLE {table_name} ALTER COLUMN embedding TYPE {expected}")
        )
