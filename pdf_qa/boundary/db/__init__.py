"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, CreatedAtMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - DocumentModel, ChunkModel: Stored documents and embedded chunks
  - document_crud, chunk_crud: CRUD operation singletons
  - InfrastructureBootstrapper: Idempotent schema setup

Dependencies: sqlalchemy, asyncpg, pgvector, pdf_qa.configs
System role: Database adapter for document rows and chunk vectors
"""

from pdf_qa.boundary.db.base import Base, CreatedAtMixin
from pdf_qa.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from pdf_qa.boundary.db.models import ChunkModel, DocumentModel
from pdf_qa.boundary.db.CRUD import (
    BaseCRUD,
    ChunkCRUD,
    ChunkSearchRow,
    DocumentCRUD,
    chunk_crud,
    document_crud,
)
from pdf_qa.boundary.db.bootstrap import InfrastructureBootstrapper

__all__ = [
    # Base classes
    "Base",
    "CreatedAtMixin",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "DocumentModel",
    "ChunkModel",
    # CRUD
    "BaseCRUD",
    "DocumentCRUD",
    "ChunkCRUD",
    "ChunkSearchRow",
    "document_crud",
    "chunk_crud",
    # Bootstrap
    "InfrastructureBootstrapper",
]
