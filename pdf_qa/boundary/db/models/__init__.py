"""
Database models package.

Exports:
  - DocumentModel: Ingested PDF row
  - ChunkModel: Embedded chunk row

Dependencies: sqlalchemy, pgvector, pdf_qa.boundary.db.base
System role: Database model definitions for domain entities
"""

from pdf_qa.boundary.db.models.document_model import DocumentModel
from pdf_qa.boundary.db.models.chunk_model import ChunkModel

__all__ = [
    "DocumentModel",
    "ChunkModel",
]
