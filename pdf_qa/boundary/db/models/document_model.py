"""
Document ORM model.

One row per ingested PDF. The row is written once, after the PDF has been
placed in its stage, and is never mutated afterwards.

Dependencies: sqlalchemy, pdf_qa.boundary.db.base
System role: Document persistence for ingestion and streaming lookups
"""

from typing import Any

from sqlalchemy import Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pdf_qa.boundary.db.base import Base, CreatedAtMixin


class DocumentModel(Base, CreatedAtMixin):
    """
    Ingested PDF document.

    Attributes:
        file_id: UUID string primary key, generated at ingestion
        filename: Sanitized lowercase filename ending in '.pdf'
        stage_path: Key relative to the stage, as reported by the object store
        stage_reference: '@'-prefixed stage holding the PDF
        chunk_count: Number of chunks produced by the chunker
        metadata_: JSON copy of the pointer fields (column 'metadata')
        created_at: Ingestion timestamp (UTC)

    Relationships:
        chunks: ChunkModel rows (cascade delete)
    """

    __tablename__ = "pdf_documents"

    file_id: Mapped[str] = mapped_column(String(36), primary_key=True)

    filename: Mapped[str] = mapped_column(
        String(512),
        nullable=False,
        doc="Sanitized filename",
    )

    stage_path: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        unique=True,
        doc="Key relative to the stage",
    )

    stage_reference: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        doc="'@'-prefixed stage name",
    )

    chunk_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    metadata_: Mapped[dict[str, Any] | None] = mapped_column(
        "metadata",
        JSONB,
        nullable=True,
    )

    # Relationships
    chunks = relationship(
        "ChunkModel",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
