"""
Chunk ORM model.

One row per text window, carrying its embedding for similarity search.
The vector dimension is fixed system-wide by MODEL_VECTOR_DIM and must
match the embedding model.

Dependencies: sqlalchemy, pgvector, pdf_qa.boundary.db.base, pdf_qa.configs
System role: Vector storage for retrieval
"""

import uuid
from typing import Any

from pgvector.sqlalchemy import Vector
from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pdf_qa.boundary.db.base import Base, CreatedAtMixin
from pdf_qa.configs import get_settings


class ChunkModel(Base, CreatedAtMixin):
    """
    Embedded chunk of a document page.

    Attributes:
        chunk_id: UUID string primary key
        file_id: Owning document (ON DELETE CASCADE)
        page_number: 1-based page number
        chunk_index: 0-based position within the document
        chunk_text: Whitespace-normalized text
        char_start: Start offset into the page text
        char_end: End offset into the page text (exclusive)
        source_meta: JSON provenance (page, offsets, stage path/reference, filename)
        embedding: Chunk text embedding
    """

    __tablename__ = "pdf_vectors"

    chunk_id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    file_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("pdf_documents.file_id", ondelete="CASCADE"),
        nullable=False,
    )

    page_number: Mapped[int] = mapped_column(Integer, nullable=False)
    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)
    chunk_text: Mapped[str] = mapped_column(Text, nullable=False)
    char_start: Mapped[int | None] = mapped_column(Integer, nullable=True)
    char_end: Mapped[int | None] = mapped_column(Integer, nullable=True)

    source_meta: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)

    embedding: Mapped[list[float]] = mapped_column(
        Vector(get_settings().models.vector_dim),
        nullable=False,
    )

    # Relationships
    document = relationship("DocumentModel", back_populates="chunks")

    __table_args__ = (
        Index("idx_pdf_vectors_file", "file_id"),
    )
