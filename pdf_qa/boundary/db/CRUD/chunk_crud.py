"""
Chunk CRUD operations and vector similarity search.

Similarity is cosine similarity (1 - cosine distance) computed by pgvector
in SQL; results join the owning document for filename and stage info.

Dependencies: sqlalchemy, pgvector, pdf_qa.boundary.db.models
System role: Vector persistence and retrieval
"""

from dataclasses import dataclass
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pdf_qa.boundary.db.CRUD.base_crud import BaseCRUD
from pdf_qa.boundary.db.models.chunk_model import ChunkModel
from pdf_qa.boundary.db.models.document_model import DocumentModel


@dataclass(frozen=True)
class ChunkSearchRow:
    """One similarity search hit."""

    chunk: ChunkModel
    document: DocumentModel
    relevance: float


class ChunkCRUD(BaseCRUD[ChunkModel]):
    """CRUD operations for ChunkModel."""

    def __init__(self) -> None:
        """Initialize ChunkCRUD with ChunkModel."""
        super().__init__(ChunkModel)

    async def create_chunk(
        self,
        session: AsyncSession,
        file_id: str,
        page_number: int,
        chunk_index: int,
        chunk_text: str,
        char_start: int,
        char_end: int,
        embedding: list[float],
        source_meta: dict[str, Any],
    ) -> ChunkModel:
        """
        Insert one embedded chunk.

        Args:
            session: Async database session
            file_id: Owning document id
            page_number: 1-based page number
            chunk_index: 0-based position in the document
            chunk_text: Normalized chunk text
            char_start: Start offset into the page text
            char_end: End offset into the page text
            embedding: Vector of the configured dimension
            source_meta: Provenance JSON

        Returns:
            Created ChunkModel (flushed, not committed)
        """
        return await self.create(
            session,
            file_id=file_id,
            page_number=page_number,
            chunk_index=chunk_index,
            chunk_text=chunk_text,
            char_start=char_start,
            char_end=char_end,
            embedding=embedding,
            source_meta=source_meta,
        )

    async def similarity_search(
        self,
        session: AsyncSession,
        query_vector: list[float],
        limit: int,
        file_ids: Sequence[str] | None = None,
    ) -> list[ChunkSearchRow]:
        """
        Rank chunks by cosine similarity to a query vector.

        Args:
            session: Async database session
            query_vector: Embedded question
            limit: Maximum rows returned
            file_ids: Restrict to these documents when non-empty

        Returns:
            list[ChunkSearchRow]: Hits ordered by relevance descending
        """
        relevance = (1 - ChunkModel.embedding.cosine_distance(query_vector)).label("relevance")
        stmt = (
            select(ChunkModel, DocumentModel, relevance)
            .join(DocumentModel, DocumentModel.file_id == ChunkModel.file_id)
            .order_by(relevance.desc())
            .limit(limit)
        )
        if file_ids:
            stmt = stmt.where(ChunkModel.file_id.in_(list(file_ids)))

        result = await session.execute(stmt)
        return [
            ChunkSearchRow(chunk=chunk, document=document, relevance=float(score))
            for chunk, document, score in result.all()
        ]


chunk_crud = ChunkCRUD()
