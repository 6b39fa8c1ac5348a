"""
Document CRUD operations.

Dependencies: sqlalchemy, pdf_qa.boundary.db.models.document_model
System role: Document persistence operations
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pdf_qa.boundary.db.CRUD.base_crud import BaseCRUD
from pdf_qa.boundary.db.models.document_model import DocumentModel


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """CRUD operations for DocumentModel, keyed by file_id."""

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def get_by_file_id(
        self,
        session: AsyncSession,
        file_id: str,
    ) -> DocumentModel | None:
        """
        Retrieve a document by its file id.

        Args:
            session: Async database session
            file_id: Document UUID string

        Returns:
            DocumentModel if found, None otherwise
        """
        return await self.get_by_id(session, file_id)

    async def list_recent(
        self,
        session: AsyncSession,
        limit: int | None = None,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve documents, newest first.

        Args:
            session: Async database session
            limit: Maximum number of documents to return

        Returns:
            Sequence of DocumentModels ordered by created_at descending
        """
        stmt = select(DocumentModel).order_by(DocumentModel.created_at.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()


document_crud = DocumentCRUD()
