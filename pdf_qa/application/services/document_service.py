"""
Document listing.

Dependencies: sqlalchemy, pdf_qa.boundary.db, pdf_qa.core.identifiers
System role: Document catalogue behind the documents endpoint
"""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pdf_qa.boundary.db.CRUD.document_crud import document_crud
from pdf_qa.boundary.db.models.document_model import DocumentModel
from pdf_qa.core.exceptions import UpstreamUnavailableError
from pdf_qa.core.identifiers import extract_relative_stage_path, extract_stage_reference_from_path
from pdf_qa.models.document import DocumentSummary


class DocumentService:
    """List ingested documents with stage info normalized across layouts."""

    def __init__(self, db: AsyncSession, default_stage: str) -> None:
        """
        Initialize document service.

        Args:
            db: AsyncSession for document rows
            default_stage: Stage reported for rows without stage info
        """
        self.db = db
        self._default_stage = default_stage

    def to_summary(self, document: DocumentModel) -> DocumentSummary:
        return DocumentSummary(
            file_id=document.file_id,
            filename=document.filename,
            stage_path=extract_relative_stage_path(document.stage_path),
            stage_reference=(
                document.stage_reference
                or extract_stage_reference_from_path(document.stage_path)
                or self._default_stage
            ),
            chunk_count=document.chunk_count or 0,
            created_at=document.created_at,
        )

    async def list_documents(self) -> list[DocumentSummary]:
        """
        List documents, newest first.

        Returns:
            list[DocumentSummary]: One entry per stored document

        Raises:
            UpstreamUnavailableError: Row store failure
        """
        try:
            documents = await document_crud.list_recent(self.db)
        except SQLAlchemyError as e:
            raise UpstreamUnavailableError(f"Document listing failed: {e}", operation="list") from e
        return [self.to_summary(document) for document in documents]
