"""
Domain models and API schemas.

Exports chunk, document and query contracts shared by services and routers.
"""

from pdf_qa.models.chunk import ChunkRecord, RetrievedSource
from pdf_qa.models.document import (
    DocumentListResponse,
    DocumentSummary,
    IngestionSummary,
    PdfStream,
    UploadErrorResponse,
    UploadResponse,
)
from pdf_qa.models.query import QueryRequest, QueryResult

__all__ = [
    "ChunkRecord",
    "RetrievedSource",
    "DocumentListResponse",
    "DocumentSummary",
    "IngestionSummary",
    "PdfStream",
    "UploadErrorResponse",
    "UploadResponse",
    "QueryRequest",
    "QueryResult",
]
