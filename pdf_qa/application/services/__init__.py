"""
Application services.

Exports:
  - IngestionService: PDF ingestion pipeline
  - QueryService: Retrieval-augmented question answering
  - PdfStreamService: Staged PDF streaming with legacy fallback
  - DocumentService: Document listing
"""

from pdf_qa.application.services.document_service import DocumentService
from pdf_qa.application.services.ingestion_service import IngestionService
from pdf_qa.application.services.pdf_stream_service import PdfStreamService
from pdf_qa.application.services.query_service import QueryService

__all__ = [
    "DocumentService",
    "IngestionService",
    "PdfStreamService",
    "QueryService",
]
