"""
Document domain models and schemas.

Dependencies: pydantic
System role: Ingestion results, document listing and PDF stream contracts
"""

from collections.abc import AsyncIterator
from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IngestionSummary(_CamelModel):
    """Result of ingesting one PDF."""

    file_id: str
    filename: str
    stage_path: str
    chunk_count: int = Field(ge=0)


class DocumentSummary(_CamelModel):
    """Listed document with normalized stage info."""

    file_id: str
    filename: str
    stage_path: str | None = None
    stage_reference: str
    chunk_count: int = 0
    created_at: datetime | None = None


class DocumentListResponse(BaseModel):
    """Response schema for document listing."""

    documents: list[DocumentSummary]


class UploadResponse(BaseModel):
    """Response schema for PDF uploads."""

    documents: list[IngestionSummary]


class UploadErrorResponse(BaseModel):
    """Error body for a partially failed upload batch."""

    message: str
    documents: list[IngestionSummary] = Field(default_factory=list)


@dataclass
class PdfStream:
    """Headers plus the byte iterator of a resolved staged PDF."""

    headers: dict[str, str]
    body: AsyncIterator[bytes]
    media_type: str = "application/pdf"
