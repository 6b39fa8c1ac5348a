"""Dependency injection for API routes."""

from pdf_qa.api.deps.dependencies import (
    ServiceCache,
    get_document_service,
    get_ingestion_service,
    get_pdf_stream_service,
    get_query_service,
    get_service_cache,
    get_settings_dependency,
)

__all__ = [
    "ServiceCache",
    "get_document_service",
    "get_ingestion_service",
    "get_pdf_stream_service",
    "get_query_service",
    "get_service_cache",
    "get_settings_dependency",
]
