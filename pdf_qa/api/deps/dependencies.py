"""
Dependency injection container.

Factory functions for FastAPI dependencies. Heavy clients (S3, models,
HTTP) live in one ServiceCache per process; services are built per request
around the request's database session.

Dependencies: pdf_qa.configs, pdf_qa.application, pdf_qa.boundary
System role: DI container for service injection
"""

import httpx
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pdf_qa.application.services import (
    DocumentService,
    IngestionService,
    PdfStreamService,
    QueryService,
)
from pdf_qa.boundary.aws.s3_stage_client import S3StageClient
from pdf_qa.boundary.db import InfrastructureBootstrapper, get_async_db, get_async_engine
from pdf_qa.boundary.http.object_fetcher import ObjectFetcher
from pdf_qa.configs import Settings, get_settings
from pdf_qa.core.chunking import TextChunker


class ServiceCache:
    """Container for cached client instances."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._stage_client = None
        self._embeddings = None
        self._chat_model = None
        self._http_client = None
        self._bootstrapper = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def stage_client(self) -> S3StageClient:
        """Get cached S3 stage client."""
        if self._stage_client is None:
            self._stage_client = S3StageClient(
                bucket=self.settings.stage.bucket,
                region=self.settings.stage.region,
            )
        return self._stage_client

    @property
    def embeddings(self):
        """Get cached embedding model."""
        if self._embeddings is None:
            from pdf_qa.boundary.llm.embeddings import get_embeddings
            self._embeddings = get_embeddings(self.settings.models)
        return self._embeddings

    @property
    def chat_model(self):
        """Get cached chat model."""
        if self._chat_model is None:
            from pdf_qa.boundary.llm.chat_model import get_chat_model
            self._chat_model = get_chat_model(self.settings.models)
        return self._chat_model

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Get cached HTTP client for presigned fetches."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(30.0, connect=10.0),
                follow_redirects=True,
            )
        return self._http_client

    @property
    def bootstrapper(self) -> InfrastructureBootstrapper:
        """Get cached schema bootstrapper."""
        if self._bootstrapper is None:
            self._bootstrapper = InfrastructureBootstrapper(
                engine=get_async_engine(),
                vector_dim=self.settings.models.vector_dim,
            )
        return self._bootstrapper

    async def aclose(self) -> None:
        """Close the HTTP client and clear all cached instances."""
        if self._http_client is not None:
            await self._http_client.aclose()
        self.clear()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._stage_client = None
        self._embeddings = None
        self._chat_model = None
        self._http_client = None
        self._bootstrapper = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_document_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> DocumentService:
    """
    Get document service instance.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings

    Returns:
        DocumentService: Document listing service
    """
    return DocumentService(db=db, default_stage=settings.stage.stage_reference)


def get_ingestion_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> IngestionService:
    """
    Get ingestion service instance.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings

    Returns:
        IngestionService: PDF ingestion service
    """
    cache = get_service_cache()
    return IngestionService(
        db=db,
        stage_client=cache.stage_client,
        embeddings=cache.embeddings,
        stage_reference=settings.stage.stage_reference,
        chunker=TextChunker(
            chunk_size=settings.pipeline.chunk_size,
            chunk_overlap=settings.pipeline.chunk_overlap,
        ),
    )


def get_query_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> QueryService:
    """
    Get query service instance.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings

    Returns:
        QueryService: Question answering service
    """
    cache = get_service_cache()
    return QueryService(
        db=db,
        embeddings=cache.embeddings,
        chat_model=cache.chat_model,
        default_stage=settings.stage.stage_reference,
        default_top_k=settings.pipeline.default_top_k,
    )


def get_pdf_stream_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> PdfStreamService:
    """
    Get PDF stream service instance.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings

    Returns:
        PdfStreamService: Staged PDF streaming service
    """
    cache = get_service_cache()
    return PdfStreamService(
        db=db,
        stage_client=cache.stage_client,
        fetcher=ObjectFetcher(cache.http_client),
        default_stage=settings.stage.stage_reference,
        presign_ttl=settings.stage.presign_ttl,
    )
