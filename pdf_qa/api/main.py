"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, pdf_qa.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pdf_qa.api.deps.dependencies import get_service_cache
from pdf_qa.configs import get_settings
from pdf_qa.observability import configure_logging

from .routers import (
    documents_router,
    health_router,
    pdf_router,
    query_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup configures logging and makes sure the schema is ready;
    shutdown closes cached clients.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("uvicorn")

    # Startup
    cache = get_service_cache()
    logger.info("Ensuring database schema...")
    await cache.bootstrapper.ensure_ready()
    logger.info("Database schema ready")

    yield

    # Shutdown
    await cache.aclose()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    app = FastAPI(
        title="PDF Q&A API",
        description="Ingest PDFs, ask grounded questions and stream staged PDFs",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[
            "Content-Disposition",
            "X-Pdf-Filename",
            "X-Pdf-File-Id",
            "X-Pdf-Stage-Path",
            "X-Pdf-Stage-Reference",
        ],
    )

    # Register all routers with /api prefix
    app.include_router(health_router, prefix="/api")
    app.include_router(documents_router, prefix="/api")
    app.include_router(query_router, prefix="/api")
    app.include_router(pdf_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "pdf_qa.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
    )
