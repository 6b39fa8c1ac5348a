"""
Exception to HTTP status mapping shared by the routers.

Only ClientInputError and ingestion messages reach the caller verbatim;
upstream failures are logged and replaced by a generic message.

Dependencies: fastapi, pdf_qa.core.exceptions
System role: Router error translation
"""

import logging

from fastapi import HTTPException

from pdf_qa.core.exceptions import (
    ClientInputError,
    IngestionError,
    PdfQaException,
    UpstreamUnavailableError,
)
from pdf_qa.observability import log_exception_with_context


def to_http_exception(
    exc: PdfQaException,
    logger: logging.Logger,
    generic_message: str,
    **context,
) -> HTTPException:
    """
    Translate a domain exception into an HTTPException.

    Args:
        exc: Raised domain exception
        logger: Router logger
        generic_message: Caller-facing text for upstream failures
        **context: Extra log context

    Returns:
        HTTPException: 400 for client input, 500 for ingestion, 502 otherwise
    """
    if isinstance(exc, ClientInputError):
        logger.info("Rejected request", extra={"reason": exc.message, **exc.details})
        return HTTPException(status_code=400, detail=exc.message)

    log_exception_with_context(logger, generic_message, exc, **context)
    if isinstance(exc, IngestionError):
        return HTTPException(status_code=500, detail=exc.message)
    if isinstance(exc, UpstreamUnavailableError):
        return HTTPException(status_code=502, detail=generic_message)
    return HTTPException(status_code=500, detail=generic_message)
