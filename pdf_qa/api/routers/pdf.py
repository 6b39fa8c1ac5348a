"""
PDF streaming API endpoint.

Routes: GET /pdf?identifier=&fileId=&stage=

Dependencies: pdf_qa.application.services.pdf_stream_service
System role: PDF viewer byte stream HTTP API
"""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse

from pdf_qa.api.deps import get_pdf_stream_service
from pdf_qa.api.routers.errors import to_http_exception
from pdf_qa.application.services.pdf_stream_service import (
    STAGE_UNAVAILABLE_MESSAGE,
    PdfStreamService,
)
from pdf_qa.core.exceptions import PdfQaException

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pdf"])


@router.get("/pdf")
async def stream_pdf(
    identifier: str | None = Query(default=None),
    file_id: str | None = Query(default=None, alias="fileId"),
    stage: str | None = Query(default=None),
    pdf_stream_service: PdfStreamService = Depends(get_pdf_stream_service),
) -> StreamingResponse:
    """
    Stream a staged PDF.

    Args:
        identifier: Key relative to the stage
        file_id: Known document id (UUID)
        stage: Stage reference, '@' optional

    Returns:
        StreamingResponse: application/pdf body with provenance headers

    Raises:
        HTTPException(400): Missing reference, bad fileId or malformed identifier/stage
        HTTPException(502): No candidate could be fetched
    """
    if not identifier and not file_id:
        raise HTTPException(status_code=400, detail="Provide at least an identifier or fileId.")
    if file_id:
        try:
            uuid.UUID(file_id)
        except ValueError:
            raise HTTPException(status_code=400, detail="fileId must be a valid UUID")

    try:
        pdf_stream = await pdf_stream_service.open_stream(
            identifier=identifier,
            file_id=file_id,
            stage_reference=stage,
        )
    except PdfQaException as e:
        raise to_http_exception(
            e,
            logger,
            STAGE_UNAVAILABLE_MESSAGE,
            identifier=identifier,
            file_id=file_id,
        )

    return StreamingResponse(
        pdf_stream.body,
        media_type=pdf_stream.media_type,
        headers=pdf_stream.headers,
    )
