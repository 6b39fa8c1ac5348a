"""
Document API endpoints.

Routes: GET /documents, POST /upload

Dependencies: pdf_qa.application.services, pdf_qa.models
System role: Document listing and PDF upload HTTP API
"""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from pdf_qa.api.deps import get_document_service, get_ingestion_service, get_settings_dependency
from pdf_qa.api.routers.errors import to_http_exception
from pdf_qa.application.services.document_service import DocumentService
from pdf_qa.application.services.ingestion_service import IngestionService
from pdf_qa.configs import Settings
from pdf_qa.core.exceptions import (
    ClientInputError,
    IngestionError,
    PdfQaException,
)
from pdf_qa.models.document import (
    DocumentListResponse,
    IngestionSummary,
    UploadErrorResponse,
    UploadResponse,
)
from pdf_qa.observability import log_exception_with_context

logger = logging.getLogger(__name__)

router = APIRouter(tags=["documents"])

PDF_CONTENT_TYPE = "application/pdf"
UPLOAD_FAILED_MESSAGE = "Failed to upload PDF."


@router.get("/documents", response_model=DocumentListResponse, response_model_by_alias=True)
async def list_documents(
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    """
    List ingested documents, newest first.

    Raises:
        HTTPException(502): Row store unavailable
    """
    try:
        documents = await document_service.list_documents()
    except PdfQaException as e:
        raise to_http_exception(e, logger, "Unable to load documents.")
    return DocumentListResponse(documents=documents)


def _validate_batch(files: list[UploadFile], settings: Settings) -> None:
    if not files:
        raise ClientInputError("Attach at least one PDF.", field="files")
    if len(files) > settings.pipeline.max_files:
        raise ClientInputError(
            f"Upload at most {settings.pipeline.max_files} PDFs at a time.",
            field="files",
        )
    for file in files:
        if file.size is not None and file.size > settings.pipeline.max_upload_bytes:
            raise ClientInputError(f'"{file.filename}" exceeds the upload size limit.', field="files")


@router.post("/upload", response_model=UploadResponse, response_model_by_alias=True)
async def upload_documents(
    files: list[UploadFile] = File(default=[]),
    ingestion_service: IngestionService = Depends(get_ingestion_service),
    settings: Settings = Depends(get_settings_dependency),
):
    """
    Ingest one or more PDFs, in order.

    A failure stops the batch; the response then carries the error message
    and the summaries of the PDFs already ingested.

    Returns:
        UploadResponse: One summary per ingested PDF

    Raises:
        HTTPException(400): No files, too many files or a file over the size limit
    """
    try:
        _validate_batch(files, settings)
    except ClientInputError as e:
        raise HTTPException(status_code=400, detail=e.message)

    successes: list[IngestionSummary] = []
    for file in files:
        try:
            if file.content_type != PDF_CONTENT_TYPE:
                raise ClientInputError(f'"{file.filename}" is not a PDF.', field="files")
            data = await file.read()
            if len(data) > settings.pipeline.max_upload_bytes:
                raise ClientInputError(f'"{file.filename}" exceeds the upload size limit.', field="files")
            successes.append(await ingestion_service.ingest(data, file.filename))
        except PdfQaException as e:
            log_exception_with_context(
                logger,
                "Failed to ingest PDF",
                e,
                upload_name=file.filename,
                ingested=len(successes),
            )
            message = e.message if isinstance(e, (ClientInputError, IngestionError)) else UPLOAD_FAILED_MESSAGE
            body = UploadErrorResponse(message=message, documents=successes)
            return JSONResponse(status_code=500, content=body.model_dump(mode="json", by_alias=True))

    return UploadResponse(documents=successes)
