"""
Staged PDF streaming with legacy-path fallback.

A PDF may live under any of several historical keys. The service looks up
what is known about the document, builds the ordered candidate keys and
probes them one at a time (presign, then fetch) until one answers with a
body, which is then streamed to the caller.

Dependencies: fastapi.concurrency, httpx, sqlalchemy, pdf_qa.boundary, pdf_qa.core
System role: Byte streaming behind the PDF viewer endpoint
"""

import logging
from dataclasses import dataclass

import httpx
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pdf_qa.boundary.aws.s3_stage_client import S3StageClient
from pdf_qa.boundary.db.CRUD.document_crud import document_crud
from pdf_qa.boundary.http.object_fetcher import ObjectFetcher, iter_body
from pdf_qa.core.exceptions import ClientInputError, UpstreamUnavailableError
from pdf_qa.core.fallback import first_success
from pdf_qa.core.identifiers import (
    DEFAULT_FILENAME,
    Candidate,
    DocumentPointer,
    build_stage_candidates,
    extract_relative_stage_path,
    extract_stage_reference_from_path,
    sanitize_identifier,
    sanitize_stage_reference,
)
from pdf_qa.models.document import PdfStream

logger = logging.getLogger(__name__)

STAGE_UNAVAILABLE_MESSAGE = (
    "Unable to retrieve PDF from stage. Double-check the identifier and try again."
)


@dataclass
class _OpenedObject:
    identifier: str
    stage_reference: str
    response: httpx.Response


class PdfStreamService:
    """Resolve a document reference to a streaming PDF response."""

    def __init__(
        self,
        db: AsyncSession,
        stage_client: S3StageClient,
        fetcher: ObjectFetcher,
        default_stage: str,
        presign_ttl: int = 3600,
    ) -> None:
        """
        Initialize PDF stream service.

        Args:
            db: AsyncSession for document pointer lookups
            stage_client: S3 stage storage for presigning
            fetcher: HTTP fetcher for presigned URLs
            default_stage: Configured default '@'-prefixed stage
            presign_ttl: Presigned URL expiry in seconds
        """
        self.db = db
        self._stage_client = stage_client
        self._fetcher = fetcher
        self._default_stage = default_stage
        self._presign_ttl = presign_ttl

    async def get_document_pointer(self, file_id: str | None) -> DocumentPointer | None:
        """
        Load what is known about a stored document.

        Args:
            file_id: Document id, or None

        Returns:
            DocumentPointer if the document row exists, None otherwise

        Raises:
            UpstreamUnavailableError: Row store failure
        """
        if not file_id:
            return None
        try:
            document = await document_crud.get_by_file_id(self.db, file_id)
        except SQLAlchemyError as e:
            raise UpstreamUnavailableError(
                f"Document lookup failed: {e}",
                operation="lookup",
                details={"file_id": file_id},
            ) from e
        if document is None:
            return None

        meta = document.metadata_ if isinstance(document.metadata_, dict) else {}
        raw_stage_path = document.stage_path or meta.get("stagePath")
        return DocumentPointer(
            file_id=document.file_id or meta.get("fileId") or file_id,
            filename=document.filename or meta.get("filename") or DEFAULT_FILENAME,
            stage_path=extract_relative_stage_path(raw_stage_path),
            stage_reference=(
                document.stage_reference
                or meta.get("stageReference")
                or extract_stage_reference_from_path(raw_stage_path)
            ),
        )

    async def open_stream(
        self,
        identifier: str | None = None,
        file_id: str | None = None,
        stage_reference: str | None = None,
    ) -> PdfStream:
        """
        Find the PDF and start streaming it.

        Args:
            identifier: Caller-supplied key relative to the stage
            file_id: Known document id
            stage_reference: Caller-supplied stage

        Returns:
            PdfStream: Provenance headers plus the byte iterator

        Raises:
            ClientInputError: No reference given, or a malformed identifier/stage
            UpstreamUnavailableError: Every candidate failed
        """
        if not identifier and not file_id:
            raise ClientInputError("Provide either identifier or fileId.", field="identifier")

        request_identifier = sanitize_identifier(identifier) if identifier else None
        request_stage = (
            sanitize_stage_reference(stage_reference, self._default_stage) if stage_reference else None
        )

        pointer = await self.get_document_pointer(file_id)
        candidates = build_stage_candidates(
            request_identifier=request_identifier,
            request_stage=request_stage,
            pointer=pointer,
            default_stage=self._default_stage,
        )
        if not candidates:
            raise ClientInputError("Document identifier is missing.", field="identifier")

        outcome = await first_success(candidates, self._open_candidate, on_failure=self._log_failure)
        if not outcome.succeeded:
            logger.error(
                "All PDF candidates failed",
                extra={"attempts": len(outcome.errors), "file_id": file_id},
            )
            if outcome.last_error is not None:
                raise outcome.last_error
            raise UpstreamUnavailableError(STAGE_UNAVAILABLE_MESSAGE, operation="fetch")

        opened = outcome.value
        download_name = (
            (pointer.filename if pointer else None)
            or opened.identifier.split("/")[-1]
            or DEFAULT_FILENAME
        )
        headers = {
            "Content-Type": "application/pdf",
            "Cache-Control": "no-store",
            "Content-Disposition": f'inline; filename="{download_name}"',
            "X-Pdf-Filename": download_name,
            "X-Pdf-Stage-Path": opened.identifier,
            "X-Pdf-Stage-Reference": opened.stage_reference,
        }
        if pointer and pointer.file_id:
            headers["X-Pdf-File-Id"] = pointer.file_id

        logger.info(
            "Streaming staged PDF",
            extra={
                "stage_path": opened.identifier,
                "stage_reference": opened.stage_reference,
                "attempts": len(outcome.errors) + 1,
            },
        )
        return PdfStream(headers=headers, body=iter_body(opened.response))

    async def _open_candidate(self, candidate: Candidate) -> _OpenedObject:
        identifier = sanitize_identifier(candidate.identifier)
        stage = sanitize_stage_reference(candidate.stage_reference, self._default_stage)
        url, _ = await run_in_threadpool(
            self._stage_client.generate_presigned_download_url,
            stage,
            identifier,
            self._presign_ttl,
        )
        response = await self._fetcher.open(url)
        return _OpenedObject(identifier=identifier, stage_reference=stage, response=response)

    @staticmethod
    def _log_failure(candidate: Candidate, error: Exception) -> None:
        logger.warning(
            "PDF candidate failed, trying next",
            extra={
                "candidate_identifier": candidate.identifier,
                "candidate_stage": candidate.stage_reference,
                "error_type": type(error).__name__,
                "error_msg": str(error),
            },
        )
