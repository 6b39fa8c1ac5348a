"""
PDF ingestion orchestrator.

Parses an uploaded PDF, chunks its pages, places the file in the default
stage under '<file_id>/', then writes the document row and one embedded
chunk row per chunk. Chunk rows are committed one by one; a failure after
the first committed chunk leaves the document partially ingested.

Dependencies: fastapi.concurrency, sqlalchemy, langchain_core, pdf_qa.boundary, pdf_qa.core
System role: Ingestion pipeline behind the upload endpoint
"""

import logging
import os
import shutil
import tempfile
import uuid
from pathlib import Path
from typing import Any

from fastapi.concurrency import run_in_threadpool
from langchain_core.embeddings import Embeddings
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pdf_qa.boundary.aws.s3_stage_client import S3StageClient
from pdf_qa.boundary.db.CRUD.chunk_crud import chunk_crud
from pdf_qa.boundary.db.CRUD.document_crud import document_crud
from pdf_qa.boundary.pdf.pdf_reader import PdfTextReader
from pdf_qa.core.chunking import TextChunker
from pdf_qa.core.exceptions import (
    NoReadableTextError,
    PartialIngestionError,
    PdfQaException,
    UpstreamUnavailableError,
)
from pdf_qa.core.identifiers import sanitize_filename
from pdf_qa.models.chunk import ChunkRecord
from pdf_qa.models.document import IngestionSummary

logger = logging.getLogger(__name__)

TEMP_DIR_PREFIX = "pdfqa_"


class IngestionService:
    """
    Ingest PDFs into the stage and the vector tables.

    Steps per PDF:
    1. Write bytes to a private temp directory (removed on every exit path)
    2. Extract page text and chunk it
    3. Upload the PDF to '<stage>/<file_id>/<filename>'
    4. Insert the document row
    5. Embed and insert each chunk, committing after every row
    """

    def __init__(
        self,
        db: AsyncSession,
        stage_client: S3StageClient,
        embeddings: Embeddings,
        stage_reference: str,
        chunker: TextChunker | None = None,
        pdf_reader: PdfTextReader | None = None,
    ) -> None:
        """
        Initialize ingestion service.

        Args:
            db: AsyncSession for document and chunk rows
            stage_client: S3 stage storage
            embeddings: Embedding model for chunk vectors
            stage_reference: Default '@'-prefixed stage
            chunker: Optional TextChunker (defaults to 1200/200)
            pdf_reader: Optional PdfTextReader
        """
        self.db = db
        self._stage_client = stage_client
        self._embeddings = embeddings
        self._stage_reference = stage_reference
        self._chunker = chunker or TextChunker()
        self._pdf_reader = pdf_reader or PdfTextReader()

    async def ingest(self, data: bytes, original_name: str | None) -> IngestionSummary:
        """
        Ingest one PDF.

        Args:
            data: Raw PDF bytes
            original_name: Client filename (sanitized before use)

        Returns:
            IngestionSummary: file id, filename, stage path and chunk count

        Raises:
            NoReadableTextError: PDF has no extractable text
            UpstreamUnavailableError: Upload, store or embedding failure before any chunk commit
            PartialIngestionError: Failure after at least one chunk row was committed
        """
        file_id = str(uuid.uuid4())
        filename = sanitize_filename(original_name)
        temp_dir = tempfile.mkdtemp(prefix=TEMP_DIR_PREFIX)

        logger.info(
            "Starting PDF ingestion",
            extra={"file_id": file_id, "pdf_filename": filename, "size_bytes": len(data)},
        )

        try:
            local_path = os.path.join(temp_dir, filename)
            await run_in_threadpool(Path(local_path).write_bytes, data)

            pages = await run_in_threadpool(self._pdf_reader.read_pages, local_path)
            chunks = self._chunker.chunk_pages(pages)
            if not chunks:
                raise NoReadableTextError(
                    "Unable to extract readable text from the PDF.",
                    file_id=file_id,
                )

            stage_path = await run_in_threadpool(
                self._stage_client.put_file,
                local_path,
                self._stage_reference,
                file_id,
            )

            await self._persist_document(file_id, filename, stage_path, len(chunks))
            await self._persist_chunks(file_id, filename, stage_path, chunks)
        finally:
            shutil.rmtree(temp_dir, ignore_errors=True)

        logger.info(
            "PDF ingestion complete",
            extra={"file_id": file_id, "stage_path": stage_path, "chunk_count": len(chunks)},
        )
        return IngestionSummary(
            file_id=file_id,
            filename=filename,
            stage_path=stage_path,
            chunk_count=len(chunks),
        )

    async def _persist_document(
        self,
        file_id: str,
        filename: str,
        stage_path: str,
        chunk_count: int,
    ) -> None:
        metadata = {
            "fileId": file_id,
            "filename": filename,
            "stagePath": stage_path,
            "chunkCount": chunk_count,
            "stageReference": self._stage_reference,
        }
        try:
            await document_crud.create(
                self.db,
                file_id=file_id,
                filename=filename,
                stage_path=stage_path,
                stage_reference=self._stage_reference,
                chunk_count=chunk_count,
                metadata_=metadata,
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise UpstreamUnavailableError(
                f"Failed to store document row: {e}",
                operation="store",
                details={"file_id": file_id},
            ) from e

    async def _persist_chunks(
        self,
        file_id: str,
        filename: str,
        stage_path: str,
        chunks: list[ChunkRecord],
    ) -> None:
        persisted = 0
        try:
            for chunk in chunks:
                embedding = await self._embed(chunk.normalized_text)
                source_meta: dict[str, Any] = {
                    "pageNumber": chunk.page_number,
                    "charStart": chunk.char_start,
                    "charEnd": chunk.char_end,
                    "stagePath": stage_path,
                    "stageReference": self._stage_reference,
                    "filename": filename,
                }
                await self._insert_chunk(file_id, chunk, embedding, source_meta)
                persisted += 1
        except PdfQaException as e:
            if not persisted:
                raise
            logger.error(
                "Chunk persistence stopped after partial commit",
                extra={
                    "file_id": file_id,
                    "persisted_chunks": persisted,
                    "total_chunks": len(chunks),
                    "error_msg": str(e),
                },
            )
            raise PartialIngestionError(
                f"Ingestion stopped after {persisted} of {len(chunks)} chunks.",
                file_id=file_id,
                persisted_chunks=persisted,
                details={"total_chunks": len(chunks), "operation": e.details.get("operation")},
            ) from e

    async def _embed(self, text: str) -> list[float]:
        try:
            return await run_in_threadpool(self._embeddings.embed_query, text)
        except Exception as e:
            raise UpstreamUnavailableError(
                f"Embedding failed: {e}",
                operation="embed",
            ) from e

    async def _insert_chunk(
        self,
        file_id: str,
        chunk: ChunkRecord,
        embedding: list[float],
        source_meta: dict[str, Any],
    ) -> None:
        try:
            await chunk_crud.create_chunk(
                self.db,
                file_id=file_id,
                page_number=chunk.page_number,
                chunk_index=chunk.chunk_index,
                chunk_text=chunk.normalized_text,
                char_start=chunk.char_start,
                char_end=chunk.char_end,
                embedding=embedding,
                source_meta=source_meta,
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise UpstreamUnavailableError(
                f"Failed to store chunk row: {e}",
                operation="store",
                details={"file_id": file_id, "chunk_index": chunk.chunk_index},
            ) from e
