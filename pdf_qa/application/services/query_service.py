"""
Retrieval-augmented question answering.

Embeds the question, ranks stored chunks by cosine similarity (optionally
restricted to selected documents), grounds a completion prompt in the
ranked chunks and normalizes the model's reply.

Dependencies: fastapi.concurrency, sqlalchemy, langchain_core, pdf_qa.boundary.db, pdf_qa.core
System role: Question answering behind the query endpoint
"""

import logging
from collections.abc import Sequence

from fastapi.concurrency import run_in_threadpool
from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pdf_qa.boundary.db.CRUD.chunk_crud import ChunkSearchRow, chunk_crud
from pdf_qa.core.completion import extract_completion_text
from pdf_qa.core.exceptions import ClientInputError, UpstreamUnavailableError
from pdf_qa.core.identifiers import extract_relative_stage_path, extract_stage_reference_from_path
from pdf_qa.core.rag_prompt import build_prompt
from pdf_qa.models.chunk import RetrievedSource
from pdf_qa.models.query import QueryResult

logger = logging.getLogger(__name__)

MAX_TOP_K = 10
NO_RESULTS_ANSWER = "No relevant results found in the selected PDFs."
NO_ANSWER_FALLBACK = "No answer generated."


def clamp_top_k(top_k: int) -> int:
    return max(1, min(top_k, MAX_TOP_K))


def map_search_row(row: ChunkSearchRow, default_stage: str) -> RetrievedSource:
    """
    Project a search hit onto RetrievedSource.

    Stage info falls back from the document row to the chunk's source_meta,
    then to the configured default stage.
    """
    chunk, document = row.chunk, row.document
    meta = chunk.source_meta if isinstance(chunk.source_meta, dict) else {}
    raw_stage_path = document.stage_path or meta.get("stagePath")
    stage_reference = (
        document.stage_reference
        or meta.get("stageReference")
        or extract_stage_reference_from_path(raw_stage_path)
        or default_stage
    )
    highlight_start = chunk.char_start if chunk.char_start is not None else meta.get("charStart", 0)
    highlight_end = chunk.char_end if chunk.char_end is not None else meta.get("charEnd", 0)
    return RetrievedSource(
        chunk_id=chunk.chunk_id,
        file_id=chunk.file_id,
        file_name=document.filename,
        stage_path=extract_relative_stage_path(raw_stage_path),
        stage_reference=stage_reference,
        page_number=chunk.page_number,
        chunk_index=chunk.chunk_index,
        text=chunk.chunk_text,
        relevance=row.relevance,
        highlight_start=int(highlight_start or 0),
        highlight_end=int(highlight_end or 0),
    )


class QueryService:
    """Answer questions from the most relevant stored chunks."""

    def __init__(
        self,
        db: AsyncSession,
        embeddings: Embeddings,
        chat_model: BaseChatModel,
        default_stage: str,
        default_top_k: int = 5,
    ) -> None:
        """
        Initialize query service.

        Args:
            db: AsyncSession for similarity search
            embeddings: Embedding model (same one used at ingestion)
            chat_model: Completion model
            default_stage: Stage reported for rows without stage info
            default_top_k: Result count when the caller gives none
        """
        self.db = db
        self._embeddings = embeddings
        self._chat_model = chat_model
        self._default_stage = default_stage
        self._default_top_k = default_top_k

    async def query(
        self,
        question: str,
        file_ids: Sequence[str] | None = None,
        top_k: int | None = None,
    ) -> QueryResult:
        """
        Answer a question over ingested PDFs.

        Args:
            question: User question
            file_ids: Restrict retrieval to these documents when non-empty
            top_k: Chunks to retrieve, clamped to 1..10

        Returns:
            QueryResult: Answer plus the chunks it was grounded in

        Raises:
            ClientInputError: Empty question
            UpstreamUnavailableError: Embedding, search or completion failure
        """
        if not question or not question.strip():
            raise ClientInputError("Question cannot be empty.", field="question")

        selected = [file_id for file_id in (file_ids or []) if file_id and file_id.strip()]
        limit = clamp_top_k(top_k if top_k is not None else self._default_top_k)

        query_vector = await self._embed(question)
        rows = await self._search(query_vector, limit, selected)
        sources = [map_search_row(row, self._default_stage) for row in rows]

        logger.info(
            "Similarity search complete",
            extra={"hits": len(sources), "limit": limit, "file_filter": len(selected)},
        )

        if not sources:
            return QueryResult(answer=NO_RESULTS_ANSWER, chunks=[])

        prompt = build_prompt(question, sources)
        answer = await self._complete(prompt)
        return QueryResult(answer=answer or NO_ANSWER_FALLBACK, chunks=sources)

    async def _embed(self, text: str) -> list[float]:
        try:
            return await run_in_threadpool(self._embeddings.embed_query, text)
        except Exception as e:
            raise UpstreamUnavailableError(f"Embedding failed: {e}", operation="embed") from e

    async def _search(
        self,
        query_vector: list[float],
        limit: int,
        file_ids: list[str],
    ) -> list[ChunkSearchRow]:
        try:
            return await chunk_crud.similarity_search(
                self.db,
                query_vector=query_vector,
                limit=limit,
                file_ids=file_ids,
            )
        except SQLAlchemyError as e:
            raise UpstreamUnavailableError(f"Similarity search failed: {e}", operation="search") from e

    async def _complete(self, prompt: str) -> str:
        try:
            response = await self._chat_model.ainvoke(prompt)
        except Exception as e:
            raise UpstreamUnavailableError(f"Completion failed: {e}", operation="complete") from e
        return extract_completion_text(response)
