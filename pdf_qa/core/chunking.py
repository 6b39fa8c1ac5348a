"""
Overlapping fixed-size text chunker.

Splits per-page extracted text into windows of `chunk_size` characters that
share `chunk_overlap` characters with their predecessor. Offsets always
refer to the unnormalized page text so the viewer can highlight the exact
slice; the stored text is whitespace-normalized.

Dependencies: pdf_qa.models.chunk
System role: First stage of PDF ingestion after text extraction
"""

import re
from collections.abc import Sequence

from pdf_qa.models.chunk import ChunkRecord

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return _WHITESPACE_RUN.sub(" ", text).strip()


def chunk_page_text(
    text: str,
    page_number: int,
    chunk_size: int,
    chunk_overlap: int,
    start_index: int = 0,
) -> list[ChunkRecord]:
    """
    Split one page into overlapping windows.

    Args:
        text: Raw page text
        page_number: 1-based page number stamped on every chunk
        chunk_size: Window length in characters
        chunk_overlap: Requested overlap; capped at chunk_size - 1
        start_index: chunk_index of the first emitted chunk

    Returns:
        list[ChunkRecord]: Chunks in reading order
    """
    total_length = len(text)
    if not total_length:
        return []

    overlap = min(chunk_overlap, max(chunk_size - 1, 0))
    chunks: list[ChunkRecord] = []
    chunk_index = start_index
    cursor = 0

    while cursor < total_length:
        chunk_end = min(cursor + chunk_size, total_length)
        raw_slice = text[cursor:chunk_end]
        normalized = normalize_whitespace(raw_slice)
        if normalized:
            chunks.append(
                ChunkRecord(
                    chunk_index=chunk_index,
                    page_number=page_number,
                    raw_text=raw_slice,
                    normalized_text=normalized,
                    char_start=cursor,
                    char_end=chunk_end,
                )
            )
            chunk_index += 1

        if chunk_end >= total_length:
            break
        cursor = max(chunk_end - overlap, 0)

    return chunks


class TextChunker:
    """Chunk a document's pages with a fixed window configuration."""

    def __init__(self, chunk_size: int = 1200, chunk_overlap: int = 200) -> None:
        """
        Initialize chunker.

        Args:
            chunk_size: Window length in characters (>= 1)
            chunk_overlap: Characters shared by consecutive windows (>= 0)

        Raises:
            ValueError: When chunk_size < 1 or chunk_overlap < 0
        """
        if chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")
        if chunk_overlap < 0:
            raise ValueError("chunk_overlap cannot be negative")
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    def chunk_pages(self, pages: Sequence[str]) -> list[ChunkRecord]:
        """
        Chunk every page, numbering chunks across the whole document.

        Blank pages contribute nothing but still advance the page number.

        Args:
            pages: Page texts in page order (page 1 first)

        Returns:
            list[ChunkRecord]: Deterministic chunk sequence; empty when no page
            has readable text
        """
        chunks: list[ChunkRecord] = []
        for position, page_text in enumerate(pages):
            if not page_text or not page_text.strip():
                continue
            chunks.extend(
                chunk_page_text(
                    text=page_text,
                    page_number=position + 1,
                    chunk_size=self.chunk_size,
                    chunk_overlap=self.chunk_overlap,
                    start_index=len(chunks),
                )
            )
        return chunks
