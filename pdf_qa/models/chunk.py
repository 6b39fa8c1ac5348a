"""
Chunk domain models.

ChunkRecord is produced by the chunker before persistence; RetrievedSource
is the read-time projection of a stored chunk joined with its document.

Dependencies: pydantic
System role: Chunk data structures shared by ingestion and retrieval
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class ChunkRecord(BaseModel):
    """Offset-tracked window of one page's text."""

    chunk_index: int = Field(ge=0, description="Position in the document, 0-based, gap-free")
    page_number: int = Field(ge=1, description="1-based page number")
    raw_text: str = Field(description="Slice of the page text as extracted")
    normalized_text: str = Field(description="Slice with whitespace runs collapsed and trimmed")
    char_start: int = Field(ge=0, description="Start offset into the page text")
    char_end: int = Field(description="End offset into the page text (exclusive)")

    @model_validator(mode="after")
    def _check_offsets(self) -> "ChunkRecord":
        if self.char_start >= self.char_end:
            raise ValueError("char_start must be lower than char_end")
        return self


class RetrievedSource(BaseModel):
    """Chunk returned by similarity search, with its document's stage info."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    chunk_id: str
    file_id: str
    file_name: str
    stage_path: str | None = None
    stage_reference: str
    page_number: int
    chunk_index: int
    text: str
    relevance: float = Field(description="Cosine similarity, higher is better")
    highlight_start: int = 0
    highlight_end: int = 0
