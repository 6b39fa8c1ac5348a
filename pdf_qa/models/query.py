"""
Query domain models and schemas.

Dependencies: pydantic
System role: Question answering API contracts
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pdf_qa.models.chunk import RetrievedSource


class QueryRequest(BaseModel):
    """Request schema for questions over ingested PDFs."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    question: str = Field(min_length=1, description="User question")
    file_ids: list[str] | None = Field(
        default=None,
        max_length=8,
        description="Restrict retrieval to these documents",
    )
    top_k: int | None = Field(default=None, ge=1, le=10, description="Number of chunks to retrieve")


class QueryResult(BaseModel):
    """Grounded answer plus the chunks it was built from."""

    answer: str
    chunks: list[RetrievedSource]
