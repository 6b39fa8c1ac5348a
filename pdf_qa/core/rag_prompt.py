"""
Grounding prompt for retrieval-augmented answers.

Dependencies: pdf_qa.models.chunk
System role: Prompt construction for the retrieval pipeline
"""

from collections.abc import Sequence

from pdf_qa.models.chunk import RetrievedSource

RAG_SYSTEM_HEADER = (
    "You are an expert AI assistant that answers user questions strictly using the provided "
    "context snippets extracted from PDF documents.\n"
    'Cite the PDFs naturally (e.g., "Page 2 · Quarterly Results") when referencing a chunk. '
    "If the answer is not in context, say you do not know."
)


def format_source_block(position: int, source: RetrievedSource) -> str:
    """Label one retrieved chunk; position is 1-based."""
    label = (
        f"Source {position} | chunk_id={source.chunk_id} | "
        f"page={source.page_number} | file={source.file_name}"
    )
    return f"{label}\n{source.text}"


def build_prompt(question: str, sources: Sequence[RetrievedSource]) -> str:
    """
    Build the completion prompt from ranked sources.

    Args:
        question: User question
        sources: Retrieved chunks, most relevant first

    Returns:
        str: Prompt text ending in 'Answer:'
    """
    context = "\n\n".join(
        format_source_block(index, source) for index, source in enumerate(sources, start=1)
    )
    return f"{RAG_SYSTEM_HEADER}\n\nContext:\n{context}\n\nQuestion: {question}\nAnswer:"
