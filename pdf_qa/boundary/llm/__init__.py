"""LLM boundary: embedding and chat model factories."""

from pdf_qa.boundary.llm.chat_model import get_chat_model
from pdf_qa.boundary.llm.embeddings import FixedDimensionEmbeddings, get_embeddings

__all__ = ["FixedDimensionEmbeddings", "get_chat_model", "get_embeddings"]
