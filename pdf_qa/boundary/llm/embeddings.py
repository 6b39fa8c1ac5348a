"""
Embedding model adapters.

Chunk and question vectors must share the chunk table's dimension, so the
Gemini embeddings are pinned to MODEL_VECTOR_DIM on every call.

Dependencies: langchain_google_genai, langchain_aws
System role: Text embedding for ingestion and retrieval
"""

import logging
from typing import List

from langchain_aws import BedrockEmbeddings
from langchain_core.embeddings import Embeddings
from langchain_google_genai import GoogleGenerativeAIEmbeddings

from pdf_qa.configs.models import ModelSettings

logger = logging.getLogger(__name__)


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """
    GoogleGenerativeAIEmbeddings with a fixed output dimensionality.

    The base class ignores output_dimensionality in the constructor, so every
    embed call passes the configured dimension explicitly.
    """

    _output_dimensionality: int = 768

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 768,
        **kwargs,
    ) -> None:
        """
        Initialize embeddings with fixed output dimensionality.

        Args:
            model: Google embedding model ID
            output_dimensionality: Dimension of every returned vector
            **kwargs: Additional arguments for GoogleGenerativeAIEmbeddings
        """
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(
            f"{__name__}:__init__ - Initialized with model={model}, "
            f"output_dimensionality={output_dimensionality}"
        )

    def embed_documents(
        self,
        texts: List[str],
        *,
        batch_size: int = 100,
        task_type: str | None = None,
        titles: List[str] | None = None,
        output_dimensionality: int | None = None,
    ) -> List[List[float]]:
        dim = output_dimensionality or self._output_dimensionality
        return super().embed_documents(
            texts,
            batch_size=batch_size,
            task_type=task_type,
            titles=titles,
            output_dimensionality=dim,
        )

    def embed_query(
        self,
        text: str,
        task_type: str | None = None,
        title: str | None = None,
        output_dimensionality: int | None = None,
    ) -> List[float]:
        dim = output_dimensionality or self._output_dimensionality
        return super().embed_query(
            text,
            task_type=task_type,
            title=title,
            output_dimensionality=dim,
        )


def get_embeddings(settings: ModelSettings) -> Embeddings:
    """
    Build the configured embedding model.

    Args:
        settings: Model configuration

    Returns:
        Embeddings: LangChain embeddings instance
    """
    if settings.provider == "bedrock":
        return BedrockEmbeddings(
            model_id=settings.embed_model,
            region_name=settings.region,
        )
    return FixedDimensionEmbeddings(
        model=settings.embed_model,
        output_dimensionality=settings.vector_dim,
    )
