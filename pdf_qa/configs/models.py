"""
Model provider configuration.

Selects the embedding and completion models used for chunk vectors,
question vectors and grounded answers.

Dependencies: pydantic_settings
System role: LLM / embedding configuration
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ModelSettings(BaseSettings):
    """Embedding and completion model configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MODEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    provider: Literal["google", "bedrock"] = Field(
        default="google",
        description="Model provider: 'google' (Gemini) or 'bedrock'",
    )
    embed_model: str = Field(
        default="models/gemini-embedding-001",
        description="Embedding model ID",
    )
    llm_model: str = Field(
        default="gemini-2.5-flash",
        description="Completion model ID",
    )
    vector_dim: int = Field(
        default=768,
        gt=0,
        description="Embedding vector dimension (must match the chunk table)",
    )
    temperature: float = Field(default=0.0, description="Completion temperature")
    region: str = Field(
        default="us-east-1",
        description="AWS region for Bedrock models",
    )
