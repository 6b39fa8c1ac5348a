"""
Ingestion and retrieval pipeline settings.

Dependencies: pydantic, pydantic_settings
System role: Chunking, retrieval and upload limits
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PipelineSettings(BaseSettings):
    """Settings for chunking, retrieval and uploads."""

    model_config = SettingsConfigDict(
        env_prefix="PIPELINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking settings
    chunk_size: int = Field(
        default=1200,
        gt=0,
        description="Window length in characters",
    )
    chunk_overlap: int = Field(
        default=200,
        ge=0,
        le=1000,
        description="Characters shared by consecutive windows",
    )

    # Retrieval settings
    default_top_k: int = Field(default=5, ge=1, le=10, description="Default result count")

    # Upload limits
    max_upload_bytes: int = Field(
        default=25 * 1024 * 1024,
        description="Maximum size of a single uploaded PDF",
    )
    max_files: int = Field(default=5, description="Maximum PDFs per upload request")
