"""
Stage storage configuration.

A stage is a named container inside the documents bucket. Stage references
are written with a leading '@' (e.g. '@PDF_STAGE') and map to the key
prefix 'PDF_STAGE/' in S3.

Dependencies: pydantic_settings
System role: Object storage and presigned URL configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StageSettings(BaseSettings):
    """Settings for staged PDF storage."""

    model_config = SettingsConfigDict(
        env_prefix="STAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(
        default="pdf-qa-dev-documents",
        description="S3 bucket that holds every stage",
    )
    region: str = Field(
        default="us-east-1",
        description="AWS region for the bucket",
    )
    name: str = Field(
        default="PDF_STAGE",
        min_length=1,
        description="Default stage name (with or without the leading '@')",
    )
    presign_ttl: int = Field(
        default=3600,
        gt=0,
        description="Presigned download URL expiry in seconds",
    )

    @property
    def stage_reference(self) -> str:
        """Default stage reference, always '@'-prefixed."""
        name = self.name.strip()
        return name if name.startswith("@") else f"@{name}"
