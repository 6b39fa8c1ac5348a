"""
Base configuration settings.

Process-level settings shared by every config module: log level and the
HTTP server bind address.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Base configuration class with process-level settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    api_host: str = Field(default="0.0.0.0", description="Bind address for uvicorn")
    api_port: int = Field(default=8787, description="Bind port for uvicorn")
    cors_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed to call the API and read the X-Pdf-* headers",
    )
