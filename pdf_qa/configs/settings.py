"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pdf_qa.configs.base import BaseSettings
from pdf_qa.configs.database import DatabaseSettings
from pdf_qa.configs.models import ModelSettings
from pdf_qa.configs.pipeline import PipelineSettings
from pdf_qa.configs.stage import StageSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = DatabaseSettings()
    stage: StageSettings = StageSettings()
    models: ModelSettings = ModelSettings()
    pipeline: PipelineSettings = PipelineSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
