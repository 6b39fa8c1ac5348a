"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
"""

from pdf_qa.configs.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
