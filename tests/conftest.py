"""
Shared test fixtures and configuration for entire test suite.

Provides: service cache reset, temp directory inspection
Dependencies: pytest
System role: Test infrastructure and fixture management
"""

import pytest

from pdf_qa.api.deps.dependencies import get_service_cache


@pytest.fixture(autouse=True)
def clear_service_cache():
    """Drop cached clients so no test sees another test's instances."""
    yield
    get_service_cache().clear()
