"""
Observability helpers.

Exports: configure_logging, log_exception_with_context
"""

from pdf_qa.observability.log_utils import log_exception_with_context, safe_log_value
from pdf_qa.observability.logger import configure_logging

__all__ = ["configure_logging", "log_exception_with_context", "safe_log_value"]
