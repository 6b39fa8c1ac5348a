"""
Exception hierarchy for the PDF Q&A application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class PdfQaException(Exception):
    """Base exception for all PDF Q&A application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ClientInputError(PdfQaException):
    """
    Raised when caller-supplied input is malformed.

    The message is safe to return to the caller verbatim.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize client input error.

        Args:
            message: Caller-safe error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class UpstreamUnavailableError(PdfQaException):
    """Raised when the object store, row store, embedding or completion call fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize upstream error.

        Args:
            message: Error message
            operation: Operation that failed (presign, fetch, upload, embed, complete, ...)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class IngestionError(PdfQaException):
    """Base exception for PDF ingestion errors."""

    def __init__(
        self,
        message: str,
        file_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize ingestion error.

        Args:
            message: Error message
            file_id: ID of the document being ingested
            details: Additional context
        """
        details = details or {}
        if file_id:
            details["file_id"] = file_id
        self.file_id = file_id
        super().__init__(message, details)


class NoReadableTextError(IngestionError):
    """Raised when a PDF yields no chunks."""


class PartialIngestionError(IngestionError):
    """
    Raised when ingestion fails after chunk rows were already committed.

    Committed rows are not rolled back; the document stays partially ingested.
    """

    def __init__(
        self,
        message: str,
        file_id: str,
        persisted_chunks: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["persisted_chunks"] = persisted_chunks
        self.persisted_chunks = persisted_chunks
        super().__init__(message, file_id, details)
