"""
Exception hierarchy for the document search service.

Provides layered exception structure for chunking, embedding, indexing and
retrieval errors. All exceptions include context for observability and
debugging, and embedding errors carry a human-readable message suitable for
showing to end users.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class DocSearchException(Exception):
    """Base exception for all document search errors."""

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


class ValidationError(DocSearchException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ChunkingError(DocSearchException, ValueError):
    """Raised when text cannot be split with the requested window parameters."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize chunking error.

        Args:
            message: Error message
            source: Name of the document being chunked
            details: Additional context
        """
        details = details or {}
        if source:
            details["source"] = source
        super().__init__(message, details)


class EmbeddingError(DocSearchException):
    """
    Raised when the embedding provider rejects or fails a request.

    Subclasses encode how the caller should react. ``fatal`` errors abort a
    whole ingestion, the rest only affect the request that raised them.
    """

    fatal: bool = False
    user_message: str = "The embedding service could not process the request. Please try again."


class EmbeddingAuthError(EmbeddingError):
    """Raised when the provider rejects the credentials."""

    fatal = True
    user_message = "Invalid API Key: Please ensure your API key is correctly configured."


class EmbeddingRequestError(EmbeddingError):
    """Raised when the provider reports the request itself as malformed."""

    fatal = True
    user_message = "Invalid Request: The embedding service rejected the request as malformed."


class EmbeddingQuotaError(EmbeddingError):
    """Raised on rate limiting or exhausted quota (transient)."""

    user_message = (
        "API Rate Limit Exceeded: The service is temporarily unavailable due to high demand. "
        "Please try again in a moment."
    )


class EmbeddingContentBlockedError(EmbeddingError):
    """Raised when the provider's safety filter blocks the input."""

    user_message = (
        "Content Blocked: The query or document content was blocked by the API's safety filter. "
        "Please adjust your input."
    )


class CatastrophicEmbeddingError(EmbeddingError):
    """
    Raised by the batch orchestrator when a provider-level failure aborts ingestion.

    Carries the partial state reached before the abort so the caller can
    report which sources ended up with no embedded chunks.
    """

    fatal = True

    def __init__(
        self,
        message: str,
        cause: EmbeddingError,
        embedded: list | None = None,
        failed_sources: set[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize catastrophic embedding error.

        Args:
            message: Error message
            cause: The classified provider error that triggered the abort
            embedded: DocumentChunks embedded before the abort
            failed_sources: Sources with zero successfully embedded chunks
            details: Additional context
        """
        self.cause = cause
        self.embedded = embedded or []
        self.failed_sources = failed_sources or set()
        self.user_message = cause.user_message
        details = details or {}
        details["error_type"] = type(cause).__name__
        super().__init__(message, details)


class VectorIndexError(DocSearchException):
    """Raised when an index cannot be built from the given chunks."""

    pass


class IngestionError(DocSearchException):
    """Raised to the caller when a document ingestion fails as a whole."""

    def __init__(
        self,
        message: str,
        failed_file_names: set[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize ingestion error.

        Args:
            message: Human-readable error message
            failed_file_names: Files with nothing indexed when the ingestion aborted
            details: Additional context
        """
        self.failed_file_names = failed_file_names or set()
        super().__init__(message, details)


class RetrievalError(DocSearchException):
    """Raised when retrieval operations fail."""

    pass


class QueryEmbeddingError(RetrievalError):
    """Raised when the search query cannot be embedded."""

    pass
