"""
Exception hierarchy for the course Q&A application.

Every application error is a CourseQAException carrying a human-readable
``message`` and a ``details`` dict of identifiers (document id, storage key,
course id, ...). Keyword context passed to any constructor is folded into
``details``; ``None`` values are dropped.

Errors that reach the HTTP layer are rendered from ``code`` and
``status_code`` into ``{"error": {"code", "message"}}``. Ingestion errors
never reach a client directly: the pipeline records them on the document.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any

INTERNAL_ERROR_MESSAGE = "An internal error occurred"


class ErrorCode:
    """Error codes surfaced in the HTTP error envelope."""

    INVALID_ID = "INVALID_ID"
    NOT_FOUND = "NOT_FOUND"
    MISSING_PARAMETERS = "MISSING_PARAMETERS"
    EMPTY_QUERY = "EMPTY_QUERY"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    INVALID_FILE_TYPE = "INVALID_FILE_TYPE"
    SEARCH_TIMEOUT = "SEARCH_TIMEOUT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class CourseQAException(Exception):
    """Base exception for all course Q&A application errors."""

    code: str = ErrorCode.INTERNAL_ERROR
    status_code: int = 500

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        **context: Any,
    ) -> None:
        """
        Args:
            message: Human-readable error message (client-visible for 4xx)
            details: Extra context for logs
            **context: Named context merged into details when not None
        """
        self.message = message
        self.details = dict(details or {})
        self.details.update({k: v for k, v in context.items() if v is not None})
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# Client errors


class ValidationError(CourseQAException):
    """Client input rejected before any work is done; ``code`` says why."""

    status_code = 400

    def __init__(
        self,
        message: str,
        code: str = ErrorCode.MISSING_PARAMETERS,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details, field=field)
        self.code = code


class InvalidIdError(ValidationError):
    """A path identifier that is not a UUID."""

    def __init__(self, value: str) -> None:
        super().__init__(
            f"Invalid document ID: {value}",
            code=ErrorCode.INVALID_ID,
            details={"value": value},
        )


class DocumentNotFoundError(CourseQAException):
    code = ErrorCode.NOT_FOUND
    status_code = 404

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        super().__init__("Document not found", details, document_id=document_id)


# Document lifecycle


class InvalidStatusTransitionError(CourseQAException):
    """A status change that moves backwards or leaves a terminal state."""

    def __init__(self, document_id: str, current: str, target: str) -> None:
        super().__init__(
            f"Illegal status transition {current} -> {target}",
            document_id=document_id,
            current=current,
            target=target,
        )


class ChecksumImmutableError(CourseQAException):
    def __init__(self, document_id: str) -> None:
        super().__init__(
            "Document checksum cannot be changed once set", document_id=document_id
        )


# Ingestion


class DocumentProcessingError(CourseQAException):
    """Base for failures inside the ingestion pipeline."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
        **context: Any,
    ) -> None:
        super().__init__(message, details, document_id=document_id, **context)


class ParsingError(DocumentProcessingError):
    """Text extraction failed or produced nothing usable."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        file_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, document_id, details, file_type=file_type)


class EmbeddingError(DocumentProcessingError):
    """The embedding provider failed or returned vectors of the wrong shape."""


class ChecksumMismatchError(DocumentProcessingError):
    """Stored bytes no longer hash to the checksum recorded at upload."""


# Infrastructure


class VectorStoreError(CourseQAException):
    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Args:
            message: Error message
            operation: Index operation that failed (load, upsert, query, delete)
            details: Additional context
        """
        super().__init__(message, details, operation=operation)


class StorageError(CourseQAException):
    """Reading or writing raw document bytes failed."""

    def __init__(
        self,
        message: str,
        storage_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details, storage_key=storage_key)


# Retrieval


class RetrievalError(CourseQAException):
    """Query embedding or index lookup failed."""

    def __init__(
        self,
        message: str,
        course_id: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details, course_id=course_id)


class SearchTimeoutError(RetrievalError):
    """A search did not complete within its timeout."""

    code = ErrorCode.SEARCH_TIMEOUT
    status_code = 504
