"""
Bookshelf API: Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for the book routes and the request log sink.
How:   Each exception carries a message and an optional context dict.
       Book errors are caught by the global handlers registered in main.py and
       turned into JSON error responses. Request log errors never leave the sink:
       they are reported to the diagnostic logger and the record is dropped.

Exception Hierarchy:
    BookshelfError (base)
    ├── ValidationError          → 400 Bad Request
    ├── NotFoundError            → 404 Not Found
    ├── ConflictError            → 409 Conflict
    └── RequestLogError          (never surfaced to HTTP clients)
        ├── DirectoryCreateError
        └── AppendWriteError
"""

from typing import Any, Dict, Optional


class BookshelfError(Exception):
    """
    Base exception for all Bookshelf application errors.

    Attributes:
        message:  Human-readable error description (safe to return in API responses)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BookshelfError):
    """
    Raised when client input fails a business rule.

    When:    POST /books without a title or author.
    HTTP:    400 Bad Request (schema-level problems keep FastAPI's 422)
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(BookshelfError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PUT/DELETE /books/{id} with an unknown id.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class ConflictError(BookshelfError):
    """
    Raised when a write would duplicate an existing resource.

    When:    Creating a book whose title and author already exist, or renaming
             a book to a title another book already has.
    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RequestLogError(BookshelfError):
    """
    Base for failures while persisting a request log record.

    These are sink-local and non-fatal: the HTTP response has already been
    sent by the time they happen, so they are only ever reported to the
    diagnostic logger. No retry, no buffering.
    """


class DirectoryCreateError(RequestLogError):
    """The parent directory of the request log could not be created."""

    def __init__(
        self,
        message: str = "Failed to create log directory",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AppendWriteError(RequestLogError):
    """
    The record could not be appended to the request log.

    When:    Disk full, permission denied, destination is a directory,
             or the storage layer accepted fewer bytes than the record holds.
    """

    def __init__(
        self,
        message: str = "Error writing to log file",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
