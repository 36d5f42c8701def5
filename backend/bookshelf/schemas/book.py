"""
Bookshelf API: Pydantic Request/Response Schemas
=================================================

What:  API contract for the book routes and the health check.
How:   FastAPI validates request bodies against these models and serializes
       responses through them.

Request bodies keep title/author optional at the schema level so that the
"Title and author required" rule is enforced by BookService with a 400,
rather than by FastAPI's automatic 422.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Books
# ══════════════════════════════════════════════════════════════════════════


class Book(BaseModel):
    """A book in the in-memory collection."""
    id: int = Field(description="Book identifier")
    title: str = Field(description="Book title")
    author: str = Field(description="Book author")


class BookCreate(BaseModel):
    """Body of POST /books."""
    title: Optional[str] = Field(default=None, description="Required, non-empty")
    author: Optional[str] = Field(default=None, description="Required, non-empty")


class BookUpdate(BaseModel):
    """Body of PUT /books/{id}. Empty or missing fields are left unchanged."""
    title: Optional[str] = None
    author: Optional[str] = None


class BookDeleteResponse(BaseModel):
    message: str = Field(default="Book deleted")
    book: Book


# ══════════════════════════════════════════════════════════════════════════
# Errors & Health
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Body returned by the global exception handlers.

    Example:
        {"error": "conflict", "message": "Book with this title and author already exists"}
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable explanation")


class RequestLogStatus(BaseModel):
    path: str = Field(description="Destination file of the request log")
    format: str = Field(description="Record serialization: text or json")
    pending_writes: int = Field(description="Appends scheduled but not yet finished")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall status: healthy")
    version: str
    uptime_seconds: float
    request_log: RequestLogStatus
