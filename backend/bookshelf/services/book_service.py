"""
Bookshelf API: Book Service
============================

What:  List/get/create/update/delete over an in-memory book collection.
How:   Plain list of Book models, seeded at construction. Business rules raise
       application exceptions that main.py maps to HTTP responses.

Rules:
    - create: title and author are required (400); the same title and author,
      compared case-insensitively, may only exist once (409).
    - update: a new title must not match another book's title,
      case-insensitively (409); empty fields are ignored.
    - New ids are len(collection) + 1. After a delete this can repeat an
      existing id; the collection is not persisted and ids are not reused
      elsewhere, so this is left as is.

No locking: handlers run on the event loop and never await while mutating.
"""

import logging
from typing import Iterable, List, Optional

from bookshelf.exceptions import ConflictError, NotFoundError, ValidationError
from bookshelf.schemas.book import Book

logger = logging.getLogger(__name__)

SEED_BOOKS = (
    {"id": 1, "title": "Atomic Habits", "author": "James Clear"},
    {"id": 2, "title": "Deep Work", "author": "Cal Newport"},
)


class BookService:
    """In-memory book collection."""

    def __init__(self, books: Optional[Iterable[dict]] = None):
        seed = SEED_BOOKS if books is None else books
        self._books: List[Book] = [Book(**b) for b in seed]

    def list_books(self) -> List[Book]:
        return list(self._books)

    def get_book(self, book_id: int) -> Book:
        for book in self._books:
            if book.id == book_id:
                return book
        raise NotFoundError(resource="Book", resource_id=book_id)

    def create_book(self, title: Optional[str], author: Optional[str]) -> Book:
        if not title or not author:
            raise ValidationError(message="Title and author required")

        exists = any(
            b.title.lower() == title.lower() and b.author.lower() == author.lower()
            for b in self._books
        )
        if exists:
            raise ConflictError(
                message="Book with this title and author already exists",
                context={"title": title, "author": author},
            )

        book = Book(id=len(self._books) + 1, title=title, author=author)
        self._books.append(book)
        logger.info("Book created: id=%d title=%r", book.id, book.title)
        return book

    def update_book(
        self, book_id: int, title: Optional[str] = None, author: Optional[str] = None
    ) -> Book:
        book = self.get_book(book_id)

        if title:
            duplicate = any(
                b.title.lower() == title.lower() and b.id != book.id for b in self._books
            )
            if duplicate:
                raise ConflictError(
                    message="Duplicate book title not allowed",
                    context={"title": title, "book_id": book_id},
                )
            book.title = title

        if author:
            book.author = author

        return book

    def delete_book(self, book_id: int) -> Book:
        for index, book in enumerate(self._books):
            if book.id == book_id:
                del self._books[index]
                logger.info("Book deleted: id=%d", book_id)
                return book
        raise NotFoundError(resource="Book", resource_id=book_id)


# ── Singleton Instance ────────────────────────────────────────────────────
book_service = BookService()


def get_book_service() -> BookService:
    """FastAPI dependency; overridden in tests with a fresh collection."""
    return book_service
