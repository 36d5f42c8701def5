"""
Bookshelf API: Book Route Handlers
===================================

What:  CRUD endpoints over the in-memory book collection.
How:   Thin handlers: read path/body, call BookService, return the model.
       Errors raised by the service are mapped to responses in main.py.

Routes:
    GET    /books         list all books
    GET    /books/{id}    single book           (404)
    POST   /books         create                (400, 409) → 201
    PUT    /books/{id}    update title/author   (404, 409)
    DELETE /books/{id}    remove                (404)
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from bookshelf.schemas.book import (
    Book,
    BookCreate,
    BookDeleteResponse,
    BookUpdate,
    ErrorResponse,
)
from bookshelf.services.book_service import BookService, get_book_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/books", tags=["Books"])


@router.get("", response_model=List[Book], summary="List all books")
async def list_books(service: BookService = Depends(get_book_service)) -> List[Book]:
    return service.list_books()


@router.get(
    "/{book_id}",
    response_model=Book,
    responses={404: {"model": ErrorResponse}},
    summary="Get a book by id",
)
async def get_book(book_id: int, service: BookService = Depends(get_book_service)) -> Book:
    return service.get_book(book_id)


@router.post(
    "",
    response_model=Book,
    status_code=201,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Add a book",
)
async def create_book(
    payload: BookCreate, service: BookService = Depends(get_book_service)
) -> Book:
    """
    Add a book to the collection.

    Title and author are both required; a book with the same title and author
    (case-insensitive) is rejected with 409.
    """
    return service.create_book(title=payload.title, author=payload.author)


@router.put(
    "/{book_id}",
    response_model=Book,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Update a book",
)
async def update_book(
    book_id: int,
    payload: BookUpdate,
    service: BookService = Depends(get_book_service),
) -> Book:
    return service.update_book(book_id, title=payload.title, author=payload.author)


@router.delete(
    "/{book_id}",
    response_model=BookDeleteResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete a book",
)
async def delete_book(
    book_id: int, service: BookService = Depends(get_book_service)
) -> BookDeleteResponse:
    removed = service.delete_book(book_id)
    return BookDeleteResponse(message="Book deleted", book=removed)
