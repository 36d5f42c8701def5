"""
Bookshelf API: Book Service Unit Tests
=======================================

What:  CRUD rules of the in-memory collection, without HTTP.

What we test:
    ✅ Seed data and lookups
    ✅ Required fields and case-insensitive duplicate detection
    ✅ Partial updates and duplicate-title rejection
    ✅ Not-found on get/update/delete
"""

import pytest

from bookshelf.exceptions import ConflictError, NotFoundError, ValidationError
from bookshelf.services.book_service import BookService


class TestBookServiceRead:

    def setup_method(self):
        self.service = BookService()

    def test_seeded_with_two_books(self):
        titles = [b.title for b in self.service.list_books()]
        assert titles == ["Atomic Habits", "Deep Work"]

    def test_list_returns_a_copy(self):
        self.service.list_books().clear()
        assert len(self.service.list_books()) == 2

    def test_get_existing(self):
        assert self.service.get_book(2).author == "Cal Newport"

    def test_get_missing_raises(self):
        with pytest.raises(NotFoundError, match="Book not found"):
            self.service.get_book(42)

    def test_custom_seed(self):
        service = BookService(books=[])
        assert service.list_books() == []


class TestBookServiceCreate:

    def setup_method(self):
        self.service = BookService()

    def test_create_assigns_next_id(self):
        book = self.service.create_book("Dune", "Frank Herbert")
        assert book.id == 3
        assert self.service.get_book(3) == book

    @pytest.mark.parametrize(
        "title, author",
        [(None, "Someone"), ("Something", None), ("", "Someone"), ("Something", "")],
    )
    def test_title_and_author_required(self, title, author):
        with pytest.raises(ValidationError, match="Title and author required"):
            self.service.create_book(title, author)

    def test_duplicate_is_case_insensitive(self):
        with pytest.raises(ConflictError, match="already exists"):
            self.service.create_book("ATOMIC habits", "james CLEAR")

    def test_same_title_different_author_allowed(self):
        book = self.service.create_book("Deep Work", "Someone Else")
        assert book.id == 3

    def test_id_after_delete_follows_collection_length(self):
        self.service.delete_book(1)
        book = self.service.create_book("Dune", "Frank Herbert")
        assert book.id == 2


class TestBookServiceUpdateDelete:

    def setup_method(self):
        self.service = BookService()

    def test_update_title_only(self):
        book = self.service.update_book(1, title="Tiny Habits")
        assert book.title == "Tiny Habits"
        assert book.author == "James Clear"

    def test_update_author_only(self):
        book = self.service.update_book(1, author="J. Clear")
        assert (book.title, book.author) == ("Atomic Habits", "J. Clear")

    def test_empty_fields_are_ignored(self):
        book = self.service.update_book(1, title="", author=None)
        assert book.title == "Atomic Habits"

    def test_update_to_own_title_allowed(self):
        book = self.service.update_book(1, title="atomic habits")
        assert book.title == "atomic habits"

    def test_update_to_other_books_title_conflicts(self):
        with pytest.raises(ConflictError, match="Duplicate book title"):
            self.service.update_book(1, title="DEEP WORK")
        assert self.service.get_book(1).title == "Atomic Habits"

    def test_update_missing_raises(self):
        with pytest.raises(NotFoundError):
            self.service.update_book(9, title="X")

    def test_delete_returns_removed_book(self):
        removed = self.service.delete_book(2)
        assert removed.title == "Deep Work"
        assert [b.id for b in self.service.list_books()] == [1]

    def test_delete_missing_raises(self):
        with pytest.raises(NotFoundError):
            self.service.delete_book(9)
