"""
Bookshelf API: Book & Health Endpoint Tests
============================================

What:  HTTP status codes and bodies of the /books routes and /health.
"""

import pytest


class TestBooksApi:

    @pytest.mark.asyncio
    async def test_list(self, build_app, open_client):
        async with open_client(build_app()) as client:
            response = await client.get("/books")

        assert response.status_code == 200
        assert response.json() == [
            {"id": 1, "title": "Atomic Habits", "author": "James Clear"},
            {"id": 2, "title": "Deep Work", "author": "Cal Newport"},
        ]

    @pytest.mark.asyncio
    async def test_get_not_found(self, build_app, open_client):
        async with open_client(build_app()) as client:
            response = await client.get("/books/77")

        assert response.status_code == 404
        assert response.json() == {"error": "not_found", "message": "Book not found"}

    @pytest.mark.asyncio
    async def test_create(self, build_app, open_client, books):
        async with open_client(build_app()) as client:
            response = await client.post(
                "/books", json={"title": "Dune", "author": "Frank Herbert"}
            )

        assert response.status_code == 201
        assert response.json() == {"id": 3, "title": "Dune", "author": "Frank Herbert"}
        assert len(books.list_books()) == 3

    @pytest.mark.asyncio
    async def test_create_missing_author(self, build_app, open_client):
        async with open_client(build_app()) as client:
            response = await client.post("/books", json={"title": "Dune"})

        assert response.status_code == 400
        assert response.json()["message"] == "Title and author required"

    @pytest.mark.asyncio
    async def test_create_duplicate(self, build_app, open_client):
        async with open_client(build_app()) as client:
            response = await client.post(
                "/books", json={"title": "Deep Work", "author": "Cal Newport"}
            )

        assert response.status_code == 409
        assert response.json()["error"] == "conflict"

    @pytest.mark.asyncio
    async def test_update(self, build_app, open_client):
        async with open_client(build_app()) as client:
            response = await client.put("/books/2", json={"author": "C. Newport"})

        assert response.status_code == 200
        assert response.json() == {"id": 2, "title": "Deep Work", "author": "C. Newport"}

    @pytest.mark.asyncio
    async def test_update_duplicate_title(self, build_app, open_client):
        async with open_client(build_app()) as client:
            response = await client.put("/books/2", json={"title": "Atomic Habits"})

        assert response.status_code == 409
        assert response.json()["message"] == "Duplicate book title not allowed"

    @pytest.mark.asyncio
    async def test_delete(self, build_app, open_client):
        async with open_client(build_app()) as client:
            response = await client.delete("/books/1")
            remaining = await client.get("/books")

        assert response.status_code == 200
        assert response.json() == {
            "message": "Book deleted",
            "book": {"id": 1, "title": "Atomic Habits", "author": "James Clear"},
        }
        assert [b["id"] for b in remaining.json()] == [2]


class TestHealthApi:

    @pytest.mark.asyncio
    async def test_reports_request_log(self, build_app, open_client, log_path):
        async with open_client(build_app(format="json")) as client:
            response = await client.get("/health")

        body = response.json()
        assert response.status_code == 200
        assert body["status"] == "healthy"
        assert body["request_log"]["path"] == str(log_path)
        assert body["request_log"]["format"] == "json"
        assert body["request_log"]["pending_writes"] >= 0
