"""
Bookshelf API: Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the test suite.
How:   Every test gets its own temporary log path, its own LogSink and its own
       book collection, so no test writes into the repository's logs/ directory
       or sees another test's books.

Fixtures:
    ├── log_path:     <tmp>/logs/requests.log (parent does not exist yet)
    ├── sink:         fresh LogSink
    ├── books:        fresh BookService with the two seed books
    ├── build_app:    factory → FastAPI app wired to the fixtures above
    ├── open_client:  factory → HTTPX AsyncClient talking to an app in-process
    └── read_log:     reader for the request log file
"""

import os
import tempfile

# Point settings at a throwaway location BEFORE any bookshelf imports
os.environ["REQUEST_LOG_PATH"] = os.path.join(
    tempfile.mkdtemp(prefix="bookshelf_test_"), "logs", "requests.log"
)
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from httpx import ASGITransport, AsyncClient

from bookshelf.main import create_app
from bookshelf.services.book_service import BookService, get_book_service
from bookshelf.services.log_sink import LogSink


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "logs" / "requests.log"


@pytest.fixture
def sink():
    return LogSink()


@pytest.fixture
def books():
    return BookService()


@pytest.fixture
def build_app(sink, books, log_path):
    """
    Build an app whose request log goes to `log_path` unless overridden.

    Usage:
        app = build_app(format="json")
        app = build_app(logFilePath=tmp_path / "other.log")
    """
    def _build(**options):
        options.setdefault("logFilePath", log_path)
        app = create_app(logger_config=options, sink=sink)
        app.dependency_overrides[get_book_service] = lambda: books
        return app
    return _build


@pytest.fixture
def open_client():
    """
    HTTPX AsyncClient routed directly to an ASGI app.

    App exceptions are not re-raised into the test so that 500 responses can
    be asserted like any other.
    """
    def _open(app):
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        return AsyncClient(transport=transport, base_url="http://test")
    return _open


@pytest.fixture
def read_log(log_path):
    """Lines of the request log (newline included); [] if it was never created."""
    def _read(path=None):
        target = path or log_path
        if not os.path.exists(target):
            return []
        with open(target, encoding="utf-8", newline="") as f:
            return f.readlines()
    return _read
