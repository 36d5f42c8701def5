"""
Bookshelf API: FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() assembles middleware, exception handlers, and routes.
Who:   uvicorn (`uvicorn bookshelf.main:app`) or the `bookshelf` console script.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  [Request Logger] ──▶ log sink (file)  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌───────────────┐ ┌────────────┐ │
    │  │ GET/POST     │ │ GET/PUT/DELETE│ │ GET        │ │
    │  │ /books       │ │ /books/{id}   │ │ /health    │ │
    │  └──────────────┘ └───────────────┘ └────────────┘ │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400 │ NotFound→404 │ Conflict→409 │ 500 │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure diagnostic logging, log the request log destination
    Shutdown: wait for in-flight request log appends
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Mapping, Optional, Union

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware import Middleware
from starlette.types import ASGIApp

from bookshelf import __version__
from bookshelf.config import settings
from bookshelf.exceptions import ConflictError, NotFoundError, ValidationError
from bookshelf.middleware.request_logger import request_logger
from bookshelf.routes import books, health
from bookshelf.schemas.log_record import LoggerConfig
from bookshelf.services.log_sink import LogSink, log_sink

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Application Class
# ══════════════════════════════════════════════════════════════════════════

class BookshelfAPI(FastAPI):
    """
    FastAPI with the request logger wrapped around the entire middleware stack.

    Starlette always puts ServerErrorMiddleware (which runs the catch-all
    `Exception` handler) outside every user middleware. Wrapping the built
    stack puts the request logger outside it too, so error responses are
    logged with the status the handler actually sent.
    """

    def __init__(self, *args: Any, request_log: Optional[Middleware] = None, **kwargs: Any):
        self.request_log = request_log
        super().__init__(*args, **kwargs)

    def build_middleware_stack(self) -> ASGIApp:
        app = super().build_middleware_stack()
        if self.request_log is not None:
            app = self.request_log.cls(app, *self.request_log.args, **self.request_log.kwargs)
        return app


# ══════════════════════════════════════════════════════════════════════════
# Diagnostic Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure process-wide diagnostic logging.

    Sink failures (logger `bookshelf.request_log`) and application messages
    go to stderr. This is separate from the durable request log file.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )

    # uvicorn's own access log duplicates the request log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to JSON error responses.

    Handler hierarchy:
        ValidationError  → 400 Bad Request
        NotFoundError    → 404 Not Found
        ConflictError    → 409 Conflict
        Exception        → 500 Internal Server Error (stack trace logged)
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning(
            "Validation error on %s %s: %s", request.method, request.url.path, exc.message
        )
        return JSONResponse(
            status_code=400,
            content={"error": "validation_error", "message": exc.message},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content={"error": "not_found", "message": exc.message},
        )

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        logger.info(
            "Conflict on %s %s: %s | Context: %s",
            request.method, request.url.path, exc.message, exc.context,
        )
        return JSONResponse(
            status_code=409,
            content={"error": "conflict", "message": exc.message},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unhandled error: %s", str(exc), exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "Something went wrong!",
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    logger_config: Optional[Union[LoggerConfig, Mapping[str, Any]]] = None,
    sink: Optional[LogSink] = None,
) -> BookshelfAPI:
    """
    Create and configure the FastAPI application.

    Args:
        logger_config: Request logger options; defaults to the values from settings.
        sink:          LogSink for request log appends; defaults to the shared sink.
    """
    config = (
        settings.request_logger_config()
        if logger_config is None
        else LoggerConfig.from_options(logger_config)
    )
    sink = sink or log_sink

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        setup_logging()
        logger.info("Bookshelf API %s starting up", __version__)
        logger.info("Request log: %s (%s)", config.log_file_path, config.format)

        yield

        logger.info("Shutting down, waiting for %d pending log writes", sink.pending)
        await sink.drain()
        logger.info("Shutdown complete.")

    app = BookshelfAPI(
        title="Bookshelf API",
        description="Book management API with file-based request logging.",
        version=__version__,
        lifespan=lifespan,
        request_log=request_logger(config, sink=sink),
    )

    app.state.request_log_config = config
    app.state.request_log_sink = sink

    register_exception_handlers(app)

    app.include_router(books.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Entry point for the `bookshelf` console script."""
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
