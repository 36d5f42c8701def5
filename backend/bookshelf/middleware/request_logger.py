"""
Bookshelf API: Request Logger Middleware
=========================================

What:  Writes one line per completed HTTP request (method, original URL,
       final status, IST timestamp) to the request log file.
How:   Pure ASGI middleware. It wraps `send` with a one-shot observer for the
       final `http.response.body` message; once that message has been passed
       on to the server, the record is built and handed to the LogSink as a
       background task. The request and response are never read or modified.
Who:   Wrapped around the whole middleware stack by create_app(), outside
       Starlette's ServerErrorMiddleware.

Why pure ASGI (not BaseHTTPMiddleware):
    BaseHTTPMiddleware hands back the response object before its body has
    been streamed, so it cannot observe "finished sending". Wrapping `send`
    sees every message the server actually receives.

Lifecycle of a record:
    request ──▶ [RequestLogger] ──▶ [ServerError] ──▶ routes ──▶ response start ──▶ body (final)
                                                                                      │
                                                      observer fires once ◀───────────┘
                                                              │
                                              LogRecord.capture(...).render(format)
                                                              │
                                                   log_sink.schedule(path, line)

Error responses:
    Unhandled exceptions are turned into a response by ServerErrorMiddleware
    (the catch-all exception handler), which sits inside this one, so the
    logged status is the one that handler really sent. A response that never
    completes (client disconnected, nothing sent) produces no record, only a
    warning on the diagnostic logger.
"""

import logging
from typing import Any, Optional

from starlette.middleware import Middleware
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from bookshelf.schemas.log_record import LoggerConfig, LogRecord
from bookshelf.services.log_sink import LogSink, log_sink

logger = logging.getLogger(__name__)


def original_url(scope: Scope) -> str:
    """
    The request target as the client sent it: undecoded path plus query string.
    """
    raw_path = scope.get("raw_path")
    if raw_path:
        # Some servers include the query string in raw_path, some don't
        path = raw_path.decode("latin-1").split("?", 1)[0]
    else:
        path = scope.get("path", "")

    query_string = scope.get("query_string", b"")
    if query_string:
        path = f"{path}?{query_string.decode('latin-1')}"
    return path


class RequestLoggerMiddleware:
    """
    Logs every completed HTTP request to a file in `text` or `json` format.

    Args:
        app:    The downstream ASGI application.
        config: LoggerConfig, a mapping of options, or anything else for defaults.
        sink:   LogSink performing the appends (defaults to the shared one).
    """

    def __init__(
        self,
        app: ASGIApp,
        config: Any = None,
        sink: Optional[LogSink] = None,
    ) -> None:
        self.app = app
        self.config = LoggerConfig.from_options(config)
        self.sink = sink or log_sink

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        # Why captured here: routers may rewrite scope["path"] on the way down
        method = scope["method"]
        url = original_url(scope)
        status_code: Optional[int] = None
        finished = False

        def on_finish(status: int) -> None:
            nonlocal finished
            if finished:
                return
            finished = True
            record = LogRecord.capture(method=method, url=url, status_code=status)
            self.sink.schedule(self.config.log_file_path, record.render(self.config.format))

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)
            # Only reached once the server accepted the last body chunk;
            # a failed send (client gone) raises above and logs nothing
            if message["type"] == "http.response.body" and not message.get("more_body", False):
                on_finish(status_code)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            if not finished:
                logger.warning(
                    "Response to %s %s did not complete (status sent: %s); no request log record",
                    method, url, status_code,
                )


def request_logger(
    options: Any = None,
    sink: Optional[LogSink] = None,
) -> Middleware:
    """
    Build the request logger entry for an application's middleware stack.

    create_app() installs it outside ServerErrorMiddleware (see
    BookshelfAPI.build_middleware_stack). Placed in a plain `middleware=[...]`
    list it sits inside ServerErrorMiddleware instead, and requests that end in
    an unhandled exception produce a diagnostic warning rather than a record.

    Example:
        app = BookshelfAPI(request_log=request_logger({"format": "json"}))
    """
    config = LoggerConfig.from_options(options)
    logger.debug(
        "Request logger configured: path=%s format=%s", config.log_file_path, config.format
    )
    return Middleware(RequestLoggerMiddleware, config=config, sink=sink)
