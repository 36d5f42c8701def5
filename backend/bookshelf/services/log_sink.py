"""
Bookshelf API: Request Log Sink
================================

What:  Durable, best-effort appends of request log lines to a shared file.
How:   Each append ensures the parent directory exists, then opens the
       destination in unbuffered binary append mode and hands the whole
       encoded line to a single write call. The storage layer positions every
       write at end-of-file (O_APPEND), so concurrent appends land
       contiguously without an application-level lock.
Who:   Called by RequestLoggerMiddleware once per completed request.
When:  After the response has been sent, as a background task.

Failure Handling:
    ┌──────────────────────┐     ┌───────────────────┐
    │  makedirs(parent)    │──✗──▶ DirectoryCreateError│──┐
    └──────────┬───────────┘     └───────────────────┘  │
               ▼                                         ├─▶ logger.error, record dropped
    ┌──────────────────────┐     ┌───────────────────┐  │
    │  open("ab") + write  │──✗──▶ AppendWriteError   │──┘
    └──────────────────────┘     └───────────────────┘

    No retry, no buffering, nothing raised to the caller.

Ordering:
    Records appear in the order their appends complete, which follows the
    order requests *finish*, not the order they arrived.
"""

import asyncio
import logging
from pathlib import Path
from typing import Set, Union

import aiofiles
import aiofiles.os

from bookshelf.exceptions import AppendWriteError, DirectoryCreateError, RequestLogError

# Diagnostic channel for sink failures (distinct from the durable request log)
logger = logging.getLogger("bookshelf.request_log")

PathLike = Union[str, Path]


class LogSink:
    """
    Appends request log lines and tracks the background tasks doing so.

    Usage:
        sink.schedule(path, line)   # from the middleware, returns immediately
        await sink.drain()          # at shutdown / in tests
    """

    def __init__(self) -> None:
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of scheduled appends that have not finished yet."""
        return len(self._tasks)

    def schedule(self, destination: PathLike, line: str) -> asyncio.Task:
        """
        Run append() in the background on the running event loop.

        The task is referenced until it completes so it cannot be garbage
        collected mid-write.
        """
        task = asyncio.get_running_loop().create_task(self.append(destination, line))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait until every scheduled append has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def append(self, destination: PathLike, line: str) -> bool:
        """
        Append one line to the destination file.

        Returns:
            True if the record was written, False if it was dropped.
        """
        path = Path(destination)
        try:
            await self._ensure_directory(path.parent)
            await self._write(path, line.encode("utf-8"))
        except RequestLogError as e:
            logger.error("%s: %s | Context: %s", e.message, path, e.context)
            return False
        return True

    async def _ensure_directory(self, directory: Path) -> None:
        # Checked on every call: the directory may not exist at startup and
        # another append may be creating it concurrently
        try:
            await aiofiles.os.makedirs(directory, exist_ok=True)
        except OSError as e:
            raise DirectoryCreateError(
                context={"directory": str(directory), "os_error": str(e)},
            ) from e

    async def _write(self, path: Path, data: bytes) -> None:
        try:
            # Why unbuffered: the whole line must reach the kernel as one O_APPEND
            # write, so concurrent appends never interleave inside a line
            async with aiofiles.open(path, "ab", buffering=0) as f:
                written = await f.write(data)
        except OSError as e:
            raise AppendWriteError(
                context={"path": str(path), "os_error": str(e)},
            ) from e

        if written is not None and written != len(data):
            raise AppendWriteError(
                message="Short write to log file",
                context={"path": str(path), "expected": len(data), "written": written},
            )


# ── Singleton Instance ────────────────────────────────────────────────────
log_sink = LogSink()
