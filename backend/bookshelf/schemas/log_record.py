"""
Bookshelf API: Request Log Record & Logger Configuration
=========================================================

What:  The value written once per completed request, and the options that
       decide where and how it is written.
How:   Both are frozen Pydantic models. A LogRecord renders itself into one
       of the two durable line formats:

    text:  [<timestamp>] <METHOD> <PATH> <STATUS> \\n
    json:  {"method":"<METHOD>","url":"<PATH>","statusCode":<STATUS>,"timestamp":"<timestamp>"}\\n

    The trailing space before the newline in text mode is part of the format.

Timestamps:
    Rendered in Indian Standard Time (UTC+05:30, no DST) using the en-IN
    layout: DD/MM/YYYY, H:MM:SS am|pm
    Example: 10/06/2024, 10:15:03 am
"""

import os
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ── Defaults ──────────────────────────────────────────────────────────────
# Service root is the backend/ directory (parent of the bookshelf package)
SERVICE_ROOT = Path(__file__).resolve().parent.parent.parent
DEFAULT_LOG_FILE_PATH = SERVICE_ROOT / "logs" / "requests.log"

# Why a fixed offset: Asia/Kolkata has no DST, and a fixed timezone needs no
# tz database (zoneinfo falls back to the optional tzdata package on Windows)
IST = timezone(timedelta(hours=5, minutes=30), "IST")

LogFormat = Literal["text", "json"]


def ist_now() -> datetime:
    """Current wall-clock time in IST."""
    return datetime.now(IST)


def format_timestamp(moment: datetime) -> str:
    """
    Render a datetime in the en-IN locale layout, converted to IST.

    Day and month are zero-padded, the 12-hour clock hour is not, and the
    meridiem is lowercase.

    >>> format_timestamp(datetime(2024, 6, 10, 4, 45, 3, tzinfo=timezone.utc))
    '10/06/2024, 10:15:03 am'
    """
    local = moment.astimezone(IST)
    hour = local.hour % 12 or 12
    meridiem = "am" if local.hour < 12 else "pm"
    return f"{local:%d/%m/%Y}, {hour}:{local:%M:%S} {meridiem}"


class LogRecord(BaseModel):
    """
    One completed request, as it will appear in the request log.

    Created by the request logger middleware strictly after the response
    finished sending, consumed once by the log sink.
    """

    method: str = Field(description="HTTP verb as received")
    url: str = Field(description="Original request path including query string")
    status_code: int = Field(alias="statusCode", description="Final HTTP status sent")
    timestamp: str = Field(description="IST completion time, en-IN layout")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @classmethod
    def capture(cls, method: str, url: str, status_code: int) -> "LogRecord":
        """Build a record stamped with the current IST time."""
        return cls(
            method=method,
            url=url,
            status_code=status_code,
            timestamp=format_timestamp(ist_now()),
        )

    def to_text(self) -> str:
        return f"[{self.timestamp}] {self.method} {self.url} {self.status_code} \n"

    def to_json(self) -> str:
        # Compact separators, keys in declaration order
        return self.model_dump_json(by_alias=True) + "\n"

    def render(self, fmt: LogFormat) -> str:
        """Serialize into the line format selected by the logger config."""
        if fmt == "json":
            return self.to_json()
        return self.to_text()


class LoggerConfig(BaseModel):
    """
    Options for the request logger, fixed once the middleware is built.

    Accepts both the camelCase option names (`logFilePath`) and the Python
    field names (`log_file_path`). Construction never fails on a missing or
    unrecognized value: the path falls back to logs/requests.log under the
    service root and any format other than "json" means "text".
    """

    log_file_path: Path = Field(default=DEFAULT_LOG_FILE_PATH, alias="logFilePath")
    format: LogFormat = Field(default="text")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @field_validator("log_file_path", mode="before")
    @classmethod
    def default_when_unusable(cls, v: Any) -> Any:
        # Anything that is not a non-empty str or str-based PathLike means "use the default"
        if isinstance(v, os.PathLike):
            v = os.fspath(v)
        if isinstance(v, str) and v:
            return v
        return DEFAULT_LOG_FILE_PATH

    @field_validator("format", mode="before")
    @classmethod
    def fall_back_to_text(cls, v: Any) -> str:
        if isinstance(v, str) and v.strip().lower() == "json":
            return "json"
        return "text"

    @classmethod
    def from_options(
        cls, options: Any = None
    ) -> "LoggerConfig":
        """
        Normalize a config object, a plain mapping, or anything else into a LoggerConfig.

        Non-mapping options (None, a string, a number) mean "all defaults";
        non-string keys are ignored like any other unrecognized key.
        """
        if isinstance(options, LoggerConfig):
            return options
        if not isinstance(options, Mapping):
            return cls()
        return cls.model_validate({k: v for k, v in options.items() if isinstance(k, str)})
