"""
Bookshelf API: Application Configuration
=========================================

What:  Centralized configuration using Pydantic Settings.
How:   Values come from environment variables (or a .env file), are validated
       at import time, and are exposed through the `settings` singleton.
Who:   main.py (server, logging, request logger setup).

Environment variables:
    REQUEST_LOG_PATH     destination of the request log (default: <backend>/logs/requests.log)
    REQUEST_LOG_FORMAT   text | json (default: text)
    HOST / PORT          bind address for `bookshelf` (default: 0.0.0.0:3000)
    LOG_LEVEL            diagnostic logging level (default: INFO)
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from bookshelf.schemas.log_record import DEFAULT_LOG_FILE_PATH, LoggerConfig


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development.
    """

    # ── Request Log ───────────────────────────────────────────────────────
    request_log_path: Path = Field(default=DEFAULT_LOG_FILE_PATH)
    request_log_format: str = Field(default="text")

    @field_validator("request_log_format")
    @classmethod
    def validate_request_log_format(cls, v: str) -> str:
        lower = v.strip().lower()
        if lower not in {"text", "json"}:
            raise ValueError(f"Invalid request_log_format '{v}'. Must be 'text' or 'json'")
        return lower

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # Diagnostic logging (stderr), not the request log
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def request_logger_config(self) -> LoggerConfig:
        """Options for the request logger middleware."""
        return LoggerConfig(
            log_file_path=self.request_log_path,
            format=self.request_log_format,
        )


settings = Settings()
