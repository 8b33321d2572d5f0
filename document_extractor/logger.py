"""Structured logging utilities for document-extractor."""

import logging
import os
import sys
import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Optional

LOG_LEVEL_ENV = "DOCUMENT_EXTRACTOR_LOG_LEVEL"

# Upload ID shared by every record logged while one upload is processed
upload_id_var: ContextVar[Optional[str]] = ContextVar("upload_id", default=None)


class ContextLogger:
    """Logger wrapper that appends structured data to each message."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def _format_extra_data(self, extra_data: Optional[dict[str, Any]]) -> str:
        """Format extra data as key=value pairs."""
        if not extra_data:
            return ""
        parts = [f"{k}={v}" for k, v in extra_data.items()]
        return " [" + ", ".join(parts) + "]"

    def _log(self, level: int, msg: str, extra_data: Optional[dict[str, Any]] = None, **kwargs):
        if not self.logger.isEnabledFor(level):
            return

        upload_id = upload_id_var.get()
        if upload_id:
            extra_data = dict(extra_data or {})
            extra_data["upload_id"] = upload_id

        self.logger.log(level, msg + self._format_extra_data(extra_data), **kwargs)

    def debug(self, msg: str, extra_data: Optional[dict[str, Any]] = None, **kwargs):
        self._log(logging.DEBUG, msg, extra_data, **kwargs)

    def info(self, msg: str, extra_data: Optional[dict[str, Any]] = None, **kwargs):
        self._log(logging.INFO, msg, extra_data, **kwargs)

    def warning(self, msg: str, extra_data: Optional[dict[str, Any]] = None, **kwargs):
        self._log(logging.WARNING, msg, extra_data, **kwargs)

    def error(self, msg: str, extra_data: Optional[dict[str, Any]] = None, **kwargs):
        self._log(logging.ERROR, msg, extra_data, **kwargs)


def setup_logging(log_level: Optional[str] = None):
    """Configure application logging.

    Args:
        log_level: Logging level name. Falls back to the
            DOCUMENT_EXTRACTOR_LOG_LEVEL environment variable, then INFO.
    """
    log_level = log_level or os.environ.get(LOG_LEVEL_ENV, "INFO")
    level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(handler)
    root_logger.setLevel(level)


def get_logger(name: str) -> ContextLogger:
    """Get a context-aware logger instance (typically for ``__name__``)."""
    return ContextLogger(logging.getLogger(name))


@contextmanager
def upload_scope(upload_id: Optional[str] = None) -> Iterator[str]:
    """Bind an upload ID to log records for the duration of the block.

    A new ID is generated when none is given. The previous value is restored
    on exit.
    """
    token = upload_id_var.set(upload_id or uuid.uuid4().hex)
    try:
        yield upload_id_var.get()
    finally:
        upload_id_var.reset(token)


class Timer:
    """Context manager for timing a pipeline phase."""

    def __init__(self, name: str):
        self.name = name
        self.start_time: Optional[float] = None
        self.elapsed_ms: Optional[int] = None

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args):
        if self.start_time is not None:
            self.elapsed_ms = int((time.perf_counter() - self.start_time) * 1000)

    def get_elapsed_ms(self) -> int:
        """Elapsed milliseconds, also usable while the block is still running."""
        if self.elapsed_ms is not None:
            return self.elapsed_ms
        if self.start_time is not None:
            return int((time.perf_counter() - self.start_time) * 1000)
        return 0
