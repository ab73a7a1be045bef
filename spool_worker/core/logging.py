"""Structured logging for the spool worker.

Sibling workers usually share a terminal or a log collector, so every line
carries the worker's name.

Features:
    - Worker name prefix ([worker=xxx]) on every line
    - JSON structured logging format
    - Configurable log levels
"""

from __future__ import annotations

import json
import logging
import os
import socket
from datetime import datetime, timezone

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def default_worker_name() -> str:
    """Return a label unique among workers on this host (host:pid)."""
    return f"{socket.gethostname()}:{os.getpid()}"


class WorkerFormatter(logging.Formatter):
    """Formatter that tags each message with the worker name."""

    def __init__(
        self,
        worker_name: str,
        fmt: str | None = TEXT_FORMAT,
        datefmt: str | None = DATE_FORMAT,
    ) -> None:
        """Initialize the worker formatter.

        Args:
            worker_name: Label inserted as [worker=xxx] before the message.
            fmt: Format string for log messages.
            datefmt: Date format string.
        """
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.worker_name = worker_name

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with the worker prefix.

        Args:
            record: The log record to format.

        Returns:
            Formatted log message.
        """
        message = super().format(record)
        prefix = f"[worker={self.worker_name}] "
        # Format: "2024-01-15 10:30:00 - logger - LEVEL - message"
        # We want: "2024-01-15 10:30:00 - logger - LEVEL - [worker=xxx] message"
        parts = message.split(" - ", 3)
        if len(parts) == 4:
            return f"{parts[0]} - {parts[1]} - {parts[2]} - {prefix}{parts[3]}"
        return prefix + message


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def __init__(self, worker_name: str) -> None:
        super().__init__()
        self.worker_name = worker_name

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as a single JSON object.

        Args:
            record: The log record to format.

        Returns:
            JSON-formatted log message.
        """
        log_data: dict[str, str] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "worker": self.worker_name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
    worker_name: str | None = None,
) -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR).
        json_format: Use JSON format for structured logging.
        worker_name: Label for this worker; defaults to host:pid.
    """
    name = worker_name or default_worker_name()
    level = level.upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    formatter: logging.Formatter
    if json_format:
        formatter = JSONFormatter(worker_name=name)
    else:
        formatter = WorkerFormatter(worker_name=name)

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # watchdog is chatty at DEBUG (one line per inotify event)
    logging.getLogger("watchdog").setLevel(logging.WARNING)
