"""Structured logging configuration and log sinks.

Uses standard library logging with a JSON formatter. Framework code does not
log to a console directly: it calls a `LogSink`, which the host can point at a
stdlib logger (`LoggingSink`, the default) or capture (`RecordingSink`).
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Literal, Protocol

LogLevel = Literal["debug", "info", "warning", "error"]

_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_RESERVED_LOG_RECORD_ATTRS: set[str] = {
    "args",
    "asctime",
    "created",
    "exc_info",
    "exc_text",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "msg",
    "name",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "stack_info",
    "taskName",
    "thread",
    "threadName",
}


class JsonFormatter(logging.Formatter):
    """A minimal JSON formatter for logging records."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_LOG_RECORD_ATTRS and not key.startswith("_")
        }
        if extra:
            payload["extra"] = extra

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str, fmt: str = "json") -> None:
    """Configure root logging with structured JSON (or plain text) output."""

    root = logging.getLogger()

    # Remove any existing handlers to avoid duplicate logs when re-configuring.
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=sys.stdout)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    root.addHandler(handler)
    root.setLevel(level.upper())

    # Keep the HTTP stack quiet unless explicitly configured.
    for noisy in ("httpx", "openai"):
        logging.getLogger(noisy).setLevel(max(root.level, logging.INFO))


class LogSink(Protocol):
    """Destination for framework log events."""

    def log(self, level: LogLevel, message: str, fields: Mapping[str, object]) -> None: ...


class LoggingSink:
    """Forward sink events to a stdlib logger, fields as structured `extra`."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("prism_intelligence")

    def log(self, level: LogLevel, message: str, fields: Mapping[str, object]) -> None:
        extra = {
            (f"field_{key}" if key in _RESERVED_LOG_RECORD_ATTRS else key): value
            for key, value in fields.items()
        }
        self.logger.log(_LEVELS.get(level, logging.INFO), message, extra=extra)


@dataclass(frozen=True, slots=True)
class LogEntry:
    level: LogLevel
    message: str
    fields: dict[str, object]


@dataclass
class RecordingSink:
    """Keeps every event in memory. Useful in tests and for batch reports."""

    entries: list[LogEntry] = field(default_factory=list)

    def log(self, level: LogLevel, message: str, fields: Mapping[str, object]) -> None:
        self.entries.append(LogEntry(level=level, message=message, fields=dict(fields)))

    def messages(self, level: LogLevel | None = None) -> list[str]:
        return [e.message for e in self.entries if level is None or e.level == level]
