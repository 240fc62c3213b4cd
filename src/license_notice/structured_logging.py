"""
Structured logging configuration for license-notice.

Log events are emitted as JSON lines on stderr so that the rendered notice
on stdout stays clean.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# LogRecord attributes that are not user supplied extras.
_RESERVED_ATTRS = frozenset(
    [
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "getMessage",
        "exc_info",
        "exc_text",
        "stack_info",
        "taskName",
    ]
)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "component": getattr(record, "component", "license_notice"),
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


class NoticeLogger:
    """Event logger carrying the context of the current rendering run."""

    def __init__(self, name: str = "license_notice.events"):
        self.logger = logging.getLogger(name)
        self._setup_logger()
        self.run_context: Dict[str, Any] = {}

    def _setup_logger(self) -> None:
        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.WARNING)
            self.logger.propagate = False

    def set_run_context(
        self, source: Optional[str] = None, total_records: Optional[int] = None
    ) -> None:
        """Set the context attached to every subsequent event."""
        self.run_context = {}
        if source:
            self.run_context["source"] = source
        if total_records is not None:
            self.run_context["total_records"] = total_records

    def clear_run_context(self) -> None:
        self.run_context.clear()

    def _log(self, level: str, event_type: str, **kwargs) -> None:
        log_data = {"event_type": event_type, **self.run_context, **kwargs}
        getattr(self.logger, level)(event_type, extra=log_data)

    def info(self, event_type: str, **kwargs) -> None:
        self._log("info", event_type, **kwargs)

    def warning(self, event_type: str, **kwargs) -> None:
        self._log("warning", event_type, **kwargs)

    def error(self, event_type: str, **kwargs) -> None:
        self._log("error", event_type, **kwargs)

    def debug(self, event_type: str, **kwargs) -> None:
        self._log("debug", event_type, **kwargs)


_notice_logger = NoticeLogger()


def get_notice_logger() -> NoticeLogger:
    """Get the rendering events logger."""
    return _notice_logger


def log_format_start(source: str, total_records: int) -> None:
    """Log the start of a rendering run."""
    _notice_logger.set_run_context(source, total_records)
    _notice_logger.info("format_started")


def log_format_complete(rendered: int, skipped: int, duration_ms: float) -> None:
    """Log the end of a rendering run and drop its context."""
    _notice_logger.info(
        "format_completed",
        rendered_records=rendered,
        skipped_records=skipped,
        duration_ms=round(duration_ms, 3),
    )
    _notice_logger.clear_run_context()


def log_record_skipped(name: str, reason: str) -> None:
    """Log a record left out of the notice."""
    _notice_logger.debug("record_skipped", record=name, reason=reason)


def configure_logging(log_level: str = "WARNING") -> None:
    """Apply a log level to the package loggers."""
    level = getattr(logging, log_level.upper(), logging.WARNING)
    logging.getLogger("license_notice").setLevel(level)
    _notice_logger.logger.setLevel(level)
