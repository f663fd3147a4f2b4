"""Structured Logging — JSON formatter and setup for operation observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (operation, login, error_code, snapshot_key, community) surfaced when present
    - JSON format by default, human-readable when log_format == "text"
    - setup_logging is idempotent: calling it twice never duplicates handlers

Design Decisions:
    - JSONFormatter on stdlib logging: no extra dependency
    - setup_logging called once on startup by SystemLifecycle
"""

import logging
import json
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "operation", "login", "error_code", "snapshot_key", "community",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Configure logging for the application."""
    root = logging.getLogger("jackut")
    for existing in list(root.handlers):
        if getattr(existing, "_jackut_handler", False):
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler._jackut_handler = True
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
