"""Structured Logging — JSON formatter and setup for the operator-visible error stream.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (error_code, path, resource, upstream_status, ...) surfaced when present
    - Handler writes to stderr; setup_logging installs it at most once

Design Decisions:
    - JSONFormatter over third-party libs: stdlib logging is enough for one process
    - setup_logging called on startup via lifespan
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_KEYS = (
    "error_code", "path", "method", "resource",
    "upstream_status", "character_id",
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
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Configure root logging; repeated calls reuse the installed handler."""
    handler = next(
        (h for h in logging.root.handlers if getattr(h, "_gateway_handler", False)),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler()
        handler._gateway_handler = True
        logging.root.addHandler(handler)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
