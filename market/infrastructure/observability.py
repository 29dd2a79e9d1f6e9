"""Structured Logging: formatters and setup for the terminal process.

Invariants:
    - Every record carries its creation time, level, logger name and message
    - Command context extras (command, user_id, order_id, product_id, event_kind,
      error_code) are surfaced by both formats when present
    - Logs go to stderr so they never interleave with command output on stdout
    - setup_logging() is idempotent: a second call replaces the handler it installed
    - sqlalchemy stays at WARNING whatever the application level

Design Decisions:
    - setup_logging called once on startup by main.run
"""

import json
import logging
import sys
from datetime import datetime, timezone

_EXTRA_KEYS = (
    "command", "user_id", "order_id", "product_id",
    "event_kind", "error_code",
)

_installed: logging.Handler | None = None


def command_extras(record: logging.LogRecord) -> dict[str, object]:
    """Context extras attached with `extra=`, in a fixed order."""
    extras = {}
    for key in _EXTRA_KEYS:
        val = record.__dict__.get(key)
        if val is not None:
            extras[key] = val
    return extras


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **command_extras(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class ContextTextFormatter(logging.Formatter):
    """Human-readable line with command extras appended as key=value pairs."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = command_extras(record)
        if not extras:
            return line
        pairs = " ".join(f"{k}={v}" for k, v in extras.items())
        head, sep, tail = line.partition("\n")
        return f"{head} [{pairs}]{sep}{tail}"


def setup_logging(level: str = "WARNING", fmt: str = "text") -> logging.Handler:
    """Configure root logging for the application. Returns the installed handler."""
    global _installed
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if fmt == "json" else ContextTextFormatter())
    if _installed is not None:
        logging.root.removeHandler(_installed)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    _installed = handler
    return handler
