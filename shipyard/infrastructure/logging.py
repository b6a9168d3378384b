"""
Centralized Logging

Architectural Intent:
- One handler on the "shipyard" logger; modules log through
  logging.getLogger(__name__) beneath it
- Lifecycle records carry the target address and operation name through
  extra=; both formats render them when present
- Level comes from --debug/--verbose or log_level, format from --log-format
  or log_format ("text" or "json")
"""

import json
import logging
import sys
from datetime import datetime, UTC
from typing import Optional, TextIO

LOG_FORMATS = ("text", "json")
CONTEXT_FIELDS = ("operation", "address")


def _context(record: logging.LogRecord) -> dict[str, str]:
    return {
        name: str(getattr(record, name))
        for name in CONTEXT_FIELDS
        if getattr(record, name, None) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record, lifecycle context as top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


class ConsoleFormatter(logging.Formatter):
    """Human-readable lines ending in `operation=... address=...`."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        context = _context(record)
        if context:
            line += " " + " ".join(f"{k}={v}" for k, v in context.items())
        return line


def configure_logging(
    level: int = logging.WARNING,
    log_format: str = "text",
    stream: Optional[TextIO] = None,
) -> None:
    """Install the shipyard handler, replacing any earlier one.

    Unknown formats fall back to text.
    """
    logger = logging.getLogger("shipyard")
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        JSONFormatter() if log_format == "json" else ConsoleFormatter()
    )
    logger.addHandler(handler)
