"""
Console Logging

Architectural Intent:
- One handler on the "deployconsole" logger; modules log through
  logging.getLogger(__name__) and never print
- Client calls attach namespace/operation/status_code as record extras so a
  JSON log line can be filtered per API operation
- The CLI chooses the level (--verbose, --debug, or log_level from config)
"""

import json
import logging
import sys
from datetime import datetime, UTC
from typing import Optional, TextIO

LOGGER_NAME = "deployconsole"

# Extras copied into JSON output when a record carries them.
CONTEXT_FIELDS = ("namespace", "operation", "status_code")


def request_context(
    operation: str, namespace: str, status_code: Optional[int] = None
) -> dict[str, object]:
    """Build the ``extra`` mapping for a log call about one API request."""
    context: dict[str, object] = {"operation": operation, "namespace": namespace}
    if status_code is not None:
        context["status_code"] = status_code
    return context


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with request context when present."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field_name in CONTEXT_FIELDS:
            value = getattr(record, field_name, None)
            if value is not None:
                entry[field_name] = value
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def resolve_level(name: str, default: int = logging.WARNING) -> int:
    """Map a level name such as "info" to its logging constant."""
    level = logging.getLevelName(name.upper()) if name else default
    return level if isinstance(level, int) else default


def configure_logging(
    level: int = logging.INFO,
    json_format: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """Install the console's single log handler.

    Calling it again replaces the previous handler, so the CLI can reconfigure
    after reading the config file.
    """
    console_logger = logging.getLogger(LOGGER_NAME)
    console_logger.setLevel(level)
    console_logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s")
        )
    console_logger.addHandler(handler)
