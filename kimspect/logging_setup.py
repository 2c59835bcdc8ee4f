"""
Process-wide logging configuration.

Logs go to stderr so that tables on stdout stay machine readable.
"""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional, TextIO

LOG_FORMATS = ("text", "json")
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def level_for(verbosity: int, base_level: str = "warning") -> int:
    """
    Map the number of -v flags to a log level.

    0 keeps the configured base level, 1 is INFO and 2 or more is DEBUG.
    """
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    level = logging.getLevelName(base_level.upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(
    verbosity: int = 0,
    log_format: str = "text",
    base_level: str = "warning",
    stream: Optional[TextIO] = None,
) -> None:
    """Install a single stderr handler on the root logger."""
    if log_format not in LOG_FORMATS:
        raise ValueError(f"Unknown log format: {log_format}")

    handler = logging.StreamHandler(stream or sys.stderr)
    if log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    logging.basicConfig(level=level_for(verbosity, base_level), handlers=[handler], force=True)
