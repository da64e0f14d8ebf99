"""ADPILOT — Structured JSON Logging.

Anything passed through ``extra=`` (portfolio_id, schedule_id, instant,
granularity, ...) becomes a top-level key of the JSON line.
"""

import logging
import json
import sys
from datetime import datetime, timezone
from adpilot.config import settings

# Attributes every LogRecord carries; everything else came in via extra=
_RECORD_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS and not key.startswith("_"):
                log_entry[key] = value
        return json.dumps(log_entry, default=str)


def get_logger(name: str) -> logging.Logger:
    """Named ``adpilot.<name>`` logger writing JSON to stdout at settings.log_level."""
    logger = logging.getLogger(f"adpilot.{name}")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    return logger
