"""Structured Logging — JSON lines tagged with who acted on whom.

Invariants:
    - Every line has timestamp, level, logger and message
    - actor_id, target_id, request_id, error_code and path appear only when
      set, always rendered as strings (UUIDs included)
    - The timestamp is the record's creation time, not the formatting time
    - setup_logging is idempotent: a second call replaces its own handler and
      leaves foreign handlers (pytest caplog, uvicorn) alone

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - context_extra maps an ErrorContext onto `extra=`, so error logs and
      service logs share one field vocabulary
"""

import json
import logging
from datetime import datetime, timezone

from tandem.core.errors import ErrorContext

IDENTITY_FIELDS = ("actor_id", "target_id", "request_id")
EXTRA_FIELDS = (*IDENTITY_FIELDS, "error_code", "path")
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

_HANDLER_NAME = "tandem"


def context_extra(context: ErrorContext, **fields) -> dict:
    """Logging `extra` for the identities in `context`, plus `fields`."""
    extra = {}
    for key in IDENTITY_FIELDS:
        value = getattr(context, key)
        if value is not None:
            extra[key] = value
    for key, value in fields.items():
        if value is not None:
            extra[key] = value
    return extra


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                entry[key] = str(value)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or replace) the application's root handler."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT),
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
