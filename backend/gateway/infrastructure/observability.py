"""Structured Logging — JSON log lines carrying the gateway's request fields.

Invariants:
    - Every line has timestamp, level, logger and message
    - viewer_id, api_path, status_code, error_code and network are copied from
      `extra` when present, in that order
    - Repeated setup_logging() calls replace the gateway handler, never stack

Design Decisions:
    - Hand-rolled JSONFormatter, no logging dependency beyond the stdlib
    - Text format for local runs prints the API path in front of the message
    - httpx request logging capped at WARNING: the network lookup already logs
      its own failures
"""

import json
import logging
from datetime import datetime, timezone

GATEWAY_FIELDS: tuple[str, ...] = (
    "viewer_id", "api_path", "status_code", "error_code", "network",
)

_QUIET_LOGGERS: tuple[str, ...] = ("httpx", "httpcore")


def _extra_fields(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in GATEWAY_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_extra_fields(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Readable single-line format for development."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        api_path = record.__dict__.get("api_path")
        return f"[{api_path}] {line}" if api_path else line


_handler: logging.Handler | None = None


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the gateway handler on the root logger."""
    global _handler
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    if _handler is not None:
        logging.root.removeHandler(_handler)
    _handler = handler
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
