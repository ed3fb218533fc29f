"""
Structured JSON logging for Knowledge AI.
All modules must use get_logger() — no print() allowed.

Each record becomes one JSON line: timestamp/level/logger/message, then the
call-site fields (provider, model, latency...), then any other `extra={}` keys.
Extras whose name looks like a credential are masked before serialization.
"""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Call-site fields emitted right after the fixed header, in this order
PROMOTED_FIELDS = (
    "event",
    "provider",
    "model",
    "operation",
    "latency_ms",
    "status_code",
    "category",
    "error",
)

# Extras that must never reach a log sink in clear text
SECRET_FIELDS = frozenset({"api_key", "authorization", "x-api-key", "x_api_key"})
REDACTED = "***"

# SDK and transport loggers that echo request lines at INFO
NOISY_LOGGERS = ("httpcore", "httpx", "openai", "google", "urllib3")

# Attributes every LogRecord carries; anything else came in through `extra`
_RESERVED = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


def _extras(record: logging.LogRecord) -> Dict[str, Any]:
    return {k: v for k, v in vars(record).items() if k not in _RESERVED}


def _masked(key: str, value: Any) -> Any:
    return REDACTED if key.lower() in SECRET_FIELDS else value


class JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        extras = _extras(record)
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in PROMOTED_FIELDS:
            if field in extras:
                log_entry[field] = extras.pop(field)
        for key, value in extras.items():
            log_entry[key] = _masked(key, value)

        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)

        # Values json cannot encode (exceptions, enums, paths) fall back to str()
        return json.dumps(log_entry, default=str, ensure_ascii=False)


_initialized = False


def setup_logging(level: Optional[str] = None, stream=None) -> None:
    """
    Install the JSON handler on the root logger. Call once at startup;
    later calls are no-ops.

    Args:
        level: Level name; defaults to Settings.LOG_LEVEL.
        stream: Output stream; defaults to stdout.
    """
    global _initialized
    if _initialized:
        return

    if level is None:
        from knowledge_ai.config import settings
        level = settings.LOG_LEVEL

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JSONFormatter())
    root.addHandler(handler)

    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Use __name__ as convention."""
    return logging.getLogger(name)
