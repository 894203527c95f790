"""
CacheTool — Observability Logging

Structured logging helpers for the CacheTool runtime.

Provides:
- NOTICE log level (between INFO and WARNING) used for call tracing
- Call ID context variable set while a proxy function is dispatched
- JSON log formatter
- Library default logger that stays silent until configured
"""

import contextvars
import json
import logging
import sys
from datetime import UTC, datetime
from uuid import uuid4

NOTICE = 25
logging.addLevelName(NOTICE, "NOTICE")

LOGGER_NAME = "cachetool"

# Call ID context variable for correlating dispatch logs
_call_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar("call_id", default=None)

_RESERVED_ATTRS = frozenset(
    (
        "args",
        "msg",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "name",
        "message",
        "taskName",
    )
)


def get_call_id() -> str | None:
    """Get current call ID from context."""
    return _call_id_ctx.get()


def set_call_id(call_id: str | None) -> contextvars.Token[str | None]:
    """Set call ID in context and return the reset token."""
    return _call_id_ctx.set(call_id)


def reset_call_id(token: contextvars.Token[str | None]) -> None:
    """Restore the call ID that was active before set_call_id()."""
    _call_id_ctx.reset(token)


def generate_call_id() -> str:
    """Generate a new call ID."""
    return uuid4().hex


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        call_id = _call_id_ctx.get()
        if call_id:
            log_data["call_id"] = call_id

        # Add any extra fields from record.__dict__
        for key, value in record.__dict__.items():
            if key not in log_data and not key.startswith("_") and key not in _RESERVED_ATTRS:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=repr)


def get_default_logger() -> logging.Logger:
    """
    Get the library logger used when no logger is supplied.

    The logger carries a NullHandler so that records are dropped
    silently unless the host application configures logging.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if not any(isinstance(handler, logging.NullHandler) for handler in logger.handlers):
        logger.addHandler(logging.NullHandler())
    return logger


def configure_logging(level: str | int = "INFO", json_format: bool = False) -> logging.Logger:
    """
    Install a stderr handler on the library logger.

    Args:
        level: Log level name or number
        json_format: Emit JSON lines instead of plain text

    Returns:
        The configured library logger
    """
    logger = get_default_logger()

    # Remove handlers installed by a previous call
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    return logger
