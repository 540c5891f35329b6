"""
Logging for the service and the client SDK.

Console lines are human readable and carry the request's correlation id.
Errors are also appended to ``LOG_FILE_PATH`` as one JSON object per line,
enriched with the fields set through ``set_log_context`` (endpoint,
method, user_id, status_code) by the logging-context middleware.
"""

import json
import logging
import sys
from contextvars import ContextVar
from typing import Any

from socialnet.settings import app_settings

log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})

# Attributes every LogRecord has; anything else came in through ``extra=``
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None))
) | {"message", "asctime", "correlation_id"}


def get_correlation_id() -> str:
    # Imported lazily: the middleware package imports this module
    from socialnet.middlewares.correlation_id import (
        get_correlation_id as current_id,
    )

    return current_id()


def set_log_context(**kwargs: Any) -> None:
    """
    Add fields to every log record written in the current context.

    Example:
        >>> set_log_context(user_id="5c1e...", endpoint="/api/posts/for-you")
        >>> logger.error("Feed query failed")  # JSON line includes both
    """
    log_context.set({**log_context.get(), **kwargs})


def get_log_context() -> dict[str, Any]:
    return log_context.get()


def clear_log_context() -> None:
    log_context.set({})


class JSONLineFormatter(logging.Formatter):
    """One JSON object per record, for the error file."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
            "environment": app_settings.ENVIRONMENT,
        }
        cid = get_correlation_id()
        if cid:
            entry["request_id"] = cid
        entry.update(get_log_context())
        entry.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """
    ``time - [cid] LEVEL: message``. Records at levels other than INFO
    also show where they were logged.
    """

    PREFIX = "%(asctime)s - [%(correlation_id)s] %(levelname)s: "
    LOCATION = "%(module)s.%(funcName)s:%(lineno)d - "

    def __init__(self) -> None:
        super().__init__()
        datefmt = "%Y-%m-%d %H:%M:%S"
        self._short = logging.Formatter(self.PREFIX + "%(message)s", datefmt)
        self._long = logging.Formatter(
            self.PREFIX + self.LOCATION + "%(message)s", datefmt
        )

    def format(self, record: logging.LogRecord) -> str:
        record.correlation_id = get_correlation_id() or "-"
        if record.levelno == logging.INFO:
            return self._short.format(record)
        return self._long.format(record)


def setup_logging() -> logging.Logger:
    """
    Configure the ``socialnet`` logger.

    Returns:
        The configured logger. A log file that cannot be opened only
        disables the JSON error output.
    """
    configured = logging.getLogger("socialnet")
    configured.setLevel(app_settings.LOG_LEVEL.upper())
    configured.propagate = False
    configured.handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(ConsoleFormatter())
    configured.addHandler(console)

    try:
        errors = logging.FileHandler(app_settings.LOG_FILE_PATH)
    except OSError as ex:
        configured.warning(f"Error log file disabled: {ex}")
    else:
        errors.setLevel(logging.ERROR)
        errors.setFormatter(JSONLineFormatter())
        configured.addHandler(errors)

    return configured


logger = setup_logging()
