"""
Structured logging helpers.

Context travels in ``extra``. Values are flattened to bounded strings and
keys that collide with LogRecord attributes are prefixed, so a log call can
never raise. Application exceptions contribute their error code and details.

Dependencies: logging (stdlib), course_qa.core.exceptions
System role: Logging helper functions
"""

import logging
from typing import Any

from course_qa.core.exceptions import CourseQAException

MAX_VALUE_CHARS = 500

_RESERVED = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


def safe_log_value(value: Any, max_length: int = MAX_VALUE_CHARS) -> str:
    """
    Render a value for a log record.

    Collections are summarised by size (query results and chunk batches can
    be large); everything else is str()'d and truncated.
    """
    if value is None:
        return "None"
    if isinstance(value, (list, tuple, set)):
        text = f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, dict):
        text = f"dict({len(value)} keys)"
    else:
        try:
            text = str(value)
        except Exception as e:
            return f"<unloggable {type(value).__name__}: {type(e).__name__}>"
    if len(text) > max_length:
        return f"{text[:max_length]}... ({len(text)} chars)"
    return text


def build_extra(context: dict[str, Any]) -> dict[str, str]:
    """Turn keyword context into a LogRecord-safe ``extra`` mapping."""
    return {
        (f"ctx_{key}" if key in _RESERVED else key): safe_log_value(value)
        for key, value in context.items()
    }


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """
    Log at ``level`` with structured context.

    Example:
        log_with_context(logger, logging.INFO, "GET /api/health - 200", status_code=200)
    """
    logger.log(level, message, extra=build_extra(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """
    Log an exception at ERROR with its traceback.

    Adds ``error_type`` and ``error_msg``; CourseQAException instances also
    add ``error_code`` and their ``details`` under a ``detail_`` prefix.

    Args:
        logger: Module logger
        message: Log message
        exc: The caught exception
        **context: Identifiers of the work that failed (document_id, course_id, ...)
    """
    extra = build_extra(context)
    extra["error_type"] = type(exc).__name__
    if isinstance(exc, CourseQAException):
        extra["error_msg"] = safe_log_value(exc.message)
        extra["error_code"] = exc.code
        extra.update(build_extra({f"detail_{k}": v for k, v in exc.details.items()}))
    else:
        extra["error_msg"] = safe_log_value(exc)
    logger.error(message, exc_info=exc, extra=extra)
