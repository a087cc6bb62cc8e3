"""
Logging configuration.

One stdout handler on the root logger. Every record gets the active
correlation id (``-`` outside a request or ingestion job).

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

from course_qa.observability.correlation import get_correlation_id

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Chatty at INFO/DEBUG during embedding calls, S3 transfers and SQLite access.
QUIET_LOGGERS = ("urllib3", "botocore", "boto3", "httpx", "faiss", "aiosqlite")


class CorrelationIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    """
    Install the application handler, replacing any handlers already present.

    Safe to call more than once (the app lifespan and tests both do).

    Args:
        level: Root level name; unknown names fall back to INFO
    """
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
