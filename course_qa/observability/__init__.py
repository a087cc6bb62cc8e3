"""
Observability helpers: logging configuration, correlation ids, request middleware.
"""

from course_qa.observability.correlation import (
    correlation_scope,
    get_correlation_id,
    new_correlation_id,
)
from course_qa.observability.logger import configure_logging

__all__ = [
    "configure_logging",
    "correlation_scope",
    "get_correlation_id",
    "new_correlation_id",
]
