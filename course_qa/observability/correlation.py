"""
Correlation id propagation.

The id lives in a ContextVar, so it follows a request through awaits and
into ``asyncio.to_thread`` calls. Ingestion jobs carry the id of the upload
that queued them and rebind it in the worker.

Dependencies: contextvars
System role: Request tracing across service boundaries
"""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def new_correlation_id() -> str:
    return uuid.uuid4().hex


def get_correlation_id() -> str:
    """Current correlation id, or an empty string outside a request or job."""
    return correlation_id_ctx.get()


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """
    Bind a correlation id for the duration of a block.

    The previous value is restored on exit, including when the block raises.

    Args:
        correlation_id: Incoming id; a new one is generated when empty

    Yields:
        str: The bound id
    """
    value = correlation_id or new_correlation_id()
    token = correlation_id_ctx.set(value)
    try:
        yield value
    finally:
        correlation_id_ctx.reset(token)
