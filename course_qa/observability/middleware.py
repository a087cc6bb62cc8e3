"""
Request middleware: correlation ids and access logging.

``CorrelationMiddleware`` must be the outermost middleware. It binds the
request's ``X-Correlation-ID`` (or a fresh one) for every log line written
while handling the request, and it is the last place an unhandled error
can still be turned into the JSON error envelope carrying that header.

Dependencies: starlette, course_qa.observability
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from course_qa.core.exceptions import INTERNAL_ERROR_MESSAGE, ErrorCode
from course_qa.observability.correlation import correlation_scope
from course_qa.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request once on completion, with status and timing."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        route = f"{request.method} {request.url.path}"
        try:
            response = await call_next(request)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{route} - unhandled",
                e,
                method=request.method,
                path=request.url.path,
                process_time_ms=_elapsed_ms(start),
            )
            raise

        status = response.status_code
        log_with_context(
            logger,
            logging.WARNING if status >= 500 else logging.INFO,
            f"{route} - {status}",
            method=request.method,
            path=request.url.path,
            status_code=status,
            process_time_ms=_elapsed_ms(start),
            client_host=request.client.host if request.client else None,
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind a correlation id per request and echo it on the response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        with correlation_scope(request.headers.get(CORRELATION_HEADER)) as correlation_id:
            try:
                response = await call_next(request)
            except Exception:
                # Already logged with its traceback by RequestLoggingMiddleware.
                response = JSONResponse(
                    status_code=500,
                    content={
                        "error": {
                            "code": ErrorCode.INTERNAL_ERROR,
                            "message": INTERNAL_ERROR_MESSAGE,
                        }
                    },
                )
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
