"""
API error handling.

Translates domain exceptions, request validation failures and unexpected
errors into the ``{"error": {"code", "message"}}`` envelope.

Dependencies: fastapi, starlette
System role: Uniform error responses across all routes
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from course_qa.core.exceptions import INTERNAL_ERROR_MESSAGE, CourseQAException, ErrorCode
from course_qa.models.common import ErrorBody, ErrorResponse
from course_qa.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    """Build an error envelope response."""
    body = ErrorResponse(error=ErrorBody(code=code, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def handle_domain_error(request: Request, exc: CourseQAException) -> JSONResponse:
    if exc.status_code >= 500:
        log_exception_with_context(logger, "Request failed", exc, path=request.url.path)
        message = exc.message if exc.code != ErrorCode.INTERNAL_ERROR else INTERNAL_ERROR_MESSAGE
    else:
        logger.warning(
            "Request rejected",
            extra={"path": request.url.path, "code": exc.code, "error": exc.message},
        )
        message = exc.message
    return error_response(exc.status_code, exc.code, message)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = [".".join(str(p) for p in err.get("loc", ())[1:]) for err in exc.errors()]
    logger.warning(
        "Request validation failed",
        extra={"path": request.url.path, "fields": ", ".join(fields)},
    )
    message = f"Missing or invalid parameters: {', '.join(f for f in fields if f)}".rstrip(": ")
    return error_response(status.HTTP_400_BAD_REQUEST, ErrorCode.MISSING_PARAMETERS, message)


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        code = ErrorCode.NOT_FOUND
    elif exc.status_code < 500:
        code = ErrorCode.MISSING_PARAMETERS
    else:
        code = ErrorCode.INTERNAL_ERROR
    return error_response(exc.status_code, code, str(exc.detail))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    log_exception_with_context(logger, "Unhandled error", exc, path=request.url.path)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorCode.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE
    )


def register_error_handlers(app: FastAPI) -> None:
    """
    Attach all exception handlers to the application.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(CourseQAException, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
