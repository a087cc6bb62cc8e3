"""
Request validation helpers.

Raise ValidationError subclasses carrying the envelope error code, so
routers stay free of status-code plumbing.

Dependencies: course_qa.core
System role: Input validation for the HTTP boundary
"""

from uuid import UUID

from course_qa.core.exceptions import ErrorCode, InvalidIdError, ValidationError
from course_qa.core.ingestion.file_types import resolve_content_type
from course_qa.models.search import SearchRequest


def parse_document_id(raw: str) -> UUID:
    """
    Parse a document id path segment.

    Raises:
        InvalidIdError: If it is not a UUID
    """
    try:
        return UUID(raw)
    except (ValueError, AttributeError, TypeError):
        raise InvalidIdError(raw)


def parse_course_id(raw: str | int | None) -> int:
    """
    Parse a course id from a form field or body value.

    Raises:
        ValidationError: MISSING_PARAMETERS if absent, not an integer, or not positive
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise ValidationError("Course ID is required", field="courseId")
    try:
        course_id = int(raw)
    except (TypeError, ValueError):
        raise ValidationError("Course ID must be an integer", field="courseId")
    if course_id <= 0:
        raise ValidationError("Course ID must be positive", field="courseId")
    return course_id


def validate_upload(
    filename: str | None,
    content_type: str | None,
    size: int,
    max_bytes: int,
) -> str:
    """
    Check size and type of an upload.

    Args:
        filename: Client filename
        content_type: Declared MIME type
        size: Bytes received (read up to max_bytes + 1)
        max_bytes: Size limit

    Returns:
        str: Effective MIME type

    Raises:
        ValidationError: FILE_TOO_LARGE or INVALID_FILE_TYPE
    """
    if size > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        raise ValidationError(
            f"File size must be under {limit_mb}MB",
            code=ErrorCode.FILE_TOO_LARGE,
            field="file",
        )
    resolved = resolve_content_type(filename, content_type)
    if resolved is None:
        raise ValidationError(
            "Only PDF, TXT, DOCX, and PPTX files are supported",
            code=ErrorCode.INVALID_FILE_TYPE,
            field="file",
            details={"content_type": content_type},
        )
    return resolved


def validate_search_request(
    request: SearchRequest,
    max_top_k: int,
) -> tuple[int, str, int | None, float | None]:
    """
    Validate a search body.

    Returns:
        tuple: course_id, stripped query, top_k (capped at max_top_k), min_score

    Raises:
        ValidationError: MISSING_PARAMETERS or EMPTY_QUERY
    """
    if request.course_id is None or request.query is None:
        raise ValidationError("courseId and query are required")
    course_id = parse_course_id(request.course_id)

    query = request.query.strip()
    if not query:
        raise ValidationError("Query cannot be empty", code=ErrorCode.EMPTY_QUERY, field="query")

    top_k = request.top_k
    if top_k is not None:
        if top_k < 1:
            raise ValidationError("topK must be at least 1", field="topK")
        top_k = min(top_k, max_top_k)

    min_score = request.min_score
    if min_score is not None and not -1.0 <= min_score <= 1.0:
        raise ValidationError("minScore must be between -1 and 1", field="minScore")

    return course_id, query, top_k, min_score
