"""
Upload API endpoint.

Routes: POST /upload

Accepts a multipart file plus courseId, stores it and queues ingestion.
The response is returned as soon as the document is queued.

Dependencies: course_qa.application.services.document_service, course_qa.models
System role: Document upload HTTP API
"""

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile

from course_qa.api.deps import get_actor_id, get_document_service, get_settings_dependency
from course_qa.api.routers.validators import parse_course_id, validate_upload
from course_qa.application.services.document_service import DocumentService
from course_qa.configs import Settings
from course_qa.core.exceptions import ValidationError
from course_qa.models.document import UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["documents"])


@router.post("/upload", response_model=UploadResponse)
async def upload_document(
    file: UploadFile | None = File(default=None),
    course_id: str | None = Form(default=None, alias="courseId"),
    document_service: DocumentService = Depends(get_document_service),
    settings: Settings = Depends(get_settings_dependency),
    actor_id: int | None = Depends(get_actor_id),
) -> UploadResponse:
    """
    Upload a course document.

    Validation order: file present, courseId present, size, type.

    Returns:
        UploadResponse: documentId, status "queued" and title

    Raises:
        ValidationError: MISSING_PARAMETERS, FILE_TOO_LARGE or INVALID_FILE_TYPE
    """
    if file is None or not file.filename:
        raise ValidationError("No file provided", field="file")
    parsed_course_id = parse_course_id(course_id)

    max_bytes = settings.ingestion.max_upload_bytes
    try:
        data = await file.read(max_bytes + 1)
    finally:
        await file.close()

    content_type = validate_upload(file.filename, file.content_type, len(data), max_bytes)

    document = await document_service.upload_document(
        course_id=parsed_course_id,
        filename=file.filename,
        content_type=content_type,
        data=data,
        actor_id=actor_id,
    )
    return UploadResponse(
        document_id=document.id,
        status=document.status.value,
        title=document.title,
    )
