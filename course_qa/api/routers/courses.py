"""
Course API endpoints.

Routes: GET /courses/{course_id}/documents

Dependencies: course_qa.application.services.document_service, course_qa.models
System role: Course document listing HTTP API
"""

from fastapi import APIRouter, Depends, Query

from course_qa.api.deps import get_document_service
from course_qa.api.routers.validators import parse_course_id
from course_qa.application.services.document_service import DocumentService
from course_qa.models.document import DocumentListResponse, DocumentResponse

router = APIRouter(prefix="/courses", tags=["courses"])


@router.get("/{course_id}/documents", response_model=DocumentListResponse)
async def list_course_documents(
    course_id: str,
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    """List a course's documents, newest first."""
    documents, total = await document_service.get_course_documents(
        parse_course_id(course_id), limit=limit, offset=offset
    )
    return DocumentListResponse(
        documents=[DocumentResponse.model_validate(d) for d in documents],
        total=total,
    )
