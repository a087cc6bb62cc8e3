"""
Document API endpoints.

Routes: GET /documents/{document_id}, DELETE /documents/{document_id}

Dependencies: course_qa.application.services.document_service, course_qa.models
System role: Document HTTP API
"""

from fastapi import APIRouter, Depends

from course_qa.api.deps import get_actor_id, get_document_service
from course_qa.api.routers.validators import parse_document_id
from course_qa.application.services.document_service import DocumentService
from course_qa.models.document import DeleteDocumentResponse, DocumentResponse

router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """
    Get a document record.

    Raises:
        InvalidIdError: If document_id is not a UUID (400)
        DocumentNotFoundError: If the document does not exist (404)
    """
    document = await document_service.get_document(parse_document_id(document_id))
    return DocumentResponse.model_validate(document)


@router.delete("/{document_id}", response_model=DeleteDocumentResponse)
async def delete_document(
    document_id: str,
    document_service: DocumentService = Depends(get_document_service),
    actor_id: int | None = Depends(get_actor_id),
) -> DeleteDocumentResponse:
    """
    Delete a document, its chunks, vectors and stored file.

    Raises:
        InvalidIdError: If document_id is not a UUID (400)
        DocumentNotFoundError: If the document does not exist (404)
    """
    await document_service.delete_document(parse_document_id(document_id), actor_id=actor_id)
    return DeleteDocumentResponse(success=True)
