"""
API and domain schemas.

Exports: Citation, document and search request/response models, error envelope
"""

from course_qa.models.citation import Citation
from course_qa.models.common import CamelModel, ErrorBody, ErrorResponse
from course_qa.models.document import (
    DeleteDocumentResponse,
    DocumentListResponse,
    DocumentResponse,
    UploadResponse,
)
from course_qa.models.search import SearchRequest, SearchResponse

__all__ = [
    "CamelModel",
    "Citation",
    "DeleteDocumentResponse",
    "DocumentListResponse",
    "DocumentResponse",
    "ErrorBody",
    "ErrorResponse",
    "SearchRequest",
    "SearchResponse",
    "UploadResponse",
]
