"""
Document request/response schemas.

Dependencies: pydantic
System role: Document API contracts
"""

import enum
import uuid
from datetime import datetime

from pydantic import Field, field_validator

from course_qa.models.common import CamelModel


class UploadResponse(CamelModel):
    """Response for an accepted upload."""

    document_id: uuid.UUID
    status: str
    title: str


class DocumentResponse(CamelModel):
    """Full document record."""

    id: uuid.UUID
    course_id: int
    title: str
    storage_key: str
    checksum: str
    content_type: str
    size_bytes: int
    status: str
    page_count: int | None = None
    chunk_count: int | None = None
    error_message: str | None = None
    created_at: datetime
    updated_at: datetime

    @field_validator("status", mode="before")
    @classmethod
    def _status_value(cls, value):
        return value.value if isinstance(value, enum.Enum) else value


class DocumentListResponse(CamelModel):
    """Documents of one course."""

    documents: list[DocumentResponse]
    total: int = Field(description="Total documents in the course")


class DeleteDocumentResponse(CamelModel):
    """Response for a completed delete."""

    success: bool = True
