"""
Retrieval domain models.

Dependencies: pydantic
System role: Hits resolved against the database, ready for citation
"""

import uuid

from pydantic import BaseModel, Field


class RetrievedChunk(BaseModel):
    """A vector hit whose chunk and document still exist."""

    chunk_id: uuid.UUID
    document_id: uuid.UUID
    title: str
    page: int = Field(description="First page covered by the chunk")
    content: str
    score: float
