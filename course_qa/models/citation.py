"""
Citation domain model.

Represents a retrieved chunk surfaced to the user as the source of an answer.

Dependencies: pydantic
System role: Citation data structure
"""

import uuid

from pydantic import Field

from course_qa.models.common import CamelModel


class Citation(CamelModel):
    """Citation model for source attribution."""

    document_id: uuid.UUID = Field(description="Source document id")
    chunk_id: uuid.UUID = Field(description="Chunk identifier for tracing")
    title: str = Field(description="Source document title")
    page: int = Field(description="Page (1-based) where the cited passage starts")
    snippet: str = Field(description="Excerpt of the cited chunk")
    score: float = Field(description="Cosine similarity between query and chunk")
