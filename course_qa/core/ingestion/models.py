"""
Models for the ingestion pipeline.

Dependencies: pydantic
System role: Data structures passed between ingestion stages and the queue
"""

import enum
from uuid import UUID

from pydantic import BaseModel, Field


class ChunkDraft(BaseModel):
    """A chunk produced by the splitter, before it has a vector."""

    id: UUID = Field(description="Deterministic chunk id derived from document, ordinal and hash")
    ordinal: int = Field(description="0-based position after de-duplication", ge=0)
    content: str = Field(description="Chunk text")
    content_hash: str = Field(description="sha256 hex digest of content")
    page_start: int = Field(description="First page covered (1-based)", ge=1)
    page_end: int = Field(description="Last page covered (1-based)", ge=1)
    char_start: int = Field(description="Offset into the concatenated document text", ge=0)
    char_end: int = Field(description="Exclusive end offset", ge=0)


class OutcomeStatus(str, enum.Enum):
    """How an ingestion attempt ended."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


class IngestionOutcome(BaseModel):
    """Result of one ingestion attempt, reported back through the queue."""

    document_id: UUID
    status: OutcomeStatus
    page_count: int | None = None
    chunk_count: int | None = None
    error: str | None = None
    processing_time_ms: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.status != OutcomeStatus.FAILED


class IngestionJob(BaseModel):
    """Queue message requesting ingestion of one document."""

    document_id: UUID
    correlation_id: str | None = Field(
        default=None, description="Correlation id of the request that queued the job"
    )
