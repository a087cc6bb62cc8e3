"""
Document ingestion: parsing, chunking and embedding stages plus the pipeline
that orchestrates them (``course_qa.core.ingestion.pipeline``).

Exports: IngestionOutcome, IngestionJob, OutcomeStatus, ChunkDraft
"""

from course_qa.core.ingestion.models import (
    ChunkDraft,
    IngestionJob,
    IngestionOutcome,
    OutcomeStatus,
)

__all__ = [
    "ChunkDraft",
    "IngestionJob",
    "IngestionOutcome",
    "OutcomeStatus",
]
