"""ORM models for documents, chunks, search logs and audit events."""

from course_qa.boundary.db.models.chunk_model import ChunkModel
from course_qa.boundary.db.models.document_model import DocumentModel, DocumentStatus
from course_qa.boundary.db.models.event_model import EventKind, EventModel
from course_qa.boundary.db.models.search_log_model import SearchLogModel

__all__ = [
    "ChunkModel",
    "DocumentModel",
    "DocumentStatus",
    "EventKind",
    "EventModel",
    "SearchLogModel",
]
