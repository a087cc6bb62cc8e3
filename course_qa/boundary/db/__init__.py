"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Connection management
  - DocumentModel, ChunkModel, SearchLogModel, EventModel: Domain entities
  - DocumentStatus, EventKind: Enum types
  - document_crud, chunk_crud, search_log_crud, event_crud: CRUD singletons

Dependencies: sqlalchemy, course_qa.configs
System role: Database adapter providing persistent storage for documents,
chunks, search logs and audit events.
"""

from course_qa.boundary.db.base import Base, TimestampMixin, UUIDMixin
from course_qa.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from course_qa.boundary.db.models import (
    ChunkModel,
    DocumentModel,
    DocumentStatus,
    EventKind,
    EventModel,
    SearchLogModel,
)
from course_qa.boundary.db.CRUD import (
    BaseCRUD,
    ChunkCRUD,
    DocumentCRUD,
    EventCRUD,
    SearchLogCRUD,
    chunk_crud,
    document_crud,
    event_crud,
    search_log_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "ChunkModel",
    "DocumentModel",
    "DocumentStatus",
    "EventKind",
    "EventModel",
    "SearchLogModel",
    # CRUD classes
    "BaseCRUD",
    "ChunkCRUD",
    "DocumentCRUD",
    "EventCRUD",
    "SearchLogCRUD",
    # CRUD singletons
    "chunk_crud",
    "document_crud",
    "event_crud",
    "search_log_crud",
]
