"""CRUD classes and their module-level singletons."""

from course_qa.boundary.db.CRUD.base_crud import BaseCRUD
from course_qa.boundary.db.CRUD.chunk_crud import ChunkCRUD, chunk_crud
from course_qa.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from course_qa.boundary.db.CRUD.event_crud import EventCRUD, event_crud
from course_qa.boundary.db.CRUD.search_log_crud import SearchLogCRUD, search_log_crud

__all__ = [
    "BaseCRUD",
    "ChunkCRUD",
    "DocumentCRUD",
    "EventCRUD",
    "SearchLogCRUD",
    "chunk_crud",
    "document_crud",
    "event_crud",
    "search_log_crud",
]
