"""
Document service orchestrator.

Coordinates document upload, lookup, listing and deletion. Upload stores
the bytes, records the document as queued and hands it to the ingestion
queue; the HTTP caller never waits for ingestion.

Dependencies: course_qa.boundary, course_qa.workers
System role: Document management orchestration
"""

import asyncio
import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from course_qa.boundary.db.CRUD.chunk_crud import chunk_crud
from course_qa.boundary.db.CRUD.document_crud import document_crud
from course_qa.boundary.db.CRUD.event_crud import event_crud
from course_qa.boundary.db.models.document_model import (
    TITLE_MAX_CHARS,
    DocumentModel,
    DocumentStatus,
)
from course_qa.boundary.db.models.event_model import EventKind
from course_qa.boundary.storage.base import DocumentStorage, build_storage_key
from course_qa.boundary.vdb.vector_schemas import VectorIndex
from course_qa.core.exceptions import DocumentNotFoundError, StorageError
from course_qa.core.ingestion.checksum import bytes_checksum
from course_qa.core.ingestion.file_types import shorten_filename
from course_qa.observability.log_utils import log_exception_with_context
from course_qa.workers.ingestion_queue import IngestionQueue

logger = logging.getLogger(__name__)


class DocumentService:
    """
    Document service orchestrator.

    Handles document lifecycle: upload, lookup, listing, deletion.
    """

    def __init__(
        self,
        db: AsyncSession,
        storage: DocumentStorage,
        vector_index: VectorIndex,
        queue: IngestionQueue | None = None,
    ) -> None:
        """
        Initialize document service.

        Args:
            db: AsyncSession for document metadata
            storage: Raw document storage
            vector_index: Vector index holding chunk vectors
            queue: Ingestion queue (uploads are not enqueued when None)
        """
        self.db = db
        self._storage = storage
        self._vector_index = vector_index
        self._queue = queue

    async def upload_document(
        self,
        course_id: int,
        filename: str,
        content_type: str,
        data: bytes,
        actor_id: int | None = None,
    ) -> DocumentModel:
        """
        Store an upload and queue it for ingestion.

        Steps:
        1. Compute checksum and storage key
        2. Write bytes to document storage
        3. Create document row (QUEUED) and document.uploaded event, commit
        4. Submit an ingestion job

        Args:
            course_id: Owning course
            filename: Original filename; the title is this, shortened to the column size
            content_type: Accepted MIME type
            data: File bytes (already size-checked)
            actor_id: Caller identity if known

        Returns:
            DocumentModel: The queued document

        Raises:
            StorageError: If the bytes cannot be stored
        """
        checksum = bytes_checksum(data)
        title = shorten_filename(filename, TITLE_MAX_CHARS)
        storage_key = build_storage_key(course_id, filename)

        await asyncio.to_thread(self._storage.save, storage_key, data, content_type)

        try:
            document = await document_crud.create(
                self.db,
                course_id=course_id,
                title=title,
                storage_key=storage_key,
                checksum=checksum,
                content_type=content_type,
                size_bytes=len(data),
                status=DocumentStatus.QUEUED,
            )
            await event_crud.record(
                self.db,
                EventKind.DOCUMENT_UPLOADED,
                target_id=str(document.id),
                payload={"title": title, "size": len(data), "type": content_type},
                actor_id=actor_id,
            )
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            await self._discard_blob(storage_key)
            raise

        logger.info(
            "Document uploaded",
            extra={
                "document_id": str(document.id),
                "course_id": course_id,
                "size_bytes": len(data),
                "content_type": content_type,
            },
        )

        if self._queue is not None:
            self._queue.submit(document.id)

        return document

    async def get_document(self, document_id: UUID) -> DocumentModel:
        """
        Fetch a document.

        Raises:
            DocumentNotFoundError: If it does not exist
        """
        document = await document_crud.get_by_id(self.db, document_id)
        if document is None:
            raise DocumentNotFoundError(str(document_id))
        return document

    async def get_course_documents(
        self,
        course_id: int,
        limit: int | None = None,
        offset: int = 0,
    ) -> tuple[Sequence[DocumentModel], int]:
        """
        List a course's documents, newest first.

        Returns:
            tuple: Page of documents and the course total
        """
        documents = await document_crud.get_by_course_id(
            self.db, course_id, limit=limit, offset=offset
        )
        total = await document_crud.count_by_course_id(self.db, course_id)
        return documents, total

    async def delete_document(
        self,
        document_id: UUID,
        actor_id: int | None = None,
    ) -> None:
        """
        Delete a document with its chunks, vectors and stored bytes.

        The database delete and document.deleted event commit first; vector
        and blob removal follow. A vector left behind by a failure there can
        no longer resolve to a chunk, so it can never be cited.

        Args:
            document_id: Document UUID
            actor_id: Caller identity if known

        Raises:
            DocumentNotFoundError: If the document does not exist
        """
        document = await self.get_document(document_id)
        chunks = await chunk_crud.get_by_document_id(self.db, document_id)
        chunk_ids = [str(c.id) for c in chunks]
        course_id = document.course_id
        storage_key = document.storage_key
        title = document.title

        await document_crud.delete_with_chunks(self.db, document_id)
        await event_crud.record(
            self.db,
            EventKind.DOCUMENT_DELETED,
            target_id=str(document_id),
            payload={"title": title, "fileKey": storage_key},
            actor_id=actor_id,
        )
        await self.db.commit()

        try:
            removed = await asyncio.to_thread(self._vector_index.delete, chunk_ids, course_id)
        except Exception as e:
            log_exception_with_context(
                logger,
                "Failed to remove document vectors",
                e,
                document_id=str(document_id),
                course_id=course_id,
            )
            removed = 0
        await self._discard_blob(storage_key)

        logger.info(
            "Document deleted",
            extra={
                "document_id": str(document_id),
                "chunks_deleted": len(chunk_ids),
                "vectors_deleted": removed,
            },
        )

    async def _discard_blob(self, storage_key: str) -> None:
        try:
            await asyncio.to_thread(self._storage.delete, storage_key)
        except StorageError as e:
            log_exception_with_context(
                logger, "Failed to delete stored file", e, storage_key=storage_key
            )
