"""
Document ingestion orchestrator.

Coordinates storage download, checksum verification, parsing, chunking,
embedding, vector upsert and the final database write for one document.

Ordering guarantees:
- Chunk rows are inserted in the same transaction that marks the document
  indexed, and only after their vectors are in the index.
- If any step fails, vectors written by this attempt are removed and the
  document is marked failed with the error recorded.
- Chunk ids are derived from (document, ordinal, content hash), so a retry
  over unchanged bytes overwrites rather than duplicates vectors. Vectors of
  chunk rows replaced by a retry are removed once the new rows are committed.

Dependencies: All task modules, course_qa.boundary
System role: Pipeline orchestration (coordinates only)
"""

import asyncio
import logging
import os
import shutil
import time
from uuid import UUID

from langchain_core.documents import Document
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from course_qa.boundary.db.CRUD.chunk_crud import chunk_crud
from course_qa.boundary.db.CRUD.document_crud import document_crud
from course_qa.boundary.db.models.document_model import DocumentStatus
from course_qa.boundary.storage.base import DocumentStorage
from course_qa.boundary.vdb.vector_schemas import VectorIndex, VectorRecord
from course_qa.core.exceptions import (
    ChecksumMismatchError,
    DocumentNotFoundError,
    ParsingError,
)
from course_qa.core.ingestion.checksum import file_checksum
from course_qa.core.ingestion.chunking_task import ChunkingTask
from course_qa.core.ingestion.embedding_task import EmbeddingTask
from course_qa.core.ingestion.models import ChunkDraft, IngestionOutcome, OutcomeStatus
from course_qa.core.ingestion.parsing_task import ParsingTask
from course_qa.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class IngestionPipeline:
    """Orchestrate ingestion: download -> verify -> parse -> chunk -> embed -> index -> persist."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        storage: DocumentStorage,
        vector_index: VectorIndex,
        parsing_task: ParsingTask,
        chunking_task: ChunkingTask,
        embedding_task: EmbeddingTask,
    ) -> None:
        """
        Initialize pipeline with its collaborators.

        Args:
            session_factory: Factory for the short-lived DB sessions each stage opens
            storage: Raw document storage
            vector_index: Course-scoped vector index
            parsing_task: Text extraction stage
            chunking_task: Splitting stage
            embedding_task: Embedding stage
        """
        self._session_factory = session_factory
        self._storage = storage
        self._vector_index = vector_index
        self._parsing_task = parsing_task
        self._chunking_task = chunking_task
        self._embedding_task = embedding_task

    async def ingest(self, document_id: UUID) -> IngestionOutcome:
        """
        Ingest one document.

        Terminal documents are not reprocessed: an indexed document returns a
        skipped outcome and a failed one returns its recorded failure. A
        document found in processing (an interrupted earlier attempt) is
        resumed.

        Args:
            document_id: Document UUID

        Returns:
            IngestionOutcome: Explicit success, skip or failure

        Raises:
            DocumentNotFoundError: If the document row does not exist
        """
        start_time = time.perf_counter()

        async with self._session_factory() as session:
            document = await document_crud.get_by_id(session, document_id)
            if document is None:
                raise DocumentNotFoundError(str(document_id))

            if document.status == DocumentStatus.INDEXED:
                logger.info(
                    "Document already indexed, skipping",
                    extra={"document_id": str(document_id), "chunk_count": document.chunk_count},
                )
                return IngestionOutcome(
                    document_id=document_id,
                    status=OutcomeStatus.SKIPPED,
                    page_count=document.page_count,
                    chunk_count=document.chunk_count,
                )
            if document.status == DocumentStatus.FAILED:
                return IngestionOutcome(
                    document_id=document_id,
                    status=OutcomeStatus.FAILED,
                    error=document.error_message,
                )

            if document.status == DocumentStatus.QUEUED:
                await document_crud.mark_processing(session, document_id)
                await session.commit()
            else:
                logger.warning(
                    "Resuming interrupted ingestion",
                    extra={"document_id": str(document_id)},
                )

            course_id = document.course_id
            storage_key = document.storage_key
            checksum = document.checksum
            content_type = document.content_type

        logger.info(
            "Ingestion started",
            extra={"document_id": str(document_id), "course_id": course_id, "storage_key": storage_key},
        )

        drafts: list[ChunkDraft] = []
        upsert_task: asyncio.Future | None = None
        committed = False
        try:
            pages = await asyncio.to_thread(self._extract, storage_key, checksum, content_type)
            drafts = await asyncio.to_thread(self._chunking_task.chunk, document_id, pages)
            if not drafts:
                raise ParsingError(
                    "Document produced no chunks",
                    document_id=str(document_id),
                    file_type=content_type,
                )

            vectors = await asyncio.to_thread(
                self._embedding_task.embed, [d.content for d in drafts]
            )
            records = [
                VectorRecord(chunk_id=str(d.id), vector=v) for d, v in zip(drafts, vectors)
            ]

            # The index write runs to completion even if this coroutine is
            # cancelled, so compensation can wait for it and then undo it.
            upsert_task = asyncio.ensure_future(
                asyncio.to_thread(self._vector_index.upsert_many, records, course_id)
            )
            embedding_ids = await asyncio.shield(upsert_task)

            new_ids = {d.id for d in drafts}
            async with self._session_factory() as session:
                previous = await chunk_crud.get_by_document_id(session, document_id)
                stale_ids = [str(c.id) for c in previous if c.id not in new_ids]
                await chunk_crud.delete_by_document_id(session, document_id)
                await chunk_crud.create_many(
                    session,
                    [
                        {
                            "id": d.id,
                            "document_id": document_id,
                            "ordinal": d.ordinal,
                            "page_start": d.page_start,
                            "page_end": d.page_end,
                            "char_start": d.char_start,
                            "char_end": d.char_end,
                            "content": d.content,
                            "content_hash": d.content_hash,
                            "embedding_id": embedding_id,
                        }
                        for d, embedding_id in zip(drafts, embedding_ids)
                    ],
                )
                indexed = await document_crud.mark_indexed(
                    session,
                    document_id,
                    page_count=len(pages),
                    chunk_count=len(drafts),
                )
                if indexed is None:
                    # Deleted while this attempt was running.
                    raise DocumentNotFoundError(str(document_id))
                await session.commit()
                committed = True

        except asyncio.CancelledError:
            if not committed:
                await asyncio.shield(self._compensate(document_id, course_id, drafts, upsert_task))
            raise
        except Exception as e:
            log_exception_with_context(
                logger,
                "Ingestion failed",
                e,
                document_id=str(document_id),
                course_id=course_id,
            )
            await self._compensate(document_id, course_id, drafts, upsert_task)
            message = getattr(e, "message", None) or str(e) or type(e).__name__
            await self.record_failure(document_id, message)
            return IngestionOutcome(
                document_id=document_id,
                status=OutcomeStatus.FAILED,
                error=message,
                processing_time_ms=(time.perf_counter() - start_time) * 1000,
            )

        if stale_ids:
            await self._remove_stale_vectors(document_id, course_id, stale_ids)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Ingestion completed",
            extra={
                "document_id": str(document_id),
                "page_count": len(pages),
                "chunk_count": len(drafts),
                "processing_time_ms": round(elapsed_ms, 2),
            },
        )
        return IngestionOutcome(
            document_id=document_id,
            status=OutcomeStatus.SUCCEEDED,
            page_count=len(pages),
            chunk_count=len(drafts),
            processing_time_ms=elapsed_ms,
        )

    async def record_failure(self, document_id: UUID, message: str) -> bool:
        """
        Mark a document failed unless it already reached a terminal status.

        Args:
            document_id: Document UUID
            message: Error description stored on the document

        Returns:
            bool: True if the document was moved to failed
        """
        async with self._session_factory() as session:
            document = await document_crud.get_by_id(session, document_id)
            if document is None or document.status.is_terminal:
                return False
            await document_crud.mark_failed(session, document_id, message)
            await session.commit()
        logger.warning(
            "Document marked failed",
            extra={"document_id": str(document_id), "error": message},
        )
        return True

    def _extract(self, storage_key: str, checksum: str, content_type: str) -> list[Document]:
        local_path = self._storage.download_to_temp(storage_key)
        try:
            actual = file_checksum(local_path)
            if actual != checksum:
                raise ChecksumMismatchError(
                    "Stored file does not match the uploaded checksum",
                    details={"expected": checksum, "actual": actual},
                )
            return self._parsing_task.parse(local_path, content_type)
        finally:
            shutil.rmtree(os.path.dirname(local_path), ignore_errors=True)

    async def _remove_stale_vectors(
        self, document_id: UUID, course_id: int, chunk_ids: list[str]
    ) -> None:
        """Drop vectors of chunks replaced by this attempt."""
        try:
            removed = await asyncio.to_thread(self._vector_index.delete, chunk_ids, course_id)
        except Exception as e:
            log_exception_with_context(
                logger,
                "Failed to remove replaced vectors",
                e,
                document_id=str(document_id),
                course_id=course_id,
            )
            return
        logger.info(
            "Removed replaced vectors",
            extra={"document_id": str(document_id), "removed": removed},
        )

    async def _compensate(
        self,
        document_id: UUID,
        course_id: int,
        drafts: list[ChunkDraft],
        upsert_task: asyncio.Future | None,
    ) -> None:
        """Remove vectors this attempt may have written."""
        if upsert_task is None or not drafts:
            return
        if not upsert_task.done():
            await asyncio.wait({upsert_task})
        try:
            removed = await asyncio.to_thread(
                self._vector_index.delete, [str(d.id) for d in drafts], course_id
            )
        except Exception as e:
            log_exception_with_context(
                logger,
                "Failed to remove vectors after ingestion failure",
                e,
                document_id=str(document_id),
                course_id=course_id,
            )
            return
        logger.info(
            "Rolled back vectors",
            extra={"document_id": str(document_id), "removed": removed},
        )
