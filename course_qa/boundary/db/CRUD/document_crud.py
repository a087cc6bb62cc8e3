"""
Document CRUD operations.

Provides Create, Read, Update, Delete operations for DocumentModel
with course listing and guarded lifecycle transitions.

Dependencies: sqlalchemy, course_qa.boundary.db.models
System role: Document persistence operations
"""

import logging
from typing import Iterable, Sequence
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from course_qa.boundary.db.CRUD.base_crud import BaseCRUD
from course_qa.boundary.db.models.chunk_model import ChunkModel
from course_qa.boundary.db.models.document_model import DocumentModel, DocumentStatus
from course_qa.core.exceptions import InvalidStatusTransitionError

logger = logging.getLogger(__name__)


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Extends BaseCRUD with course-scoped queries and status transitions
    that refuse to move a document backwards.
    """

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def get_by_course_id(
        self,
        session: AsyncSession,
        course_id: int,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve documents for a course, newest first.

        Args:
            session: Async database session
            course_id: Owning course
            limit: Maximum number of documents to return
            offset: Number of documents to skip

        Returns:
            Sequence of DocumentModels belonging to the course
        """
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.course_id == course_id)
            .order_by(DocumentModel.created_at.desc(), DocumentModel.id)
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_by_course_id(self, session: AsyncSession, course_id: int) -> int:
        stmt = select(func.count()).select_from(DocumentModel).where(
            DocumentModel.course_id == course_id
        )
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def get_by_statuses(
        self,
        session: AsyncSession,
        statuses: Iterable[DocumentStatus],
        limit: int | None = None,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve documents in any of the given statuses, oldest first.

        Args:
            session: Async database session
            statuses: Statuses to match
            limit: Maximum number of documents to return

        Returns:
            Sequence of matching DocumentModels
        """
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.status.in_(list(statuses)))
            .order_by(DocumentModel.created_at)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def transition_status(
        self,
        session: AsyncSession,
        id: UUID,
        status: DocumentStatus,
        **fields,
    ) -> DocumentModel | None:
        """
        Move a document to a new status, with optional extra field updates.

        Args:
            session: Async database session
            id: Document UUID
            status: Target status
            **fields: Additional columns to set in the same flush

        Returns:
            Updated DocumentModel if found, None otherwise

        Raises:
            InvalidStatusTransitionError: If the move is not forward-only
        """
        document = await self.get_by_id(session, id)
        if document is None:
            return None

        if not document.status.can_transition_to(status):
            raise InvalidStatusTransitionError(str(id), document.status.value, status.value)

        document.status = status
        for field, value in fields.items():
            setattr(document, field, value)
        await session.flush()
        await session.refresh(document)
        logger.debug(
            "Document status updated",
            extra={"document_id": str(id), "status": status.value},
        )
        return document

    async def mark_processing(self, session: AsyncSession, id: UUID) -> DocumentModel | None:
        """Mark document as picked up by an ingestion worker."""
        return await self.transition_status(session, id, DocumentStatus.PROCESSING)

    async def mark_indexed(
        self,
        session: AsyncSession,
        id: UUID,
        page_count: int,
        chunk_count: int,
    ) -> DocumentModel | None:
        """
        Mark document as successfully indexed.

        Args:
            session: Async database session
            id: Document UUID
            page_count: Number of pages extracted
            chunk_count: Number of chunks persisted

        Returns:
            Updated DocumentModel if found, None otherwise
        """
        return await self.transition_status(
            session,
            id,
            DocumentStatus.INDEXED,
            page_count=page_count,
            chunk_count=chunk_count,
            error_message=None,
        )

    async def mark_failed(
        self,
        session: AsyncSession,
        id: UUID,
        error_message: str,
    ) -> DocumentModel | None:
        """
        Mark document as failed with error details.

        Args:
            session: Async database session
            id: Document UUID
            error_message: Human-readable error description (truncated to column size)

        Returns:
            Updated DocumentModel if found, None otherwise
        """
        return await self.transition_status(
            session,
            id,
            DocumentStatus.FAILED,
            error_message=error_message[:2048],
        )

    async def delete_with_chunks(self, session: AsyncSession, id: UUID) -> bool:
        """
        Delete a document and its chunk rows.

        Chunks are removed explicitly so backends that do not enforce
        foreign keys (SQLite by default) end up in the same state.

        Args:
            session: Async database session
            id: Document UUID

        Returns:
            True if the document existed and was deleted
        """
        await session.execute(delete(ChunkModel).where(ChunkModel.document_id == id))
        return await self.delete_by_id(session, id)


document_crud = DocumentCRUD()
