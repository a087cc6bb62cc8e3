"""
Chunk CRUD operations.

Bulk insertion for a freshly ingested document and lookups used when
turning vector hits back into citable text.

Dependencies: sqlalchemy, course_qa.boundary.db.models
System role: Chunk persistence operations
"""

from typing import Any, Iterable, Sequence
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from course_qa.boundary.db.CRUD.base_crud import BaseCRUD
from course_qa.boundary.db.models.chunk_model import ChunkModel
from course_qa.boundary.db.models.document_model import DocumentModel


class ChunkCRUD(BaseCRUD[ChunkModel]):
    """CRUD operations for ChunkModel."""

    def __init__(self) -> None:
        """Initialize ChunkCRUD with ChunkModel."""
        super().__init__(ChunkModel)

    async def create_many(
        self,
        session: AsyncSession,
        rows: Iterable[dict[str, Any]],
    ) -> list[ChunkModel]:
        """
        Insert many chunk rows in one flush.

        Args:
            session: Async database session
            rows: Column values per chunk; each must include embedding_id

        Returns:
            Created ChunkModels in input order
        """
        instances = [ChunkModel(**row) for row in rows]
        session.add_all(instances)
        await session.flush()
        return instances

    async def get_by_document_id(
        self,
        session: AsyncSession,
        document_id: UUID,
    ) -> Sequence[ChunkModel]:
        """
        Retrieve a document's chunks ordered by ordinal.

        Args:
            session: Async database session
            document_id: Owning document UUID

        Returns:
            Sequence of ChunkModels
        """
        stmt = (
            select(ChunkModel)
            .where(ChunkModel.document_id == document_id)
            .order_by(ChunkModel.ordinal)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_by_document_id(self, session: AsyncSession, document_id: UUID) -> int:
        stmt = select(func.count()).select_from(ChunkModel).where(
            ChunkModel.document_id == document_id
        )
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def get_with_documents(
        self,
        session: AsyncSession,
        chunk_ids: Sequence[UUID],
    ) -> dict[UUID, tuple[ChunkModel, DocumentModel]]:
        """
        Resolve chunk ids to (chunk, document) pairs.

        Ids with no surviving row (document deleted after the vector was
        read) are simply absent from the result.

        Args:
            session: Async database session
            chunk_ids: Chunk UUIDs from vector search hits

        Returns:
            Mapping of chunk id to its chunk and owning document
        """
        if not chunk_ids:
            return {}
        stmt = (
            select(ChunkModel, DocumentModel)
            .join(DocumentModel, DocumentModel.id == ChunkModel.document_id)
            .where(ChunkModel.id.in_(list(chunk_ids)))
        )
        result = await session.execute(stmt)
        return {chunk.id: (chunk, document) for chunk, document in result.all()}

    async def delete_by_document_id(self, session: AsyncSession, document_id: UUID) -> int:
        """
        Delete all chunks of a document.

        Returns:
            Number of rows removed
        """
        stmt = delete(ChunkModel).where(ChunkModel.document_id == document_id)
        result = await session.execute(stmt)
        return result.rowcount or 0


chunk_crud = ChunkCRUD()
