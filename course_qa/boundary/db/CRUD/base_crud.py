"""
Shared CRUD behaviour for the course_qa tables.

Every CRUD singleton (documents, chunks, search logs, events) inherits row
creation and primary-key access from here. Methods flush so generated ids
and server defaults are visible, but commit is always left to the caller:
a service decides what belongs in one transaction.

Dependencies: sqlalchemy
System role: Foundation for table-specific CRUD classes
"""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from course_qa.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """Row creation and primary-key operations for one mapped model."""

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    def _select_by_id(self, id: UUID) -> Select[tuple[ModelT]]:
        return select(self.model).where(self.model.id == id)

    async def create(self, session: AsyncSession, **values: Any) -> ModelT:
        """
        Insert one row.

        Mapped validators (status, checksum) run on construction and on
        attribute assignment, so invalid values fail before any flush.

        Args:
            session: Async database session
            **values: Column values

        Returns:
            The flushed and refreshed instance
        """
        row = self.model(**values)
        session.add(row)
        await session.flush()
        await session.refresh(row)
        return row

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        """Return the row with this primary key, or None."""
        result = await session.execute(self._select_by_id(id))
        return result.scalar_one_or_none()

    async def update_by_id(
        self,
        session: AsyncSession,
        id: UUID,
        **changes: Any,
    ) -> ModelT | None:
        """
        Apply attribute changes to a loaded row.

        Changes go through attribute assignment rather than an UPDATE
        statement, so the model's validators guard every write.

        Returns:
            The updated row, or None if it does not exist
        """
        row = await self.get_by_id(session, id)
        if row is None:
            return None
        for name, value in changes.items():
            setattr(row, name, value)
        await session.flush()
        await session.refresh(row)
        return row

    async def delete_by_id(self, session: AsyncSession, id: UUID) -> bool:
        """Delete one row; returns whether anything was removed."""
        result = await session.execute(delete(self.model).where(self.model.id == id))
        return bool(result.rowcount)
