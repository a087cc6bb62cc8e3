"""
Search log CRUD operations.

Dependencies: sqlalchemy, course_qa.boundary.db.models
System role: Search analytics persistence
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from course_qa.boundary.db.CRUD.base_crud import BaseCRUD
from course_qa.boundary.db.models.search_log_model import SearchLogModel


class SearchLogCRUD(BaseCRUD[SearchLogModel]):
    """CRUD operations for SearchLogModel. Rows are insert-only."""

    def __init__(self) -> None:
        super().__init__(SearchLogModel)

    async def log_search(
        self,
        session: AsyncSession,
        course_id: int,
        query: str,
        latency_ms: int,
        results_count: int,
        actor_id: int | None = None,
    ) -> SearchLogModel:
        """
        Record a completed search.

        Args:
            session: Async database session
            course_id: Course the search was scoped to
            query: Query text as received
            latency_ms: Time taken to compose the answer
            results_count: Citations returned
            actor_id: Caller identity if known

        Returns:
            Created SearchLogModel
        """
        return await self.create(
            session,
            course_id=course_id,
            query=query,
            latency_ms=latency_ms,
            results_count=results_count,
            actor_id=actor_id,
        )

    async def get_by_course_id(
        self,
        session: AsyncSession,
        course_id: int,
        limit: int | None = None,
    ) -> Sequence[SearchLogModel]:
        stmt = (
            select(SearchLogModel)
            .where(SearchLogModel.course_id == course_id)
            .order_by(SearchLogModel.created_at.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()


search_log_crud = SearchLogCRUD()
