"""
Audit event CRUD operations.

Dependencies: sqlalchemy, course_qa.boundary.db.models
System role: Audit trail persistence
"""

from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from course_qa.boundary.db.CRUD.base_crud import BaseCRUD
from course_qa.boundary.db.models.event_model import EventKind, EventModel


class EventCRUD(BaseCRUD[EventModel]):
    """CRUD operations for EventModel. Rows are append-only."""

    def __init__(self) -> None:
        super().__init__(EventModel)

    async def record(
        self,
        session: AsyncSession,
        kind: EventKind,
        target_id: str,
        payload: dict[str, Any] | None = None,
        actor_id: int | None = None,
    ) -> EventModel:
        """
        Append an audit event.

        Args:
            session: Async database session
            kind: Action that happened
            target_id: Document id or course id the action applied to
            payload: JSON-serialisable details
            actor_id: Caller identity if known

        Returns:
            Created EventModel
        """
        return await self.create(
            session,
            kind=kind,
            target_id=target_id,
            payload=payload or {},
            actor_id=actor_id,
        )

    async def get_by_target(
        self,
        session: AsyncSession,
        target_id: str,
        kind: EventKind | None = None,
    ) -> Sequence[EventModel]:
        stmt = select(EventModel).where(EventModel.target_id == target_id)
        if kind is not None:
            stmt = stmt.where(EventModel.kind == kind)
        stmt = stmt.order_by(EventModel.created_at)
        result = await session.execute(stmt)
        return result.scalars().all()


event_crud = EventCRUD()
