"""
Audit event ORM model.

Append-only log of domain actions with a JSON payload.

Dependencies: sqlalchemy, course_qa.boundary.db.base
System role: Audit trail persistence
"""

import enum
from typing import Any

from sqlalchemy import JSON, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from course_qa.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class EventKind(str, enum.Enum):
    """Audited domain actions."""

    DOCUMENT_UPLOADED = "document.uploaded"
    DOCUMENT_DELETED = "document.deleted"
    SEARCH_PERFORMED = "search.performed"


class EventModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Audit event ORM model.

    Attributes:
        kind: Action that happened
        actor_id: Caller identity if provided
        target_id: Document id or course id the action applied to
        payload: Action-specific JSON data
    """

    __tablename__ = "events"

    kind: Mapped[EventKind] = mapped_column(
        Enum(EventKind, native_enum=False, length=40, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        index=True,
    )
    actor_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    target_id: Mapped[str] = mapped_column(String(64), nullable=False)
    payload: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
