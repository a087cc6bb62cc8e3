"""
Search log ORM model.

Immutable record of a completed search. Written once the answer has been
composed; cancelled or timed-out searches leave no row.

Dependencies: sqlalchemy, course_qa.boundary.db.base
System role: Search analytics persistence
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from course_qa.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class SearchLogModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Search log ORM model.

    Attributes:
        actor_id: Caller identity if provided (external reference)
        course_id: Course the search was scoped to
        query: Raw query text
        latency_ms: Wall time spent producing the answer
        results_count: Number of citations returned (0 for "not found")
    """

    __tablename__ = "search_logs"

    actor_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    course_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    query: Mapped[str] = mapped_column(Text, nullable=False)
    latency_ms: Mapped[int] = mapped_column(Integer, nullable=False)
    results_count: Mapped[int] = mapped_column(Integer, nullable=False)
