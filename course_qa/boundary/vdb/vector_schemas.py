"""
Vector database schemas.

Pydantic models and the interface for course-scoped vector operations.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Protocol, Sequence, runtime_checkable

from pydantic import BaseModel, Field


class VectorHit(BaseModel):
    """Single result from a vector search."""

    chunk_id: str = Field(description="Chunk identifier the vector was stored under")
    score: float = Field(description="Cosine similarity in [-1, 1]")


class VectorRecord(BaseModel):
    """A chunk vector waiting to be written."""

    chunk_id: str = Field(description="Chunk identifier")
    vector: list[float] = Field(description="Embedding vector")


@runtime_checkable
class VectorIndex(Protocol):
    """
    Course-scoped nearest-neighbour index.

    Every read and write names a course; implementations must never return
    a chunk stored under a different course.
    """

    dimension: int

    def upsert(self, chunk_id: str, vector: Sequence[float], course_id: int) -> str:
        """Insert or replace one vector; returns its embedding id."""
        ...

    def upsert_many(self, records: Sequence[VectorRecord], course_id: int) -> list[str]:
        """Insert or replace many vectors; returns embedding ids in input order."""
        ...

    def query(self, vector: Sequence[float], k: int, course_id: int) -> list[VectorHit]:
        """Return up to k hits ordered by score desc, then chunk_id asc."""
        ...

    def delete(self, chunk_ids: Sequence[str], course_id: int) -> int:
        """Remove vectors by chunk id; returns how many were present."""
        ...

    def count(self, course_id: int) -> int:
        ...
