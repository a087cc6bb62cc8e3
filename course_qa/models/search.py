"""
Search request/response schemas.

courseId and query are optional at the schema level so the router can
answer with MISSING_PARAMETERS or EMPTY_QUERY instead of a generic 422.

Dependencies: pydantic
System role: Search API contracts
"""

from pydantic import Field

from course_qa.models.citation import Citation
from course_qa.models.common import CamelModel


class SearchRequest(CamelModel):
    """Search request body."""

    course_id: int | None = Field(default=None, description="Course to search")
    query: str | None = Field(default=None, description="Natural-language question")
    top_k: int | None = Field(default=None, description="Chunks to retrieve (default 6)")
    min_score: float | None = Field(
        default=None,
        description="Minimum cosine similarity for a citation (default from settings)",
    )


class SearchResponse(CamelModel):
    """Grounded answer with its citations."""

    answer: str
    citations: list[Citation]
    latency_ms: int
