"""
Search API endpoint.

Routes: POST /search

Dependencies: course_qa.application.services.search_service, course_qa.models
System role: Course Q&A HTTP API
"""

from fastapi import APIRouter, Depends

from course_qa.api.deps import get_actor_id, get_search_service, get_settings_dependency
from course_qa.api.routers.validators import validate_search_request
from course_qa.application.services.search_service import SearchService
from course_qa.configs import Settings
from course_qa.models.search import SearchRequest, SearchResponse

router = APIRouter(tags=["search"])


@router.post("/search", response_model=SearchResponse)
async def search(
    request: SearchRequest,
    search_service: SearchService = Depends(get_search_service),
    settings: Settings = Depends(get_settings_dependency),
    actor_id: int | None = Depends(get_actor_id),
) -> SearchResponse:
    """
    Answer a question from a course's materials.

    Returns:
        SearchResponse: Grounded answer, citations and latency

    Raises:
        ValidationError: MISSING_PARAMETERS or EMPTY_QUERY (400)
        SearchTimeoutError: Search exceeded its timeout (504)
    """
    course_id, query, top_k, min_score = validate_search_request(
        request, settings.retrieval.max_top_k
    )
    return await search_service.answer(
        course_id=course_id,
        query=query,
        top_k=top_k,
        min_score=min_score,
        actor_id=actor_id,
    )
