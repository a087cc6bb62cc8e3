"""FastAPI dependency providers."""

from course_qa.api.deps.dependencies import (
    ServiceCache,
    get_actor_id,
    get_document_service,
    get_search_service,
    get_service_cache,
    get_settings_dependency,
)

__all__ = [
    "ServiceCache",
    "get_actor_id",
    "get_document_service",
    "get_search_service",
    "get_service_cache",
    "get_settings_dependency",
]
