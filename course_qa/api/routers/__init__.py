"""
API routers.

Dependencies: fastapi
System role: Route registration for the HTTP API
"""

from course_qa.api.routers.courses import router as courses_router
from course_qa.api.routers.documents import router as documents_router
from course_qa.api.routers.health import router as health_router
from course_qa.api.routers.search import router as search_router
from course_qa.api.routers.upload import router as upload_router

__all__ = [
    "courses_router",
    "documents_router",
    "health_router",
    "search_router",
    "upload_router",
]
