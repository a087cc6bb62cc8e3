"""
Health check API endpoints.

Routes: GET /health, GET /health/db, GET /health/ingestion

Dependencies: course_qa.boundary.db, course_qa.api.deps
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from course_qa.api.deps.dependencies import ServiceCache, get_service_cache
from course_qa.boundary.db.connection import get_async_db

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/db", response_model=HealthResponse)
async def health_check_db(db: AsyncSession = Depends(get_async_db)) -> HealthResponse:
    """Round-trip ``SELECT 1`` through a request session."""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return HealthResponse(status="unhealthy", message="Database unreachable")
    return HealthResponse(status="healthy", message="Database connection OK")


@router.get("/ingestion", response_model=HealthResponse)
async def health_check_ingestion(
    cache: ServiceCache = Depends(get_service_cache),
) -> HealthResponse:
    """Report whether ingestion workers are running and how many jobs wait."""
    queue = cache.queue
    if not queue.running:
        return HealthResponse(status="unhealthy", message="Ingestion workers not running")
    return HealthResponse(status="healthy", message=f"{queue.pending} ingestion jobs pending")
