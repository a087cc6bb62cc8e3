"""
FastAPI application with assembled routers.

Initializes the app, its middleware and error handlers, and runs the
ingestion workers for the lifetime of the process.

Dependencies: fastapi, course_qa.api, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from course_qa.api.deps.dependencies import get_service_cache
from course_qa.api.error_handling import register_error_handlers
from course_qa.api.routers import (
    courses_router,
    documents_router,
    health_router,
    search_router,
    upload_router,
)
from course_qa.boundary.db.connection import get_async_session_factory
from course_qa.boundary.db.create_tables import create_all_tables
from course_qa.configs import get_settings
from course_qa.observability.logger import configure_logging
from course_qa.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup: ensure tables (when enabled), start ingestion workers and
    requeue documents left unfinished by a previous run.
    Shutdown: stop workers and clear the service cache.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("uvicorn")

    if settings.database.auto_create_tables:
        await create_all_tables()

    cache = get_service_cache()
    queue = cache.queue
    await queue.start()
    await queue.requeue_unfinished(get_async_session_factory())
    logger.info("Ingestion queue started (environment=%s)", settings.environment)

    yield

    await queue.stop()
    cache.clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Course Q&A API",
        description="Course materials ingestion and grounded question answering",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Correlation-ID"],
    )

    # Correlation is outermost so every response carries the header
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    register_error_handlers(app)

    app.include_router(health_router, prefix="/api")
    app.include_router(upload_router, prefix="/api")
    app.include_router(documents_router, prefix="/api")
    app.include_router(courses_router, prefix="/api")
    app.include_router(search_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "course_qa.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug and settings.is_development,
    )
