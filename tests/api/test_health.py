"""Tests for health endpoints and correlation headers."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

from course_qa.api.deps.dependencies import get_service_cache
from course_qa.boundary.db.connection import get_async_db


def test_health_check(client) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}


def test_health_should_generate_correlation_id(client) -> None:
    response = client.get("/api/health")

    assert response.headers["X-Correlation-ID"]


def test_health_should_echo_correlation_id(client) -> None:
    response = client.get("/api/health", headers={"X-Correlation-ID": "trace-1"})

    assert response.headers["X-Correlation-ID"] == "trace-1"


def test_health_db_check(client) -> None:
    session = AsyncMock()

    async def _db():
        yield session

    client.app.dependency_overrides[get_async_db] = _db

    response = client.get("/api/health/db")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    session.execute.assert_awaited_once()


def test_health_ingestion_should_report_pending_jobs(client) -> None:
    cache = SimpleNamespace(queue=SimpleNamespace(running=True, pending=2))
    client.app.dependency_overrides[get_service_cache] = lambda: cache

    response = client.get("/api/health/ingestion")

    assert response.json() == {"status": "healthy", "message": "2 ingestion jobs pending"}


def test_health_ingestion_should_flag_stopped_workers(client) -> None:
    cache = SimpleNamespace(queue=SimpleNamespace(running=False, pending=0))
    client.app.dependency_overrides[get_service_cache] = lambda: cache

    response = client.get("/api/health/ingestion")

    assert response.json()["status"] == "unhealthy"
