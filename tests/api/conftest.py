"""
API test fixtures.

The application is created without running its lifespan, and services are
replaced through dependency overrides.
"""

import uuid
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from course_qa.api.deps.dependencies import get_document_service, get_search_service
from course_qa.boundary.db.models.document_model import DocumentStatus
from course_qa.main import create_app


@pytest.fixture
def client():
    app = create_app()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def mock_document_service(client):
    service = AsyncMock()
    client.app.dependency_overrides[get_document_service] = lambda: service
    return service


@pytest.fixture
def mock_search_service(client):
    service = AsyncMock()
    client.app.dependency_overrides[get_search_service] = lambda: service
    return service


@pytest.fixture
def sample_document():
    """Attribute bag shaped like a DocumentModel row."""
    now = datetime.now(timezone.utc)
    return SimpleNamespace(
        id=uuid.uuid4(),
        course_id=3,
        title="lecture.pdf",
        storage_key="courses/3/1700000000000-lecture.pdf",
        checksum="f" * 64,
        content_type="application/pdf",
        size_bytes=2048,
        status=DocumentStatus.INDEXED,
        page_count=10,
        chunk_count=24,
        error_message=None,
        created_at=now,
        updated_at=now,
    )
