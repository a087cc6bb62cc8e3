"""
Test suite for POST /api/upload.

System role: Verification of upload validation order and response shape
"""

import pytest

from course_qa.api.deps.dependencies import get_settings_dependency
from course_qa.boundary.db.models.document_model import DocumentStatus
from course_qa.configs import Settings
from course_qa.configs.ingestion import IngestionSettings
from course_qa.core.ingestion.file_types import DOCX, PDF


@pytest.fixture
def small_upload_limit(client):
    settings = Settings(ingestion=IngestionSettings(max_upload_bytes=16))
    client.app.dependency_overrides[get_settings_dependency] = lambda: settings
    return settings


class TestUploadEndpoint:
    """Test suite for the upload route."""

    def test_upload_should_return_queued_document(
        self, client, mock_document_service, sample_document
    ) -> None:
        # Arrange
        sample_document.status = DocumentStatus.QUEUED
        mock_document_service.upload_document.return_value = sample_document

        # Act
        response = client.post(
            "/api/upload",
            files={"file": ("lecture.pdf", b"%PDF-1.4 test", PDF)},
            data={"courseId": "3"},
            headers={"X-Actor-Id": "17"},
        )

        # Assert
        assert response.status_code == 200
        assert response.json() == {
            "documentId": str(sample_document.id),
            "status": "queued",
            "title": "lecture.pdf",
        }
        mock_document_service.upload_document.assert_awaited_once_with(
            course_id=3,
            filename="lecture.pdf",
            content_type=PDF,
            data=b"%PDF-1.4 test",
            actor_id=17,
        )

    def test_missing_file_should_return_400(self, client, mock_document_service) -> None:
        response = client.post("/api/upload", data={"courseId": "3"})

        assert response.status_code == 400
        assert response.json() == {
            "error": {"code": "MISSING_PARAMETERS", "message": "No file provided"}
        }
        mock_document_service.upload_document.assert_not_awaited()

    def test_missing_course_id_should_return_400(self, client, mock_document_service) -> None:
        response = client.post("/api/upload", files={"file": ("a.pdf", b"x", PDF)})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MISSING_PARAMETERS"

    def test_non_numeric_course_id_should_return_400(self, client, mock_document_service) -> None:
        response = client.post(
            "/api/upload", files={"file": ("a.pdf", b"x", PDF)}, data={"courseId": "abc"}
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MISSING_PARAMETERS"

    def test_oversized_file_should_return_file_too_large(
        self, client, mock_document_service, small_upload_limit
    ) -> None:
        response = client.post(
            "/api/upload", files={"file": ("a.pdf", b"x" * 17, PDF)}, data={"courseId": "1"}
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "FILE_TOO_LARGE"
        mock_document_service.upload_document.assert_not_awaited()

    def test_size_should_be_checked_before_type(
        self, client, mock_document_service, small_upload_limit
    ) -> None:
        response = client.post(
            "/api/upload", files={"file": ("a.png", b"x" * 17, "image/png")}, data={"courseId": "1"}
        )

        assert response.json()["error"]["code"] == "FILE_TOO_LARGE"

    def test_disallowed_type_should_return_invalid_file_type(
        self, client, mock_document_service
    ) -> None:
        response = client.post(
            "/api/upload", files={"file": ("a.png", b"\x89PNG", "image/png")}, data={"courseId": "1"}
        )

        assert response.status_code == 400
        assert response.json() == {
            "error": {
                "code": "INVALID_FILE_TYPE",
                "message": "Only PDF, TXT, DOCX, and PPTX files are supported",
            }
        }

    def test_octet_stream_should_be_typed_by_extension(
        self, client, mock_document_service, sample_document
    ) -> None:
        mock_document_service.upload_document.return_value = sample_document

        response = client.post(
            "/api/upload",
            files={"file": ("essay.docx", b"PK\x03\x04", "application/octet-stream")},
            data={"courseId": "1"},
        )

        assert response.status_code == 200
        assert mock_document_service.upload_document.await_args.kwargs["content_type"] == DOCX

    def test_invalid_actor_header_should_return_400(self, client, mock_document_service) -> None:
        response = client.post(
            "/api/upload",
            files={"file": ("a.pdf", b"x", PDF)},
            data={"courseId": "1"},
            headers={"X-Actor-Id": "someone"},
        )

        assert response.status_code == 400
