"""
Test suite for document and course listing endpoints.

System role: Verification of document HTTP API and error envelope
"""

import uuid

from course_qa.core.exceptions import DocumentNotFoundError


class TestGetDocument:
    """Test suite for GET /api/documents/{id}."""

    def test_get_document_should_return_camel_case_record(
        self, client, mock_document_service, sample_document
    ) -> None:
        # Arrange
        mock_document_service.get_document.return_value = sample_document

        # Act
        response = client.get(f"/api/documents/{sample_document.id}")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == str(sample_document.id)
        assert data["courseId"] == 3
        assert data["status"] == "indexed"
        assert data["pageCount"] == 10
        assert data["chunkCount"] == 24
        assert data["storageKey"] == sample_document.storage_key
        mock_document_service.get_document.assert_awaited_once_with(sample_document.id)

    def test_invalid_id_should_return_400(self, client, mock_document_service) -> None:
        response = client.get("/api/documents/not-a-uuid")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_ID"
        mock_document_service.get_document.assert_not_awaited()

    def test_missing_document_should_return_404(self, client, mock_document_service) -> None:
        document_id = uuid.uuid4()
        mock_document_service.get_document.side_effect = DocumentNotFoundError(str(document_id))

        response = client.get(f"/api/documents/{document_id}")

        assert response.status_code == 404
        assert response.json() == {"error": {"code": "NOT_FOUND", "message": "Document not found"}}


class TestDeleteDocument:
    """Test suite for DELETE /api/documents/{id}."""

    def test_delete_should_return_success(self, client, mock_document_service) -> None:
        document_id = uuid.uuid4()
        mock_document_service.delete_document.return_value = None

        response = client.delete(f"/api/documents/{document_id}", headers={"X-Actor-Id": "5"})

        assert response.status_code == 200
        assert response.json() == {"success": True}
        mock_document_service.delete_document.assert_awaited_once_with(document_id, actor_id=5)

    def test_delete_missing_should_return_404(self, client, mock_document_service) -> None:
        document_id = uuid.uuid4()
        mock_document_service.delete_document.side_effect = DocumentNotFoundError(str(document_id))

        response = client.delete(f"/api/documents/{document_id}")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_delete_invalid_id_should_return_400(self, client, mock_document_service) -> None:
        response = client.delete("/api/documents/123")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_ID"


class TestCourseDocuments:
    def test_list_should_return_documents_and_total(
        self, client, mock_document_service, sample_document
    ) -> None:
        mock_document_service.get_course_documents.return_value = ([sample_document], 7)

        response = client.get("/api/courses/3/documents?limit=1")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 7
        assert data["documents"][0]["title"] == "lecture.pdf"
        mock_document_service.get_course_documents.assert_awaited_once_with(3, limit=1, offset=0)

    def test_unknown_route_should_use_error_envelope(self, client) -> None:
        response = client.get("/api/nothing-here")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"
