"""
Test suite for S3DocumentStorage with a mocked boto3 client.

System role: Verification of the S3 storage backend error mapping
"""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from course_qa.boundary.storage.s3_storage import S3DocumentStorage
from course_qa.core.exceptions import StorageError


def _client_error(code: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, "operation")


@pytest.fixture
def mock_s3_client() -> MagicMock:
    return MagicMock()


class TestS3DocumentStorage:
    def test_save_should_prefix_keys(self, mock_s3_client: MagicMock) -> None:
        storage = S3DocumentStorage(bucket="docs", prefix="/uploads/", client=mock_s3_client)

        storage.save("courses/1/a.pdf", b"data", "application/pdf")

        mock_s3_client.put_object.assert_called_once_with(
            Bucket="docs",
            Key="uploads/courses/1/a.pdf",
            Body=b"data",
            ContentType="application/pdf",
        )

    def test_missing_object_should_raise_not_found(self, mock_s3_client: MagicMock) -> None:
        mock_s3_client.download_file.side_effect = _client_error("404")
        storage = S3DocumentStorage(bucket="docs", client=mock_s3_client)

        with pytest.raises(StorageError, match="not found"):
            storage.download_to_temp("courses/1/a.pdf")

    def test_exists_should_map_404_to_false(self, mock_s3_client: MagicMock) -> None:
        mock_s3_client.head_object.side_effect = _client_error("NoSuchKey")
        storage = S3DocumentStorage(bucket="docs", client=mock_s3_client)

        assert storage.exists("courses/1/a.pdf") is False

    def test_exists_should_raise_on_access_denied(self, mock_s3_client: MagicMock) -> None:
        mock_s3_client.head_object.side_effect = _client_error("AccessDenied")
        storage = S3DocumentStorage(bucket="docs", client=mock_s3_client)

        with pytest.raises(StorageError):
            storage.exists("courses/1/a.pdf")

    def test_delete_failure_should_raise_storage_error(self, mock_s3_client: MagicMock) -> None:
        mock_s3_client.delete_object.side_effect = _client_error("InternalError")
        storage = S3DocumentStorage(bucket="docs", client=mock_s3_client)

        with pytest.raises(StorageError):
            storage.delete("courses/1/a.pdf")
