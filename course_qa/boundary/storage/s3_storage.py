"""
S3 document storage.

Uploads, downloads and deletes raw course documents in an S3 bucket.
Downloads land in a temp directory so the parsers can open a real file.

Dependencies: boto3
System role: Production storage backend
"""

import os
import shutil
import tempfile
from pathlib import Path

import boto3
from botocore.exceptions import ClientError

from course_qa.core.exceptions import StorageError


class S3DocumentStorage:
    """S3-backed DocumentStorage."""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        prefix: str = "",
        client=None,
    ) -> None:
        """
        Initialize S3 storage for the document bucket.

        Args:
            bucket: S3 bucket name for document storage
            region: AWS region for S3 bucket
            prefix: Key prefix prepended to every storage key
            client: Pre-built boto3 S3 client (created if None)
        """
        self._bucket = bucket
        self._region = region
        self._prefix = prefix.strip("/")
        self._s3_client = client or boto3.client("s3", region_name=region)

    def _object_key(self, key: str) -> str:
        return f"{self._prefix}/{key}" if self._prefix else key

    def save(self, key: str, data: bytes, content_type: str) -> None:
        try:
            self._s3_client.put_object(
                Bucket=self._bucket,
                Key=self._object_key(key),
                Body=data,
                ContentType=content_type,
            )
        except ClientError as e:
            raise StorageError(f"Failed to upload to S3: {e}", key) from e

    def download_to_temp(self, key: str) -> str:
        """
        Download document from S3 to temp directory.

        Args:
            key: Storage key

        Returns:
            str: Local file path to downloaded document

        Raises:
            StorageError: When download fails
        """
        filename = Path(key).name
        if not filename:
            raise StorageError(f"Invalid storage key: {key}", key)

        temp_dir = tempfile.mkdtemp(prefix="doc_pipeline_")
        local_path = os.path.join(temp_dir, filename)

        try:
            self._s3_client.download_file(
                Bucket=self._bucket,
                Key=self._object_key(key),
                Filename=local_path,
            )
            return local_path
        except ClientError as e:
            shutil.rmtree(temp_dir, ignore_errors=True)
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code in ("404", "NoSuchKey"):
                raise StorageError(f"File not found in S3: {key}", key) from e
            raise StorageError(f"Failed to download from S3: {e}", key) from e

    def delete(self, key: str) -> None:
        try:
            self._s3_client.delete_object(Bucket=self._bucket, Key=self._object_key(key))
        except ClientError as e:
            raise StorageError(f"Failed to delete from S3: {e}", key) from e

    def exists(self, key: str) -> bool:
        """
        Check if a file exists in S3.

        Args:
            key: Storage key to check

        Returns:
            bool: True if file exists, False otherwise
        """
        try:
            self._s3_client.head_object(Bucket=self._bucket, Key=self._object_key(key))
            return True
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("404", "NoSuchKey"):
                return False
            raise StorageError(f"Failed to check S3 object: {e}", key) from e
