"""
Test suite for LocalFileStorage and storage key building.

System role: Verification of raw document storage
"""

import os
from datetime import datetime, timezone

import pytest

from course_qa.boundary.storage.base import build_storage_key
from course_qa.boundary.storage.local_storage import LocalFileStorage
from course_qa.core.exceptions import StorageError


class TestBuildStorageKey:
    def test_key_should_include_course_and_timestamp(self) -> None:
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)

        key = build_storage_key(12, "Lecture 1.pdf", now=now, token="ab12cd34")

        assert key == f"courses/12/{int(now.timestamp() * 1000)}-ab12cd34-Lecture_1.pdf"

    def test_key_should_strip_path_components(self) -> None:
        key = build_storage_key(1, "../../etc/passwd")

        assert key.startswith("courses/1/")
        assert ".." not in key
        assert key.endswith("-passwd")

    def test_same_name_in_same_millisecond_should_get_distinct_keys(self) -> None:
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)

        first = build_storage_key(3, "week1.pdf", now=now)
        second = build_storage_key(3, "week1.pdf", now=now)

        assert first != second

    def test_long_name_should_be_shortened_keeping_extension(self) -> None:
        key = build_storage_key(3, "n" * 400 + ".pdf", token="t")

        name = key.rsplit("/", 1)[1]
        assert len(name) < 230
        assert name.endswith(".pdf")


class TestLocalFileStorage:
    """Test suite for LocalFileStorage."""

    def test_save_and_download_should_round_trip(self, tmp_path) -> None:
        # Arrange
        storage = LocalFileStorage(root=str(tmp_path))
        storage.save("courses/1/a.txt", b"hello", "text/plain")

        # Act
        local_path = storage.download_to_temp("courses/1/a.txt")

        # Assert
        with open(local_path, "rb") as handle:
            assert handle.read() == b"hello"
        assert storage.exists("courses/1/a.txt")
        assert os.path.dirname(local_path) != str(tmp_path)

    def test_download_missing_key_should_raise(self, tmp_path) -> None:
        storage = LocalFileStorage(root=str(tmp_path))

        with pytest.raises(StorageError):
            storage.download_to_temp("courses/1/missing.txt")

    def test_delete_should_be_idempotent(self, tmp_path) -> None:
        storage = LocalFileStorage(root=str(tmp_path))
        storage.save("courses/1/a.txt", b"hello", "text/plain")

        storage.delete("courses/1/a.txt")
        storage.delete("courses/1/a.txt")

        assert not storage.exists("courses/1/a.txt")

    def test_key_escaping_root_should_raise(self, tmp_path) -> None:
        storage = LocalFileStorage(root=str(tmp_path / "root"))

        with pytest.raises(StorageError):
            storage.save("../outside.txt", b"x", "text/plain")
