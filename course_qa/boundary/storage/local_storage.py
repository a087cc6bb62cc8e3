"""
Local filesystem document storage.

Stores uploads under a root directory using the storage key as a relative
path. Used for development and tests.

Dependencies: pathlib, shutil, tempfile
System role: Development storage backend
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path

from course_qa.core.exceptions import StorageError

logger = logging.getLogger(__name__)


class LocalFileStorage:
    """Filesystem-backed DocumentStorage."""

    def __init__(self, root: str) -> None:
        """
        Initialize local storage.

        Args:
            root: Directory that holds all stored objects (created if missing)
        """
        self._root = Path(root).resolve()
        self._root.mkdir(parents=True, exist_ok=True)

    def _path_for(self, key: str) -> Path:
        path = (self._root / key).resolve()
        if self._root not in path.parents:
            raise StorageError("Storage key escapes storage root", key)
        return path

    def save(self, key: str, data: bytes, content_type: str) -> None:
        path = self._path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(path.suffix + ".part")
        try:
            tmp_path.write_bytes(data)
            os.replace(tmp_path, path)
        except OSError as e:
            raise StorageError(f"Failed to write file: {e}", key) from e
        logger.debug("Stored document", extra={"storage_key": key, "size_bytes": len(data)})

    def download_to_temp(self, key: str) -> str:
        """
        Copy a stored file into a new temp directory.

        Args:
            key: Storage key

        Returns:
            str: Path of the copy; the caller removes its parent directory

        Raises:
            StorageError: When the object does not exist or cannot be copied
        """
        path = self._path_for(key)
        if not path.is_file():
            raise StorageError(f"File not found in storage: {key}", key)

        temp_dir = tempfile.mkdtemp(prefix="doc_pipeline_")
        local_path = os.path.join(temp_dir, path.name)
        try:
            shutil.copyfile(path, local_path)
        except OSError as e:
            shutil.rmtree(temp_dir, ignore_errors=True)
            raise StorageError(f"Failed to copy file: {e}", key) from e
        return local_path

    def delete(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to delete file: {e}", key) from e

    def exists(self, key: str) -> bool:
        return self._path_for(key).is_file()
