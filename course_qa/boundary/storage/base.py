"""
Document storage interface.

Storage backends are synchronous (boto3, filesystem); async callers wrap
them with asyncio.to_thread.

Dependencies: typing, course_qa.core.ingestion.file_types
System role: Contract shared by storage backends
"""

import re
import secrets
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol, runtime_checkable

from course_qa.core.ingestion.file_types import shorten_filename

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")

KEY_NAME_MAX_CHARS = 200


def build_storage_key(
    course_id: int,
    filename: str,
    now: datetime | None = None,
    token: str | None = None,
) -> str:
    """
    Build the storage key for an uploaded file.

    Format: ``courses/{course_id}/{epoch_ms}-{token}-{filename}`` with the
    filename reduced to a safe character set and shortened. The random token
    keeps same-name uploads in the same millisecond from sharing a key.

    Args:
        course_id: Owning course
        filename: Original filename from the client
        now: Timestamp override for tests
        token: Random token override for tests

    Returns:
        str: Storage key
    """
    now = now or datetime.now(timezone.utc)
    stamp = int(now.timestamp() * 1000)
    token = token or secrets.token_hex(4)
    safe_name = _UNSAFE_CHARS.sub("_", Path(filename).name).strip("._") or "document"
    safe_name = shorten_filename(safe_name, KEY_NAME_MAX_CHARS)
    return f"courses/{course_id}/{stamp}-{token}-{safe_name}"


@runtime_checkable
class DocumentStorage(Protocol):
    """Blob storage addressed by storage key."""

    def save(self, key: str, data: bytes, content_type: str) -> None:
        """Store bytes under key, replacing any existing object."""
        ...

    def download_to_temp(self, key: str) -> str:
        """Copy the object to a fresh temp directory and return the local path."""
        ...

    def delete(self, key: str) -> None:
        """Remove the object; missing objects are ignored."""
        ...

    def exists(self, key: str) -> bool:
        ...
