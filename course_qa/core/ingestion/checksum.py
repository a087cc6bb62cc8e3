"""
sha256 helpers for uploaded bytes.

Dependencies: hashlib
System role: Content checksums for idempotent ingestion
"""

import hashlib

_READ_BLOCK = 1024 * 1024


def bytes_checksum(data: bytes) -> str:
    """sha256 hex digest of an in-memory upload."""
    return hashlib.sha256(data).hexdigest()


def file_checksum(path: str) -> str:
    """sha256 hex digest of a file, read in blocks."""
    digest = hashlib.sha256()
    with open(path, "rb") as handle:
        for block in iter(lambda: handle.read(_READ_BLOCK), b""):
            digest.update(block)
    return digest.hexdigest()
