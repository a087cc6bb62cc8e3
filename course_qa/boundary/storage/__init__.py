"""
Raw document storage backends.

Exports: DocumentStorage protocol, LocalFileStorage, S3DocumentStorage, get_document_storage
"""

from course_qa.boundary.storage.base import DocumentStorage, build_storage_key
from course_qa.boundary.storage.local_storage import LocalFileStorage
from course_qa.boundary.storage.s3_storage import S3DocumentStorage
from course_qa.boundary.storage.storage_factory import get_document_storage

__all__ = [
    "DocumentStorage",
    "LocalFileStorage",
    "S3DocumentStorage",
    "build_storage_key",
    "get_document_storage",
]
