"""
Document storage factory.

Selects the storage backend based on STORAGE_BACKEND.

Dependencies: course_qa.configs
System role: Storage backend selection
"""

import logging

from course_qa.configs.storage import StorageSettings
from course_qa.boundary.storage.base import DocumentStorage
from course_qa.boundary.storage.local_storage import LocalFileStorage
from course_qa.boundary.storage.s3_storage import S3DocumentStorage

logger = logging.getLogger(__name__)


def get_document_storage(settings: StorageSettings) -> DocumentStorage:
    """
    Build the configured storage backend.

    Args:
        settings: Storage settings

    Returns:
        DocumentStorage: LocalFileStorage or S3DocumentStorage

    Raises:
        ValueError: For an unknown backend name
    """
    backend = settings.backend.lower()
    logger.info("Initializing document storage", extra={"backend": backend})

    if backend == "local":
        return LocalFileStorage(settings.local_root)
    if backend == "s3":
        return S3DocumentStorage(
            bucket=settings.s3_bucket,
            region=settings.s3_region,
            prefix=settings.s3_prefix,
        )
    raise ValueError(f"Unknown storage backend: {settings.backend}")
