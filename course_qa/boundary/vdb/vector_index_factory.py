"""
Vector index factory.

Dependencies: course_qa.configs
System role: Vector index construction from settings
"""

import logging

from course_qa.boundary.vdb.faiss_index import FAISSVectorIndex
from course_qa.boundary.vdb.vector_schemas import VectorIndex
from course_qa.configs.vector_store import VectorStoreSettings

logger = logging.getLogger(__name__)


def get_vector_index(settings: VectorStoreSettings) -> VectorIndex:
    """
    Build the course-partitioned vector index.

    Args:
        settings: Vector store settings (index directory and embedding dimension)

    Returns:
        VectorIndex: FAISS-backed index
    """
    logger.info(
        "Initializing FAISS vector index",
        extra={"index_dir": settings.index_dir, "dimension": settings.embedding_dimension},
    )
    return FAISSVectorIndex(settings.index_dir, settings.embedding_dimension)
