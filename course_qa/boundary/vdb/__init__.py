"""
Vector index boundary.

Exports: VectorIndex, VectorHit, VectorRecord, FAISSVectorIndex, get_vector_index
"""

from course_qa.boundary.vdb.faiss_index import FAISSVectorIndex
from course_qa.boundary.vdb.vector_index_factory import get_vector_index
from course_qa.boundary.vdb.vector_schemas import VectorHit, VectorIndex, VectorRecord

__all__ = [
    "FAISSVectorIndex",
    "VectorHit",
    "VectorIndex",
    "VectorRecord",
    "get_vector_index",
]
