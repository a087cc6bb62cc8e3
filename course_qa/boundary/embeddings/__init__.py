"""
Embedding providers behind LangChain's Embeddings interface.

Exports: FixedDimensionEmbeddings, get_embeddings
"""

from course_qa.boundary.embeddings.embeddings_factory import get_embeddings
from course_qa.boundary.embeddings.embeddings_wrapper import FixedDimensionEmbeddings

__all__ = ["FixedDimensionEmbeddings", "get_embeddings"]
