"""
Course-scoped retriever.

Embeds a query, searches the course's vector index and drops hits below
the confidence floor. Blocking provider and FAISS calls run in threads.

Dependencies: course_qa.core.ingestion, course_qa.boundary.vdb
System role: Query embedding and similarity search
"""

import asyncio
import logging

from course_qa.boundary.vdb.vector_schemas import VectorHit, VectorIndex
from course_qa.core.exceptions import EmbeddingError, RetrievalError, VectorStoreError
from course_qa.core.ingestion.embedding_task import EmbeddingTask

logger = logging.getLogger(__name__)


class Retriever:
    """Embed-and-search against one course at a time."""

    def __init__(self, embedding_task: EmbeddingTask, vector_index: VectorIndex) -> None:
        """
        Initialize retriever.

        Args:
            embedding_task: Produces query vectors
            vector_index: Course-scoped vector index
        """
        self._embedding_task = embedding_task
        self._vector_index = vector_index

    async def retrieve(
        self,
        course_id: int,
        query: str,
        top_k: int,
        min_score: float,
    ) -> list[VectorHit]:
        """
        Retrieve chunks of a course that are similar enough to the query.

        Args:
            course_id: Course to search
            query: Query text
            top_k: Candidates requested from the index
            min_score: Cosine similarity floor (inclusive)

        Returns:
            list[VectorHit]: Hits at or above min_score, best first

        Raises:
            RetrievalError: When embedding or the index lookup fails
        """
        try:
            vector = await asyncio.to_thread(self._embedding_task.embed_query, query)
            hits = await asyncio.to_thread(self._vector_index.query, vector, top_k, course_id)
        except (EmbeddingError, VectorStoreError) as e:
            raise RetrievalError(f"Retrieval failed: {e.message}", course_id=course_id) from e

        accepted = [h for h in hits if h.score >= min_score]
        logger.debug(
            "Retrieved candidates",
            extra={
                "course_id": course_id,
                "candidates": len(hits),
                "accepted": len(accepted),
                "top_score": hits[0].score if hits else None,
            },
        )
        return accepted
