"""
Embedding generation task.

Calls the configured LangChain Embeddings provider in batches and checks
that every text came back with a vector of the expected dimension.

Dependencies: langchain_core
System role: Third stage of document ingestion pipeline
"""

import logging

from langchain_core.embeddings import Embeddings

from course_qa.core.exceptions import EmbeddingError

logger = logging.getLogger(__name__)


class EmbeddingTask:
    """Generate chunk embeddings through an Embeddings provider."""

    def __init__(
        self,
        embeddings: Embeddings,
        dimension: int,
        batch_size: int = 64,
    ) -> None:
        """
        Initialize embedding task.

        Args:
            embeddings: LangChain embeddings provider
            dimension: Vector dimension the index expects
            batch_size: Texts per provider call
        """
        self._embeddings = embeddings
        self._dimension = dimension
        self._batch_size = batch_size

    def embed(self, texts: list[str]) -> list[list[float]]:
        """
        Generate embeddings for chunk texts.

        Args:
            texts: Chunk texts in order

        Returns:
            list[list[float]]: One vector per text, same order

        Raises:
            EmbeddingError: When the provider fails or returns malformed output
        """
        vectors: list[list[float]] = []
        for start in range(0, len(texts), self._batch_size):
            batch = texts[start:start + self._batch_size]
            try:
                result = self._embeddings.embed_documents(batch)
            except Exception as e:
                raise EmbeddingError(f"Failed to generate embeddings: {e}") from e

            if len(result) != len(batch):
                raise EmbeddingError(
                    f"Embedding provider returned {len(result)} vectors for {len(batch)} texts"
                )
            for vector in result:
                if len(vector) != self._dimension:
                    raise EmbeddingError(
                        f"Embedding dimension {len(vector)} does not match index dimension {self._dimension}"
                    )
            vectors.extend(list(v) for v in result)

        logger.debug("Generated embeddings", extra={"count": len(vectors)})
        return vectors

    def embed_query(self, text: str) -> list[float]:
        """
        Embed a search query.

        Raises:
            EmbeddingError: When the provider fails or the dimension is wrong
        """
        try:
            vector = self._embeddings.embed_query(text)
        except Exception as e:
            raise EmbeddingError(f"Failed to embed query: {e}") from e
        if len(vector) != self._dimension:
            raise EmbeddingError(
                f"Embedding dimension {len(vector)} does not match index dimension {self._dimension}"
            )
        return list(vector)
