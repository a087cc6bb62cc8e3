"""
Test suite for EmbeddingTask.

System role: Verification of embedding batching and error mapping
"""

from unittest.mock import MagicMock

import pytest

from course_qa.core.exceptions import EmbeddingError
from course_qa.core.ingestion.embedding_task import EmbeddingTask


@pytest.fixture
def provider() -> MagicMock:
    provider = MagicMock()
    provider.embed_documents.side_effect = lambda texts: [[1.0, 0.0, 0.0] for _ in texts]
    provider.embed_query.return_value = [0.0, 1.0, 0.0]
    return provider


class TestEmbeddingTask:
    """Test suite for EmbeddingTask."""

    def test_embed_should_batch_provider_calls(self, provider: MagicMock) -> None:
        # Arrange
        task = EmbeddingTask(embeddings=provider, dimension=3, batch_size=2)

        # Act
        vectors = task.embed(["a", "b", "c", "d", "e"])

        # Assert
        assert len(vectors) == 5
        assert provider.embed_documents.call_count == 3
        provider.embed_documents.assert_any_call(["e"])

    def test_provider_failure_should_raise_embedding_error(self, provider: MagicMock) -> None:
        provider.embed_documents.side_effect = RuntimeError("quota exceeded")
        task = EmbeddingTask(embeddings=provider, dimension=3)

        with pytest.raises(EmbeddingError, match="quota exceeded"):
            task.embed(["a"])

    def test_count_mismatch_should_raise(self, provider: MagicMock) -> None:
        provider.embed_documents.side_effect = lambda texts: [[1.0, 0.0, 0.0]]
        task = EmbeddingTask(embeddings=provider, dimension=3)

        with pytest.raises(EmbeddingError, match="returned 1 vectors for 2 texts"):
            task.embed(["a", "b"])

    def test_wrong_dimension_should_raise(self, provider: MagicMock) -> None:
        task = EmbeddingTask(embeddings=provider, dimension=5)

        with pytest.raises(EmbeddingError, match="dimension"):
            task.embed(["a"])

    def test_embed_query_should_return_vector(self, provider: MagicMock) -> None:
        task = EmbeddingTask(embeddings=provider, dimension=3)

        assert task.embed_query("question") == [0.0, 1.0, 0.0]

    def test_embed_query_failure_should_raise(self, provider: MagicMock) -> None:
        provider.embed_query.side_effect = ConnectionError("unreachable")
        task = EmbeddingTask(embeddings=provider, dimension=3)

        with pytest.raises(EmbeddingError):
            task.embed_query("question")
