"""
Tests for the dependency injection container.
"""

import pytest

from course_qa.api.deps.dependencies import ServiceCache, get_actor_id
from course_qa.boundary.storage.local_storage import LocalFileStorage
from course_qa.boundary.vdb.faiss_index import FAISSVectorIndex
from course_qa.configs import Settings
from course_qa.configs.ingestion import IngestionSettings
from course_qa.configs.retrieval import RetrievalSettings
from course_qa.configs.storage import StorageSettings
from course_qa.configs.vector_store import VectorStoreSettings
from course_qa.core.exceptions import ValidationError
from course_qa.workers.ingestion_queue import IngestionQueue


@pytest.fixture
def cache(tmp_path, embeddings) -> ServiceCache:
    settings = Settings(
        storage=StorageSettings(backend="local", local_root=str(tmp_path / "uploads")),
        vector_store=VectorStoreSettings(index_dir=str(tmp_path / "faiss"), embedding_dimension=256),
        ingestion=IngestionSettings(workers=3),
        retrieval=RetrievalSettings(snippet_chars=80),
    )
    cache = ServiceCache(settings=settings)
    cache._embeddings = embeddings
    return cache


class TestServiceCache:
    def test_components_should_follow_settings(self, cache: ServiceCache) -> None:
        assert isinstance(cache.storage, LocalFileStorage)
        assert isinstance(cache.vector_index, FAISSVectorIndex)
        assert cache.vector_index.dimension == 256
        assert isinstance(cache.queue, IngestionQueue)
        assert cache.queue._worker_count == 3

    def test_components_should_be_cached(self, cache: ServiceCache) -> None:
        assert cache.pipeline is cache.pipeline
        assert cache.retriever is cache.retriever
        assert cache.queue._pipeline is cache.pipeline

    def test_clear_should_drop_instances(self, cache: ServiceCache) -> None:
        first = cache.vector_index

        cache.clear()

        assert cache.vector_index is not first


class TestGetActorId:
    def test_absent_header_should_be_none(self) -> None:
        assert get_actor_id(None) is None

    def test_numeric_header_should_parse(self) -> None:
        assert get_actor_id("12") == 12

    def test_non_numeric_header_should_raise(self) -> None:
        with pytest.raises(ValidationError):
            get_actor_id("alice")
