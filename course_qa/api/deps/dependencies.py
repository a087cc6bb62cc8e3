"""
Dependency injection container.

Process-wide collaborators (storage, embeddings, vector index, ingestion
queue, retrieval stages) are built lazily and cached; services are created
per request around a fresh database session.

Dependencies: course_qa.configs, course_qa.application, course_qa.boundary
System role: DI container for service injection
"""

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from course_qa.application.services.document_service import DocumentService
from course_qa.application.services.search_service import SearchService
from course_qa.boundary.db.connection import get_async_db, get_async_session_factory
from course_qa.configs import Settings, get_settings
from course_qa.core.exceptions import ValidationError


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._storage = None
        self._embeddings = None
        self._vector_index = None
        self._embedding_task = None
        self._pipeline = None
        self._queue = None
        self._retriever = None
        self._citation_builder = None
        self._composer = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def storage(self):
        """Get cached document storage."""
        if self._storage is None:
            from course_qa.boundary.storage.storage_factory import get_document_storage
            self._storage = get_document_storage(self.settings.storage)
        return self._storage

    @property
    def embeddings(self):
        """Get cached embedding provider."""
        if self._embeddings is None:
            from course_qa.boundary.embeddings.embeddings_factory import get_embeddings
            self._embeddings = get_embeddings(self.settings.vector_store)
        return self._embeddings

    @property
    def vector_index(self):
        """Get cached vector index."""
        if self._vector_index is None:
            from course_qa.boundary.vdb.vector_index_factory import get_vector_index
            self._vector_index = get_vector_index(self.settings.vector_store)
        return self._vector_index

    @property
    def embedding_task(self):
        if self._embedding_task is None:
            from course_qa.core.ingestion.embedding_task import EmbeddingTask
            config = self.settings.vector_store
            self._embedding_task = EmbeddingTask(
                embeddings=self.embeddings,
                dimension=config.embedding_dimension,
                batch_size=config.embed_batch_size,
            )
        return self._embedding_task

    @property
    def pipeline(self):
        """Get cached ingestion pipeline."""
        if self._pipeline is None:
            from course_qa.core.ingestion.chunking_task import ChunkingTask
            from course_qa.core.ingestion.parsing_task import ParsingTask
            from course_qa.core.ingestion.pipeline import IngestionPipeline
            config = self.settings.ingestion
            self._pipeline = IngestionPipeline(
                session_factory=get_async_session_factory(),
                storage=self.storage,
                vector_index=self.vector_index,
                parsing_task=ParsingTask(),
                chunking_task=ChunkingTask(
                    chunk_size=config.chunk_size,
                    chunk_overlap=config.chunk_overlap,
                ),
                embedding_task=self.embedding_task,
            )
        return self._pipeline

    @property
    def queue(self):
        """Get cached ingestion queue."""
        if self._queue is None:
            from course_qa.workers.ingestion_queue import IngestionQueue
            config = self.settings.ingestion
            self._queue = IngestionQueue(
                pipeline=self.pipeline,
                workers=config.workers,
                timeout_s=config.timeout_s,
            )
        return self._queue

    @property
    def retriever(self):
        if self._retriever is None:
            from course_qa.core.retrieval.retriever import Retriever
            self._retriever = Retriever(
                embedding_task=self.embedding_task,
                vector_index=self.vector_index,
            )
        return self._retriever

    @property
    def citation_builder(self):
        if self._citation_builder is None:
            from course_qa.core.retrieval.citation_builder import CitationBuilder
            self._citation_builder = CitationBuilder(
                snippet_chars=self.settings.retrieval.snippet_chars
            )
        return self._citation_builder

    @property
    def composer(self):
        if self._composer is None:
            from course_qa.core.retrieval.composer import AnswerComposer
            self._composer = AnswerComposer(
                max_sentences=self.settings.retrieval.answer_max_sentences
            )
        return self._composer

    def clear(self) -> None:
        """Clear all cached instances."""
        self._storage = None
        self._embeddings = None
        self._vector_index = None
        self._embedding_task = None
        self._pipeline = None
        self._queue = None
        self._retriever = None
        self._citation_builder = None
        self._composer = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_actor_id(x_actor_id: str | None = Header(default=None)) -> int | None:
    """
    Read the optional caller identity header.

    Raises:
        ValidationError: If the header is present but not an integer
    """
    if x_actor_id is None or not x_actor_id.strip():
        return None
    try:
        return int(x_actor_id)
    except ValueError:
        raise ValidationError("X-Actor-Id must be an integer", field="X-Actor-Id")


def get_document_service(
    db: AsyncSession = Depends(get_async_db),
    cache: ServiceCache = Depends(get_service_cache),
) -> DocumentService:
    """
    Get document service instance.

    Args:
        db: Async database session (injected via Depends)
        cache: Process-wide collaborators

    Returns:
        DocumentService: Document service wired to storage, index and queue
    """
    return DocumentService(
        db=db,
        storage=cache.storage,
        vector_index=cache.vector_index,
        queue=cache.queue,
    )


def get_search_service(
    db: AsyncSession = Depends(get_async_db),
    cache: ServiceCache = Depends(get_service_cache),
) -> SearchService:
    """
    Get search service instance.

    Args:
        db: Async database session (injected via Depends)
        cache: Process-wide collaborators

    Returns:
        SearchService: Search service for one request
    """
    return SearchService(
        db=db,
        retriever=cache.retriever,
        citation_builder=cache.citation_builder,
        composer=cache.composer,
        settings=cache.settings.retrieval,
    )
