"""
Search service.

Answers a question against one course: retrieve, resolve, cite, compose.
The search log (and the search.performed event when something was found)
is written only after the answer is ready, so a cancelled or timed-out
search leaves no trace.

Dependencies: course_qa.core.retrieval, course_qa.boundary.db
System role: Question answering orchestration
"""

import asyncio
import logging
import time
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from course_qa.boundary.db.CRUD.chunk_crud import chunk_crud
from course_qa.boundary.db.CRUD.event_crud import event_crud
from course_qa.boundary.db.CRUD.search_log_crud import search_log_crud
from course_qa.boundary.db.models.event_model import EventKind
from course_qa.boundary.vdb.vector_schemas import VectorHit
from course_qa.configs.retrieval import RetrievalSettings
from course_qa.core.exceptions import SearchTimeoutError
from course_qa.core.retrieval.citation_builder import CitationBuilder
from course_qa.core.retrieval.composer import AnswerComposer
from course_qa.core.retrieval.models import RetrievedChunk
from course_qa.core.retrieval.retriever import Retriever
from course_qa.models.citation import Citation
from course_qa.models.search import SearchResponse
from course_qa.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

CANDIDATE_FACTOR = 2


class SearchService:
    """Course-scoped question answering."""

    def __init__(
        self,
        db: AsyncSession,
        retriever: Retriever,
        citation_builder: CitationBuilder,
        composer: AnswerComposer,
        settings: RetrievalSettings,
    ) -> None:
        """
        Initialize search service.

        Args:
            db: AsyncSession for chunk lookup and search logging
            retriever: Embeds queries and searches the vector index
            citation_builder: Turns resolved chunks into citations
            composer: Builds the grounded answer text
            settings: Retrieval defaults (topK, threshold, timeout)
        """
        self.db = db
        self._retriever = retriever
        self._citation_builder = citation_builder
        self._composer = composer
        self._settings = settings

    async def answer(
        self,
        course_id: int,
        query: str,
        top_k: int | None = None,
        min_score: float | None = None,
        actor_id: int | None = None,
    ) -> SearchResponse:
        """
        Answer a question from a course's indexed materials.

        Args:
            course_id: Course to search
            query: Question text (already validated as non-empty)
            top_k: Chunks to retrieve; defaults to settings.top_k
            min_score: Citation threshold; defaults to settings.min_score
            actor_id: Caller identity if known

        Returns:
            SearchResponse: Answer, citations and latency. With no chunk at or
            above the threshold the answer is the fixed not-found text and
            citations are empty.

        Raises:
            SearchTimeoutError: If the search exceeds its timeout
            RetrievalError: If embedding or index lookup fails
        """
        start_time = time.perf_counter()
        top_k = top_k or self._settings.top_k
        threshold = self._settings.min_score if min_score is None else min_score

        try:
            answer, citations = await asyncio.wait_for(
                self._compose(course_id, query.strip(), top_k, threshold),
                timeout=self._settings.search_timeout_s,
            )
        except asyncio.TimeoutError as e:
            raise SearchTimeoutError(
                "Search timed out",
                course_id=course_id,
                details={"timeout_s": self._settings.search_timeout_s},
            ) from e

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        await self._record(course_id, query, latency_ms, len(citations), actor_id)

        logger.info(
            "Search completed",
            extra={
                "course_id": course_id,
                "results_count": len(citations),
                "latency_ms": latency_ms,
                "top_k": top_k,
                "min_score": threshold,
            },
        )
        return SearchResponse(answer=answer, citations=citations, latency_ms=latency_ms)

    async def _compose(
        self,
        course_id: int,
        query: str,
        top_k: int,
        min_score: float,
    ) -> tuple[str, list[Citation]]:
        # Over-fetch: hits without a chunk row are dropped in _resolve.
        hits = await self._retriever.retrieve(
            course_id, query, top_k * CANDIDATE_FACTOR, min_score
        )
        chunks = (await self._resolve(course_id, hits))[:top_k]
        citations = self._citation_builder.build_citations(chunks)
        return self._composer.compose(query, chunks), citations

    async def _resolve(self, course_id: int, hits: list[VectorHit]) -> list[RetrievedChunk]:
        """Keep hits whose chunk and document exist in this course, in hit order."""
        keyed: list[tuple[VectorHit, UUID]] = []
        for hit in hits:
            try:
                keyed.append((hit, UUID(hit.chunk_id)))
            except ValueError:
                logger.warning("Skipping malformed chunk id", extra={"chunk_id": hit.chunk_id})

        rows = await chunk_crud.get_with_documents(self.db, [chunk_id for _, chunk_id in keyed])
        resolved = []
        for hit, chunk_id in keyed:
            row = rows.get(chunk_id)
            if row is None:
                continue
            chunk, document = row
            if document.course_id != course_id:
                logger.error(
                    "Vector hit outside requested course",
                    extra={"chunk_id": hit.chunk_id, "course_id": course_id},
                )
                continue
            resolved.append(
                RetrievedChunk(
                    chunk_id=chunk.id,
                    document_id=document.id,
                    title=document.title,
                    page=chunk.page_start,
                    content=chunk.content,
                    score=hit.score,
                )
            )
        return resolved

    async def _record(
        self,
        course_id: int,
        query: str,
        latency_ms: int,
        results_count: int,
        actor_id: int | None,
    ) -> None:
        """Write the search log and, for answered searches, the audit event."""
        try:
            await search_log_crud.log_search(
                self.db,
                course_id=course_id,
                query=query,
                latency_ms=latency_ms,
                results_count=results_count,
                actor_id=actor_id,
            )
            if results_count:
                await event_crud.record(
                    self.db,
                    EventKind.SEARCH_PERFORMED,
                    target_id=str(course_id),
                    payload={"query": query, "resultsCount": results_count, "latencyMs": latency_ms},
                    actor_id=actor_id,
                )
            await self.db.commit()
        except SQLAlchemyError as e:
            # Answer is still returned without a log row.
            await self.db.rollback()
            log_exception_with_context(
                logger, "Failed to record search", e, course_id=course_id
            )
