"""
In-process ingestion queue.

Upload handlers submit IngestionJob messages; a fixed pool of asyncio workers
consumes them and resolves each submission with an IngestionOutcome. Jobs
for the same document are serialized with a per-document lock, and each job
is bounded by a timeout after which the document is marked failed.

Document status in the database is the durable record: on startup every
document still queued or processing is submitted again.

Dependencies: asyncio, course_qa.core.ingestion
System role: Background ingestion scheduling
"""

import asyncio
import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from course_qa.boundary.db.CRUD.document_crud import document_crud
from course_qa.boundary.db.models.document_model import DocumentStatus
from course_qa.core.exceptions import DocumentNotFoundError
from course_qa.core.ingestion.models import IngestionJob, IngestionOutcome, OutcomeStatus
from course_qa.core.ingestion.pipeline import IngestionPipeline
from course_qa.observability.correlation import correlation_scope, get_correlation_id
from course_qa.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "Ingestion timed out"


class IngestionQueue:
    """asyncio.Queue-backed worker pool for document ingestion."""

    def __init__(
        self,
        pipeline: IngestionPipeline,
        workers: int = 2,
        timeout_s: float = 600.0,
    ) -> None:
        """
        Initialize the queue.

        Args:
            pipeline: Pipeline that performs a single ingestion
            workers: Number of concurrent worker tasks
            timeout_s: Upper bound for one ingestion
        """
        self._pipeline = pipeline
        self._worker_count = workers
        self._timeout_s = timeout_s
        self._queue: asyncio.Queue[tuple[IngestionJob, asyncio.Future]] = asyncio.Queue()
        self._workers: list[asyncio.Task] = []
        self._locks: dict[UUID, asyncio.Lock] = {}
        self._lock_users: dict[UUID, int] = {}

    @property
    def running(self) -> bool:
        return bool(self._workers)

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    async def start(self) -> None:
        """Spawn worker tasks. Calling start twice is a no-op."""
        if self._workers:
            return
        self._workers = [
            asyncio.create_task(self._worker(n), name=f"ingestion-worker-{n}")
            for n in range(self._worker_count)
        ]
        logger.info("Ingestion workers started", extra={"workers": self._worker_count})

    async def stop(self) -> None:
        """
        Cancel workers.

        An ingestion interrupted here leaves its document in processing; it
        is picked up again by requeue_unfinished on the next start.
        """
        for task in self._workers:
            task.cancel()
        await asyncio.gather(*self._workers, return_exceptions=True)
        self._workers = []
        logger.info("Ingestion workers stopped")

    def submit(self, document_id: UUID) -> asyncio.Future:
        """
        Enqueue a document for ingestion.

        Args:
            document_id: Document UUID

        Returns:
            asyncio.Future: Resolves with the IngestionOutcome; never raises
        """
        future: asyncio.Future = asyncio.get_running_loop().create_future()
        job = IngestionJob(document_id=document_id, correlation_id=get_correlation_id() or None)
        self._queue.put_nowait((job, future))
        logger.debug("Ingestion job queued", extra={"document_id": str(document_id)})
        return future

    async def join(self) -> None:
        """Wait until every submitted job has been processed."""
        await self._queue.join()

    async def requeue_unfinished(
        self,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> list[UUID]:
        """
        Submit every document left queued or processing.

        Args:
            session_factory: DB session factory

        Returns:
            list[UUID]: Requeued document ids
        """
        async with session_factory() as session:
            documents = await document_crud.get_by_statuses(
                session, [DocumentStatus.QUEUED, DocumentStatus.PROCESSING]
            )
            ids = [d.id for d in documents]
        for document_id in ids:
            self.submit(document_id)
        if ids:
            logger.info("Requeued unfinished documents", extra={"count": len(ids)})
        return ids

    async def process(self, job: IngestionJob) -> IngestionOutcome:
        """
        Run one job under its document lock and the ingestion timeout.

        Args:
            job: Job message

        Returns:
            IngestionOutcome: Explicit outcome; failures are reported, not raised
        """
        document_id = job.document_id
        lock = self._acquire_lock_ref(document_id)
        try:
            async with lock:
                try:
                    return await asyncio.wait_for(
                        self._pipeline.ingest(document_id), timeout=self._timeout_s
                    )
                except asyncio.TimeoutError:
                    logger.error(
                        "Ingestion timed out",
                        extra={"document_id": str(document_id), "timeout_s": self._timeout_s},
                    )
                    await self._pipeline.record_failure(document_id, TIMEOUT_MESSAGE)
                    return IngestionOutcome(
                        document_id=document_id,
                        status=OutcomeStatus.FAILED,
                        error=TIMEOUT_MESSAGE,
                    )
                except DocumentNotFoundError as e:
                    logger.warning(
                        "Document disappeared before ingestion",
                        extra={"document_id": str(document_id)},
                    )
                    return IngestionOutcome(
                        document_id=document_id,
                        status=OutcomeStatus.FAILED,
                        error=e.message,
                    )
                except Exception as e:
                    log_exception_with_context(
                        logger, "Unexpected ingestion error", e, document_id=str(document_id)
                    )
                    await self._pipeline.record_failure(document_id, str(e) or type(e).__name__)
                    return IngestionOutcome(
                        document_id=document_id,
                        status=OutcomeStatus.FAILED,
                        error=str(e) or type(e).__name__,
                    )
        finally:
            self._release_lock_ref(document_id)

    async def _worker(self, number: int) -> None:
        while True:
            job, future = await self._queue.get()
            try:
                try:
                    with correlation_scope(job.correlation_id):
                        outcome = await self.process(job)
                except asyncio.CancelledError:
                    raise
                except Exception as e:
                    # Recording the failure itself failed (e.g. database unavailable).
                    log_exception_with_context(
                        logger, "Ingestion job crashed", e, document_id=str(job.document_id)
                    )
                    outcome = IngestionOutcome(
                        document_id=job.document_id,
                        status=OutcomeStatus.FAILED,
                        error=str(e) or type(e).__name__,
                    )
                logger.info(
                    "Ingestion job finished",
                    extra={
                        "worker": number,
                        "document_id": str(job.document_id),
                        "outcome": outcome.status.value,
                        "chunk_count": outcome.chunk_count,
                        "error": outcome.error,
                    },
                )
                if not future.done():
                    future.set_result(outcome)
            except asyncio.CancelledError:
                if not future.done():
                    future.cancel()
                raise
            finally:
                self._queue.task_done()

    def _acquire_lock_ref(self, document_id: UUID) -> asyncio.Lock:
        lock = self._locks.setdefault(document_id, asyncio.Lock())
        self._lock_users[document_id] = self._lock_users.get(document_id, 0) + 1
        return lock

    def _release_lock_ref(self, document_id: UUID) -> None:
        remaining = self._lock_users.get(document_id, 1) - 1
        if remaining <= 0:
            self._lock_users.pop(document_id, None)
            self._locks.pop(document_id, None)
        else:
            self._lock_users[document_id] = remaining
