"""
Local FAISS vector index, one index per course.

Each course owns a separate ``IndexIDMap2(IndexFlatIP)`` over L2-normalised
vectors, so inner product equals cosine similarity and a query can only ever
see its own course. Indexes are persisted to ``course_<id>.faiss`` with a JSON
sidecar mapping FAISS int64 ids to chunk ids, and loaded lazily on first use.

Ordering: score descending, ties broken by chunk id ascending.

Dependencies: faiss, numpy
System role: Vector storage and nearest-neighbour search
"""

import json
import logging
import os
import threading
from pathlib import Path
from typing import Sequence

import faiss
import numpy as np

from course_qa.boundary.vdb.vector_schemas import VectorHit, VectorRecord
from course_qa.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)

# Extra candidates fetched so ties at the k-th score can be ordered by chunk id.
_TIE_MARGIN = 16


def _normalize(vectors: np.ndarray) -> np.ndarray:
    norms = np.linalg.norm(vectors, axis=1, keepdims=True)
    norms[norms == 0] = 1.0
    return (vectors / norms).astype(np.float32)


class _CourseIndex:
    """FAISS index plus id bookkeeping for a single course."""

    def __init__(self, dimension: int) -> None:
        self.index = faiss.IndexIDMap2(faiss.IndexFlatIP(dimension))
        self.id_to_chunk: dict[int, str] = {}
        self.chunk_to_id: dict[str, int] = {}
        self.next_id = 0
        self.lock = threading.Lock()


class FAISSVectorIndex:
    """
    Persistent, course-partitioned FAISS index.

    All mutations and searches on a course run under that course's lock, so
    a query observes a vector either fully written or not at all.
    """

    def __init__(self, index_dir: str, dimension: int) -> None:
        """
        Initialize the index directory.

        Args:
            index_dir: Directory for per-course index files (created if missing)
            dimension: Embedding dimension every vector must have
        """
        if dimension <= 0:
            raise ValueError("dimension must be positive")
        self.dimension = dimension
        self._dir = Path(index_dir)
        self._dir.mkdir(parents=True, exist_ok=True)
        self._courses: dict[int, _CourseIndex] = {}
        self._registry_lock = threading.Lock()

    # Persistence

    def _paths(self, course_id: int) -> tuple[Path, Path]:
        stem = self._dir / f"course_{int(course_id)}"
        return stem.with_suffix(".faiss"), stem.with_suffix(".json")

    def _load(self, course_id: int) -> _CourseIndex:
        index_path, meta_path = self._paths(course_id)
        course = _CourseIndex(self.dimension)
        if not index_path.exists() or not meta_path.exists():
            return course

        try:
            loaded = faiss.read_index(str(index_path))
            meta = json.loads(meta_path.read_text(encoding="utf-8"))
        except (RuntimeError, OSError, ValueError) as e:
            raise VectorStoreError(
                f"Failed to load index for course {course_id}: {e}",
                operation="load",
            ) from e

        if loaded.d != self.dimension:
            raise VectorStoreError(
                f"Index for course {course_id} has dimension {loaded.d}, expected {self.dimension}",
                operation="load",
            )

        course.index = faiss.IndexIDMap2(loaded) if not isinstance(loaded, faiss.IndexIDMap2) else loaded
        mapping = {int(k): v for k, v in meta.get("ids", {}).items()}
        stored_ids = set(faiss.vector_to_array(course.index.id_map).tolist())

        # Reconcile a crash between writing the index and the sidecar.
        orphan_ids = stored_ids - set(mapping)
        if orphan_ids:
            course.index.remove_ids(np.array(sorted(orphan_ids), dtype=np.int64))
        course.id_to_chunk = {i: c for i, c in mapping.items() if i in stored_ids}
        course.chunk_to_id = {c: i for i, c in course.id_to_chunk.items()}
        course.next_id = max(int(meta.get("next_id", 0)), max(stored_ids, default=-1) + 1)

        logger.info(
            "Loaded course index",
            extra={"course_id": course_id, "vectors": course.index.ntotal, "orphans_dropped": len(orphan_ids)},
        )
        return course

    def _save(self, course_id: int, course: _CourseIndex) -> None:
        index_path, meta_path = self._paths(course_id)
        tmp_index = index_path.with_suffix(".faiss.tmp")
        tmp_meta = meta_path.with_suffix(".json.tmp")
        try:
            faiss.write_index(course.index, str(tmp_index))
            tmp_meta.write_text(
                json.dumps({
                    "dimension": self.dimension,
                    "next_id": course.next_id,
                    "ids": {str(i): c for i, c in course.id_to_chunk.items()},
                }),
                encoding="utf-8",
            )
            os.replace(tmp_index, index_path)
            os.replace(tmp_meta, meta_path)
        except (RuntimeError, OSError) as e:
            raise VectorStoreError(
                f"Failed to persist index for course {course_id}: {e}",
                operation="save",
            ) from e

    def _course(self, course_id: int) -> _CourseIndex:
        with self._registry_lock:
            course = self._courses.get(course_id)
            if course is None:
                course = self._load(course_id)
                self._courses[course_id] = course
            return course

    # Operations

    def _as_matrix(self, vectors: Sequence[Sequence[float]], operation: str) -> np.ndarray:
        matrix = np.asarray(vectors, dtype=np.float32)
        if matrix.ndim != 2 or matrix.shape[1] != self.dimension:
            raise VectorStoreError(
                f"Expected vectors of dimension {self.dimension}, got shape {matrix.shape}",
                operation=operation,
            )
        if not np.all(np.isfinite(matrix)):
            raise VectorStoreError("Vectors contain NaN or infinite values", operation=operation)
        return _normalize(matrix)

    @staticmethod
    def _embedding_id(course_id: int, int_id: int) -> str:
        return f"{course_id}:{int_id}"

    def upsert(self, chunk_id: str, vector: Sequence[float], course_id: int) -> str:
        """
        Insert or replace a single chunk vector.

        Args:
            chunk_id: Chunk identifier
            vector: Embedding vector
            course_id: Course the chunk belongs to

        Returns:
            str: Opaque embedding id
        """
        return self.upsert_many([VectorRecord(chunk_id=chunk_id, vector=list(vector))], course_id)[0]

    def upsert_many(self, records: Sequence[VectorRecord], course_id: int) -> list[str]:
        """
        Insert or replace chunk vectors and persist the course index once.

        An existing chunk id keeps its FAISS id; its old vector is removed
        and the new one added under the same lock hold.

        Args:
            records: Chunk ids with vectors
            course_id: Course the chunks belong to

        Returns:
            list[str]: Embedding ids in input order

        Raises:
            VectorStoreError: On dimension mismatch or persistence failure
        """
        if not records:
            return []
        chunk_ids = [r.chunk_id for r in records]
        if len(set(chunk_ids)) != len(chunk_ids):
            raise VectorStoreError("Duplicate chunk ids in upsert batch", operation="upsert")
        matrix = self._as_matrix([r.vector for r in records], "upsert")

        course = self._course(course_id)
        with course.lock:
            int_ids = []
            for chunk_id in chunk_ids:
                int_id = course.chunk_to_id.get(chunk_id)
                if int_id is None:
                    int_id = course.next_id
                    course.next_id += 1
                int_ids.append(int_id)

            id_array = np.array(int_ids, dtype=np.int64)
            course.index.remove_ids(id_array)
            course.index.add_with_ids(matrix, id_array)
            for chunk_id, int_id in zip(chunk_ids, int_ids):
                course.id_to_chunk[int_id] = chunk_id
                course.chunk_to_id[chunk_id] = int_id
            self._save(course_id, course)

        logger.debug(
            "Upserted vectors",
            extra={"course_id": course_id, "count": len(records), "total": course.index.ntotal},
        )
        return [self._embedding_id(course_id, i) for i in int_ids]

    def query(self, vector: Sequence[float], k: int, course_id: int) -> list[VectorHit]:
        """
        Find the k most similar chunks within one course.

        Args:
            vector: Query embedding
            k: Maximum number of hits
            course_id: Course to search; no other course is consulted

        Returns:
            list[VectorHit]: Hits ordered by score desc, chunk id asc
        """
        if k <= 0:
            return []
        query = self._as_matrix([vector], "query")

        course = self._course(course_id)
        with course.lock:
            total = course.index.ntotal
            if total == 0:
                return []

            fetch = min(total, k + _TIE_MARGIN)
            scores, ids = course.index.search(query, fetch)
            # Widen to the whole course when ties may extend past the fetched window.
            if fetch < total and len(scores[0]) > k and scores[0][k - 1] == scores[0][-1]:
                scores, ids = course.index.search(query, total)

            hits = [
                VectorHit(chunk_id=course.id_to_chunk[int(i)], score=float(s))
                for s, i in zip(scores[0], ids[0])
                if i != -1 and int(i) in course.id_to_chunk
            ]

        hits.sort(key=lambda h: (-h.score, h.chunk_id))
        return hits[:k]

    def delete(self, chunk_ids: Sequence[str], course_id: int) -> int:
        """
        Remove chunk vectors from a course index.

        Args:
            chunk_ids: Chunk identifiers to remove (unknown ids are ignored)
            course_id: Course the chunks belong to

        Returns:
            int: Number of vectors removed
        """
        if not chunk_ids:
            return 0
        course = self._course(course_id)
        with course.lock:
            int_ids = [course.chunk_to_id[c] for c in chunk_ids if c in course.chunk_to_id]
            if not int_ids:
                return 0
            course.index.remove_ids(np.array(int_ids, dtype=np.int64))
            for int_id in int_ids:
                chunk_id = course.id_to_chunk.pop(int_id)
                course.chunk_to_id.pop(chunk_id, None)
            self._save(course_id, course)

        logger.debug("Deleted vectors", extra={"course_id": course_id, "count": len(int_ids)})
        return len(int_ids)

    def count(self, course_id: int) -> int:
        course = self._course(course_id)
        with course.lock:
            return course.index.ntotal
