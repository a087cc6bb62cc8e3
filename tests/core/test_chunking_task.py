"""
Test suite for ChunkingTask.

System role: Verification of page-anchored chunking and de-duplication
"""

import uuid

import pytest
from langchain_core.documents import Document

from course_qa.core.ingestion.chunking_task import (
    PAGE_SEPARATOR,
    ChunkingTask,
    chunk_uuid,
    content_hash,
)


@pytest.fixture
def document_id() -> uuid.UUID:
    return uuid.uuid4()


def _pages(*texts: str) -> list[Document]:
    return [Document(page_content=t, metadata={"page": n}) for n, t in enumerate(texts, start=1)]


class TestChunkingTask:
    """Test suite for ChunkingTask.chunk()."""

    def test_short_pages_should_yield_one_chunk_per_page(self, document_id: uuid.UUID) -> None:
        # Arrange
        task = ChunkingTask(chunk_size=100, chunk_overlap=10)

        # Act
        drafts = task.chunk(document_id, _pages("First page text.", "Second page text."))

        # Assert
        assert [d.content for d in drafts] == ["First page text.", "Second page text."]
        assert [(d.page_start, d.page_end) for d in drafts] == [(1, 1), (2, 2)]
        assert [d.ordinal for d in drafts] == [0, 1]

    def test_char_spans_should_index_into_joined_document_text(
        self, document_id: uuid.UUID
    ) -> None:
        # Arrange
        pages = _pages("Alpha beta gamma.", "Delta epsilon zeta.")
        full_text = PAGE_SEPARATOR.join(p.page_content for p in pages)

        # Act
        drafts = ChunkingTask(chunk_size=100, chunk_overlap=10).chunk(document_id, pages)

        # Assert
        for draft in drafts:
            assert full_text[draft.char_start:draft.char_end] == draft.content

    def test_long_page_should_split_without_crossing_pages(self, document_id: uuid.UUID) -> None:
        # Arrange
        long_page = " ".join(f"word{n}" for n in range(200))
        task = ChunkingTask(chunk_size=120, chunk_overlap=20)

        # Act
        drafts = task.chunk(document_id, _pages(long_page, "Tail page."))

        # Assert
        assert len(drafts) > 2
        assert all(len(d.content) <= 120 for d in drafts)
        assert all(d.page_start == d.page_end for d in drafts)
        assert drafts[-1].page_start == 2

    def test_duplicate_chunks_should_be_dropped_with_contiguous_ordinals(
        self, document_id: uuid.UUID
    ) -> None:
        # Arrange
        pages = _pages("Repeated footer.", "Unique content.", "Repeated footer.")

        # Act
        drafts = ChunkingTask(chunk_size=100, chunk_overlap=10).chunk(document_id, pages)

        # Assert
        assert [d.content for d in drafts] == ["Repeated footer.", "Unique content."]
        assert [d.ordinal for d in drafts] == [0, 1]
        assert len({d.content_hash for d in drafts}) == 2

    def test_blank_pages_should_keep_page_numbers_aligned(self, document_id: uuid.UUID) -> None:
        drafts = ChunkingTask(chunk_size=100, chunk_overlap=10).chunk(
            document_id, _pages("Cover.", "   ", "Third page.")
        )

        assert [d.page_start for d in drafts] == [1, 3]

    def test_chunk_ids_should_be_deterministic(self, document_id: uuid.UUID) -> None:
        task = ChunkingTask(chunk_size=100, chunk_overlap=10)
        pages = _pages("Same text every time.")

        first = task.chunk(document_id, pages)
        second = task.chunk(document_id, pages)

        assert [d.id for d in first] == [d.id for d in second]
        assert first[0].id == chunk_uuid(document_id, 0, content_hash("Same text every time."))

    def test_empty_page_list_should_raise(self, document_id: uuid.UUID) -> None:
        with pytest.raises(ValueError):
            ChunkingTask().chunk(document_id, [])


class TestContentHash:
    def test_content_hash_should_be_sha256_hex(self) -> None:
        assert content_hash("abc") == (
            "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        )
