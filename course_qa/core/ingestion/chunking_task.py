"""
Text chunking task using RecursiveCharacterTextSplitter.

Splits a document's pages into overlapping, page-anchored chunks. Each page
is split on its own, so a chunk never crosses a page break. Character spans
are offsets into the document text, i.e. the pages joined with
PAGE_SEPARATOR. Exact-duplicate chunks within a document are dropped before
ordinals are assigned.

Dependencies: langchain_text_splitters
System role: Second stage of document ingestion pipeline
"""

import hashlib
import uuid
from uuid import UUID

from langchain_text_splitters import RecursiveCharacterTextSplitter
from langchain_core.documents import Document

from course_qa.core.ingestion.models import ChunkDraft

PAGE_SEPARATOR = "\n\n"


def content_hash(text: str) -> str:
    """sha256 hex digest of chunk text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def chunk_uuid(document_id: UUID, ordinal: int, digest: str) -> UUID:
    """
    Deterministic chunk id.

    Re-ingesting unchanged bytes yields the same ids, so vector upserts
    replace earlier vectors instead of adding new ones.
    """
    return uuid.uuid5(document_id, f"{ordinal}:{digest}")


class ChunkingTask:
    """Split page Documents into ChunkDrafts."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
    ) -> None:
        """
        Initialize chunking task with splitter configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks
        """
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            add_start_index=True,
            length_function=len,
        )

    def chunk(self, document_id: UUID, pages: list[Document]) -> list[ChunkDraft]:
        """
        Split pages into de-duplicated chunks with contiguous ordinals.

        Args:
            document_id: Owning document, used to derive chunk ids
            pages: Page Documents with a 1-based "page" in metadata

        Returns:
            list[ChunkDraft]: Chunks in document order

        Raises:
            ValueError: When pages list is empty
        """
        if not pages:
            raise ValueError("No pages to chunk")

        drafts: list[ChunkDraft] = []
        seen: set[str] = set()
        page_offset = 0
        for index, page in enumerate(pages):
            if index:
                page_offset += len(PAGE_SEPARATOR)
            page_number = int(page.metadata.get("page", index + 1))
            text = page.page_content

            if text.strip():
                for chunk_text, start in self._split_page(text):
                    digest = content_hash(chunk_text)
                    if digest in seen:
                        continue
                    seen.add(digest)

                    ordinal = len(drafts)
                    drafts.append(
                        ChunkDraft(
                            id=chunk_uuid(document_id, ordinal, digest),
                            ordinal=ordinal,
                            content=chunk_text,
                            content_hash=digest,
                            page_start=page_number,
                            page_end=page_number,
                            char_start=page_offset + start,
                            char_end=page_offset + start + len(chunk_text),
                        )
                    )
            page_offset += len(text)
        return drafts

    def _split_page(self, text: str) -> list[tuple[str, int]]:
        """Split one page, returning (chunk text, offset within page)."""
        pieces = []
        search_from = 0
        for piece in self._splitter.split_documents([Document(page_content=text)]):
            start = piece.metadata.get("start_index")
            if start is None or start < 0:
                start = text.find(piece.page_content, search_from)
                if start < 0:
                    start = max(text.find(piece.page_content), 0)
            search_from = start
            pieces.append((piece.page_content, start))
        return pieces
