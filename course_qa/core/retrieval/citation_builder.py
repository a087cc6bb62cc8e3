"""
Citation extraction and formatting.

Builds citations from retrieved chunks for answer grounding. A citation is
only ever created from a chunk that was retrieved and resolved in the
database.

Dependencies: course_qa.models
System role: Citation formatting business logic
"""

import re

from course_qa.core.retrieval.models import RetrievedChunk
from course_qa.models.citation import Citation

_WHITESPACE = re.compile(r"\s+")


class CitationBuilder:
    """Citation building business logic."""

    def __init__(self, snippet_chars: int = 300) -> None:
        """
        Initialize citation builder.

        Args:
            snippet_chars: Maximum snippet length
        """
        self._snippet_chars = snippet_chars

    def build_citations(self, chunks: list[RetrievedChunk]) -> list[Citation]:
        """
        Build citations in retrieval order.

        Args:
            chunks: Resolved retrieval results, best first

        Returns:
            list[Citation]: One citation per chunk
        """
        return [
            Citation(
                document_id=chunk.document_id,
                chunk_id=chunk.chunk_id,
                title=chunk.title,
                page=chunk.page,
                snippet=self.make_snippet(chunk.content),
                score=round(chunk.score, 4),
            )
            for chunk in chunks
        ]

    def make_snippet(self, text: str) -> str:
        """
        Collapse whitespace and cut at a word boundary.

        Args:
            text: Chunk text

        Returns:
            str: Snippet no longer than snippet_chars (plus an ellipsis when cut)
        """
        flat = _WHITESPACE.sub(" ", text).strip()
        if len(flat) <= self._snippet_chars:
            return flat
        cut = flat[: self._snippet_chars]
        space = cut.rfind(" ")
        if space > self._snippet_chars // 2:
            cut = cut[:space]
        return cut.rstrip(" ,;:") + "..."
