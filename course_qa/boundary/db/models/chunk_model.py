"""
Chunk ORM model.

A contiguous, page-anchored span of a document's extracted text. Rows are
written only once their vector is in the index, so embedding_id is never null.

Dependencies: sqlalchemy, course_qa.boundary.db.base
System role: Chunk persistence and citation source
"""

import uuid

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from course_qa.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class ChunkModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Chunk ORM model.

    Attributes:
        id: UUID primary key, also the id stored in the vector index
        document_id: Owning document (ON DELETE CASCADE)
        ordinal: 0-based position, contiguous per document
        page_start: First page (1-based) the chunk covers
        page_end: Last page (1-based) the chunk covers
        char_start: Offset into the document's concatenated text
        char_end: Exclusive end offset into the concatenated text
        content: Chunk text used for snippets and answers
        content_hash: sha256 hex digest of content
        embedding_id: Opaque id returned by the vector index
    """

    __tablename__ = "chunks"
    __table_args__ = (
        UniqueConstraint("document_id", "ordinal", name="uq_chunks_document_ordinal"),
    )

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    ordinal: Mapped[int] = mapped_column(Integer, nullable=False)
    page_start: Mapped[int] = mapped_column(Integer, nullable=False)
    page_end: Mapped[int] = mapped_column(Integer, nullable=False)
    char_start: Mapped[int] = mapped_column(Integer, nullable=False)
    char_end: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    content_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    embedding_id: Mapped[str] = mapped_column(String(255), nullable=False)

    document = relationship("DocumentModel", back_populates="chunks")
