"""
Document ORM model.

Represents uploaded course documents with lifecycle status and metadata.
Tracks the ingestion lifecycle from upload to vector indexing.

Dependencies: sqlalchemy, course_qa.boundary.db.base
System role: Document persistence for ingestion tracking
"""

import enum

from sqlalchemy import BigInteger, Enum, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from course_qa.boundary.db.base import Base, TimestampMixin, UUIDMixin
from course_qa.core.exceptions import ChecksumImmutableError, InvalidStatusTransitionError

TITLE_MAX_CHARS = 255


class DocumentStatus(str, enum.Enum):
    """
    Document ingestion lifecycle states.

    QUEUED: Document stored, waiting for an ingestion worker
    PROCESSING: Worker is extracting, chunking and embedding
    INDEXED: Chunks and vectors persisted, ready for retrieval
    FAILED: Ingestion error; error_message field contains details
    """

    QUEUED = "queued"
    PROCESSING = "processing"
    INDEXED = "indexed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (DocumentStatus.INDEXED, DocumentStatus.FAILED)

    def can_transition_to(self, target: "DocumentStatus") -> bool:
        """
        Check whether moving from this status to ``target`` is allowed.

        Statuses only move forward: queued -> processing -> indexed, and any
        non-terminal status may move to failed. Staying put is allowed.
        """
        if target == self:
            return True
        if self.is_terminal:
            return False
        if target == DocumentStatus.FAILED:
            return True
        order = [DocumentStatus.QUEUED, DocumentStatus.PROCESSING, DocumentStatus.INDEXED]
        return order.index(target) == order.index(self) + 1


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Document ORM model tracking ingestion pipeline state.

    Lifecycle: Upload (QUEUED) -> worker (PROCESSING) -> vector indexing
    (INDEXED) or failure (FAILED).

    Attributes:
        id: UUID primary key (auto-generated)
        course_id: Owning course (external reference)
        title: Original filename (255 char limit)
        storage_key: Key of the raw bytes in document storage
        checksum: sha256 hex digest of the uploaded bytes, immutable once set
        content_type: MIME type accepted at upload
        size_bytes: Upload size in bytes
        status: Current lifecycle state
        page_count: Pages extracted, null until ingestion finishes
        chunk_count: Chunks indexed, null until ingestion finishes
        error_message: Null unless FAILED (2048 char limit)
        created_at: Upload timestamp (UTC)
        updated_at: Last status change timestamp (UTC)

    Relationships:
        chunks: Owned ChunkModels (cascade delete)
    """

    __tablename__ = "documents"
    __table_args__ = (Index("ix_documents_course_created", "course_id", "created_at"),)

    course_id: Mapped[int] = mapped_column(Integer, nullable=False)

    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_CHARS), nullable=False, doc="Original filename"
    )

    storage_key: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        doc="Storage key for the raw document bytes",
    )

    checksum: Mapped[str] = mapped_column(String(64), nullable=False)

    content_type: Mapped[str] = mapped_column(String(255), nullable=False)

    size_bytes: Mapped[int] = mapped_column(BigInteger, nullable=False)

    status: Mapped[DocumentStatus] = mapped_column(
        Enum(DocumentStatus, native_enum=False, length=20),
        nullable=False,
        default=DocumentStatus.QUEUED,
    )

    page_count: Mapped[int | None] = mapped_column(Integer, nullable=True)

    chunk_count: Mapped[int | None] = mapped_column(Integer, nullable=True)

    error_message: Mapped[str | None] = mapped_column(
        String(2048),
        nullable=True,
        doc="Error details if ingestion failed",
    )

    # Relationships
    chunks = relationship(
        "ChunkModel",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ChunkModel.ordinal",
    )

    @validates("status")
    def _validate_status(self, _key: str, value: DocumentStatus) -> DocumentStatus:
        target = DocumentStatus(value)
        current = self.__dict__.get("status")
        if current is not None and not current.can_transition_to(target):
            raise InvalidStatusTransitionError(str(self.id), current.value, target.value)
        return target

    @validates("checksum")
    def _validate_checksum(self, _key: str, value: str) -> str:
        current = self.__dict__.get("checksum")
        if current is not None and current != value:
            raise ChecksumImmutableError(str(self.id))
        return value
