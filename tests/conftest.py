"""
Shared test fixtures and configuration for entire test suite.

Provides: SQLite async databases, a deterministic embedding provider,
minimal PDF and DOCX builders, temporary FAISS indexes and storage, and a
wired ingestion pipeline.
Dependencies: pytest, pytest-asyncio, sqlalchemy, faiss
System role: Test infrastructure and fixture management
"""

import hashlib
import io
import math
import re
import uuid
import zipfile

import pytest
from langchain_core.embeddings import Embeddings
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from course_qa.boundary.db.base import Base
from course_qa.boundary.db.CRUD.document_crud import document_crud
from course_qa.boundary.db.models.document_model import DocumentStatus
from course_qa.boundary.storage.local_storage import LocalFileStorage
from course_qa.boundary.vdb.faiss_index import FAISSVectorIndex
from course_qa.core.ingestion.checksum import bytes_checksum
from course_qa.core.ingestion.chunking_task import ChunkingTask
from course_qa.core.ingestion.embedding_task import EmbeddingTask
from course_qa.core.ingestion.file_types import TEXT
from course_qa.core.ingestion.parsing_task import ParsingTask
from course_qa.core.ingestion.pipeline import IngestionPipeline

EMBEDDING_DIMENSION = 256

_WORD = re.compile(r"[a-z0-9]+")


class HashingEmbeddings(Embeddings):
    """
    Deterministic bag-of-words embeddings.

    Each lowercase token is hashed into one of ``dimension`` buckets, so
    texts sharing words have positive cosine similarity and identical
    texts score 1.0.
    """

    def __init__(self, dimension: int = EMBEDDING_DIMENSION) -> None:
        self.dimension = dimension
        self.document_calls = 0

    def _vector(self, text: str) -> list[float]:
        vector = [0.0] * self.dimension
        for token in _WORD.findall(text.lower()):
            bucket = int(hashlib.md5(token.encode("utf-8")).hexdigest(), 16) % self.dimension
            vector[bucket] += 1.0
        norm = math.sqrt(sum(v * v for v in vector)) or 1.0
        return [v / norm for v in vector]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.document_calls += 1
        return [self._vector(t) for t in texts]

    def embed_query(self, text: str) -> list[float]:
        return self._vector(text)


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest.fixture
async def session_factory(tmp_path):
    """
    File-backed SQLite session factory.

    Each session gets its own connection, so concurrent ingestion workers
    see committed state the way they would against PostgreSQL.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'course_qa.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    await engine.dispose()


@pytest.fixture
def embeddings() -> HashingEmbeddings:
    return HashingEmbeddings()


@pytest.fixture
def embedding_task(embeddings: HashingEmbeddings) -> EmbeddingTask:
    return EmbeddingTask(embeddings=embeddings, dimension=EMBEDDING_DIMENSION, batch_size=8)


@pytest.fixture
def vector_index(tmp_path) -> FAISSVectorIndex:
    return FAISSVectorIndex(index_dir=str(tmp_path / "indexes"), dimension=EMBEDDING_DIMENSION)


@pytest.fixture
def storage(tmp_path) -> LocalFileStorage:
    return LocalFileStorage(root=str(tmp_path / "storage"))


@pytest.fixture
def pipeline(session_factory, storage, vector_index, embedding_task) -> IngestionPipeline:
    """Ingestion pipeline over local storage, FAISS and the hashing embeddings."""
    return IngestionPipeline(
        session_factory=session_factory,
        storage=storage,
        vector_index=vector_index,
        parsing_task=ParsingTask(),
        chunking_task=ChunkingTask(chunk_size=200, chunk_overlap=20),
        embedding_task=embedding_task,
    )


@pytest.fixture
def lecture_text() -> str:
    """Two-page plain-text course notes (pages separated by form feed)."""
    return (
        "Backpropagation computes the gradient of the loss with respect to every weight. "
        "It applies the chain rule layer by layer, starting from the output layer.\n\n"
        "Gradient descent then updates each weight in the direction that reduces the loss."
        "\f"
        "Convolutional networks share weights across spatial positions of an image. "
        "Pooling layers reduce the spatial resolution of feature maps."
    )


@pytest.fixture
def make_document(session_factory, storage):
    """
    Store bytes and create a queued document row.

    Returns:
        Callable: async (course_id, data, title, content_type) -> document id
    """

    async def _make(
        course_id: int = 1,
        data: bytes = b"",
        title: str = "notes.txt",
        content_type: str = TEXT,
        status: DocumentStatus = DocumentStatus.QUEUED,
    ) -> uuid.UUID:
        storage_key = f"courses/{course_id}/{uuid.uuid4().hex}-{title}"
        storage.save(storage_key, data, content_type)
        async with session_factory() as session:
            document = await document_crud.create(
                session,
                course_id=course_id,
                title=title,
                storage_key=storage_key,
                checksum=bytes_checksum(data),
                content_type=content_type,
                size_bytes=len(data),
                status=status,
            )
            await session.commit()
            return document.id

    return _make


def _pdf_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(pages: list[str]) -> bytes:
    """
    Write a minimal PDF with one Helvetica text line per page.

    Object layout: 1 catalog, 2 page tree, 3 font, then a page object and
    its content stream for each page.
    """
    kids = " ".join(f"{4 + 2 * i} 0 R" for i in range(len(pages)))
    objects = [
        "<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {len(pages)} >>",
        "<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for i, text in enumerate(pages):
        stream = f"BT /F1 12 Tf 72 720 Td ({_pdf_escape(text)}) Tj ET"
        objects.append(
            "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Resources << /Font << /F1 3 0 R >> >> /Contents {5 + 2 * i} 0 R >>"
        )
        objects.append(f"<< /Length {len(stream)} >>\nstream\n{stream}\nendstream")

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n{body}\nendobj\n".encode("latin-1")

    xref_at = len(out)
    out += f"xref\n0 {len(objects) + 1}\n0000000000 65535 f \n".encode("ascii")
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode("ascii")
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_at}\n%%EOF\n"
    ).encode("ascii")
    return bytes(out)


_DOCX_CONTENT_TYPES = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
    '<Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>'
    '<Default Extension="xml" ContentType="application/xml"/>'
    '<Override PartName="/word/document.xml" '
    'ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"/>'
    "</Types>"
)

_DOCX_RELS = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
    '<Relationship Id="rId1" '
    'Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument" '
    'Target="word/document.xml"/>'
    "</Relationships>"
)


def build_docx(paragraphs: list[str]) -> bytes:
    """Write a minimal WordprocessingML package with one run per paragraph."""
    body = "".join(f"<w:p><w:r><w:t>{p}</w:t></w:r></w:p>" for p in paragraphs)
    document = (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        '<w:document xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main">'
        f"<w:body>{body}</w:body></w:document>"
    )
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        archive.writestr("[Content_Types].xml", _DOCX_CONTENT_TYPES)
        archive.writestr("_rels/.rels", _DOCX_RELS)
        archive.writestr("word/document.xml", document)
    return buffer.getvalue()


@pytest.fixture
def lecture_pdf() -> bytes:
    """Two-page PDF lecture: backpropagation, then convolutional networks."""
    return build_pdf(
        [
            "Backpropagation computes the gradient of the loss with respect to every weight.",
            "Convolutional networks share weights across spatial positions of an image.",
        ]
    )


@pytest.fixture
def lecture_docx() -> bytes:
    return build_docx(
        [
            "Regularisation limits overfitting.",
            "Dropout randomly disables units during training.",
        ]
    )
