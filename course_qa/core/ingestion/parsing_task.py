"""
Document parsing task.

Extracts text per page into LangChain Documents. PDF pages come from
PyPDFLoader, PPTX slides from python-pptx, and DOCX/TXT from their
LangChain loaders. Plain text treats form feeds as page breaks.

Every returned Document carries a 1-based ``page`` in its metadata.

Dependencies: langchain_community.document_loaders, python-pptx
System role: First stage of document ingestion pipeline
"""

from pathlib import Path

from langchain_core.documents import Document
from langchain_community.document_loaders import Docx2txtLoader, PyPDFLoader, TextLoader
from pptx import Presentation

from course_qa.core.exceptions import ParsingError
from course_qa.core.ingestion import file_types


class ParsingTask:
    """Parse uploaded files into page-level LangChain Documents."""

    def parse(self, file_path: str, content_type: str) -> list[Document]:
        """
        Parse a document into one Document per page.

        Args:
            file_path: Path to the downloaded document
            content_type: Accepted MIME type of the upload

        Returns:
            list[Document]: Pages in order, including empty ones so page
            numbers stay aligned with the source

        Raises:
            ParsingError: When the format is unsupported, parsing fails,
            or the document has no extractable text
        """
        path = Path(file_path)
        if not path.exists():
            raise ParsingError(f"File not found: {file_path}", file_type=content_type)

        parsers = {
            file_types.PDF: self._parse_pdf,
            file_types.TEXT: self._parse_text,
            file_types.DOCX: self._parse_docx,
            file_types.PPTX: self._parse_pptx,
        }
        parser = parsers.get(content_type)
        if parser is None:
            raise ParsingError(f"Unsupported content type: {content_type}", file_type=content_type)

        try:
            texts = parser(file_path)
        except ParsingError:
            raise
        except Exception as e:
            raise ParsingError(f"Failed to parse document: {e}", file_type=content_type) from e

        if not any(t.strip() for t in texts):
            raise ParsingError("Document contains no extractable text", file_type=content_type)

        return [
            Document(page_content=text, metadata={"page": number, "source": path.name})
            for number, text in enumerate(texts, start=1)
        ]

    def _parse_pdf(self, file_path: str) -> list[str]:
        # PyPDFLoader emits one Document per page with a 0-based "page".
        pages = PyPDFLoader(file_path).load()
        pages.sort(key=lambda d: d.metadata.get("page", 0))
        return [d.page_content for d in pages]

    def _parse_text(self, file_path: str) -> list[str]:
        documents = TextLoader(file_path, autodetect_encoding=True).load()
        text = "\n".join(d.page_content for d in documents)
        return text.split("\f")

    def _parse_docx(self, file_path: str) -> list[str]:
        documents = Docx2txtLoader(file_path).load()
        return ["\n".join(d.page_content for d in documents)]

    def _parse_pptx(self, file_path: str) -> list[str]:
        slides = []
        for slide in Presentation(file_path).slides:
            parts = []
            for shape in slide.shapes:
                if shape.has_text_frame:
                    parts.append(shape.text_frame.text)
                elif getattr(shape, "has_table", False) and shape.has_table:
                    for row in shape.table.rows:
                        parts.append(" | ".join(cell.text for cell in row.cells))
            if slide.has_notes_slide:
                parts.append(slide.notes_slide.notes_text_frame.text)
            slides.append("\n".join(p for p in parts if p.strip()))
        return slides
