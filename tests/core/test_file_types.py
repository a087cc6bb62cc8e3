"""Tests for upload content-type resolution."""

import pytest

from course_qa.core.ingestion.file_types import (
    DOCX,
    PDF,
    PPTX,
    TEXT,
    resolve_content_type,
    shorten_filename,
)


class TestResolveContentType:
    @pytest.mark.parametrize("declared", [PDF, TEXT, DOCX, PPTX, "text/plain; charset=utf-8"])
    def test_allowed_types_should_pass(self, declared: str) -> None:
        assert resolve_content_type("file.bin", declared) == declared.split(";")[0]

    @pytest.mark.parametrize(
        ("filename", "expected"),
        [("slides.PPTX", PPTX), ("notes.txt", TEXT), ("paper.pdf", PDF), ("essay.docx", DOCX)],
    )
    def test_octet_stream_should_resolve_by_extension(self, filename: str, expected: str) -> None:
        assert resolve_content_type(filename, "application/octet-stream") == expected
        assert resolve_content_type(filename, None) == expected

    def test_disallowed_type_should_return_none(self) -> None:
        assert resolve_content_type("photo.pdf", "image/png") is None

    def test_unknown_extension_should_return_none(self) -> None:
        assert resolve_content_type("archive.zip", "application/octet-stream") is None


class TestShortenFilename:
    def test_short_name_should_be_unchanged(self) -> None:
        assert shorten_filename("notes.pdf", 255) == "notes.pdf"

    def test_long_name_should_keep_extension(self) -> None:
        result = shorten_filename("a" * 300 + ".pdf", 255)

        assert len(result) == 255
        assert result.endswith("a.pdf")

    def test_oversized_suffix_should_be_cut(self) -> None:
        result = shorten_filename("x." + "b" * 40, 20)

        assert result == ("x." + "b" * 40)[:20]
