"""
Tests for structured logging helpers and correlation id scoping.
"""

import logging

from course_qa.core.exceptions import StorageError
from course_qa.observability.correlation import correlation_scope, get_correlation_id
from course_qa.observability.log_utils import (
    build_extra,
    log_exception_with_context,
    safe_log_value,
)
from course_qa.observability.logger import CorrelationIdFilter

logger = logging.getLogger("course_qa.tests.logging")


class TestSafeLogValue:
    def test_collections_should_be_summarised(self) -> None:
        assert safe_log_value([1, 2, 3]) == "list(3 items)"
        assert safe_log_value({"a": 1}) == "dict(1 keys)"

    def test_long_values_should_be_truncated(self) -> None:
        result = safe_log_value("x" * 20, max_length=5)

        assert result == "xxxxx... (20 chars)"

    def test_none(self) -> None:
        assert safe_log_value(None) == "None"


class TestBuildExtra:
    def test_reserved_record_attributes_should_be_prefixed(self) -> None:
        extra = build_extra({"name": "lecture.pdf", "document_id": "abc"})

        assert extra == {"ctx_name": "lecture.pdf", "document_id": "abc"}


class TestLogExceptionWithContext:
    def test_application_error_should_add_code_and_details(self, caplog) -> None:
        # Arrange
        error = StorageError("File not found in storage", storage_key="courses/1/a.pdf")

        # Act
        with caplog.at_level(logging.ERROR, logger=logger.name):
            log_exception_with_context(logger, "Download failed", error, document_id="d-1")

        # Assert
        record = caplog.records[-1]
        assert record.error_type == "StorageError"
        assert record.error_code == "INTERNAL_ERROR"
        assert record.error_msg == "File not found in storage"
        assert record.detail_storage_key == "courses/1/a.pdf"
        assert record.document_id == "d-1"
        assert record.exc_info is not None

    def test_plain_exception(self, caplog) -> None:
        with caplog.at_level(logging.ERROR, logger=logger.name):
            log_exception_with_context(logger, "Boom", RuntimeError("disk full"))

        record = caplog.records[-1]
        assert record.error_type == "RuntimeError"
        assert record.error_msg == "disk full"


class TestCorrelationScope:
    def test_scope_should_bind_and_restore(self) -> None:
        assert get_correlation_id() == ""

        with correlation_scope("req-1") as outer:
            assert outer == "req-1"
            with correlation_scope("job-2"):
                assert get_correlation_id() == "job-2"
            assert get_correlation_id() == "req-1"

        assert get_correlation_id() == ""

    def test_scope_should_generate_id_when_missing(self) -> None:
        with correlation_scope(None) as value:
            assert value
            assert get_correlation_id() == value

    def test_filter_should_stamp_records(self) -> None:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", (), None)

        with correlation_scope("req-9"):
            CorrelationIdFilter().filter(record)

        assert record.correlation_id == "req-9"


class TestExceptionContext:
    def test_none_context_should_be_dropped(self) -> None:
        error = StorageError("Failed", storage_key=None, details={"attempt": 2})

        assert error.details == {"attempt": 2}
        assert str(error) == "Failed | Details: {'attempt': 2}"
