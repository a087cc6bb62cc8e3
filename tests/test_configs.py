"""
Tests for settings loading from the environment.
"""

import pytest
from pydantic import ValidationError

from course_qa.configs import Settings
from course_qa.configs.database import DatabaseSettings
from course_qa.configs.ingestion import IngestionSettings
from course_qa.configs.retrieval import RetrievalSettings


class TestSettings:
    def test_defaults(self, monkeypatch) -> None:
        for name in ["RETRIEVAL_MIN_SCORE", "RETRIEVAL_TOP_K", "INGESTION_CHUNK_SIZE"]:
            monkeypatch.delenv(name, raising=False)

        settings = Settings()

        assert settings.retrieval.top_k == 6
        assert settings.retrieval.max_top_k == 50
        assert settings.retrieval.min_score == 0.5
        assert settings.ingestion.chunk_size == 1000
        assert settings.ingestion.chunk_overlap == 200
        assert settings.ingestion.max_upload_bytes == 50 * 1024 * 1024

    def test_prefixed_environment_should_override(self, monkeypatch) -> None:
        monkeypatch.setenv("RETRIEVAL_MIN_SCORE", "0.35")
        monkeypatch.setenv("INGESTION_WORKERS", "4")

        assert RetrievalSettings().min_score == 0.35
        assert IngestionSettings().workers == 4

    def test_overlap_must_be_smaller_than_chunk_size(self) -> None:
        with pytest.raises(ValidationError):
            IngestionSettings(chunk_size=100, chunk_overlap=100)

    def test_database_url_override_should_switch_to_sqlite(self) -> None:
        database = DatabaseSettings(url="sqlite+aiosqlite:///./local.db")

        assert database.is_sqlite
        assert database.async_database_url == "sqlite+aiosqlite:///./local.db"

    def test_postgres_url_should_use_asyncpg(self) -> None:
        database = DatabaseSettings(url=None, host="db", user="u", password="p", db="qa")

        assert database.async_database_url.startswith("postgresql+asyncpg://u:p@db:5432/qa")
        assert not database.is_sqlite
