"""
Configuration settings for the ingestion pipeline.

Provides environment-based configuration for chunking, upload limits and
the background worker pool.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from pydantic import Field, model_validator
from pydantic_settings import SettingsConfigDict

from course_qa.configs.base import BaseSettings


class IngestionSettings(BaseSettings):
    """Settings for document ingestion."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INGESTION_",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking settings
    chunk_size: int = Field(
        default=1000,
        description="Maximum chunk size in characters",
        ge=1,
    )
    chunk_overlap: int = Field(
        default=200,
        description="Overlap between consecutive chunks",
        ge=0,
    )

    # Worker pool
    workers: int = Field(default=2, description="Concurrent ingestion workers", ge=1)
    timeout_s: float = Field(
        default=600.0,
        description="Upper bound for a single document ingestion in seconds",
        gt=0,
    )

    max_upload_bytes: int = Field(
        default=50 * 1024 * 1024,
        description="Maximum accepted upload size (50MB)",
    )

    @model_validator(mode="after")
    def _overlap_smaller_than_chunk(self) -> "IngestionSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        return self
