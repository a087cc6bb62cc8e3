"""
Document storage configuration settings.

Selects where uploaded files live: a local directory for development or an
S3 bucket for deployed environments.

Dependencies: pydantic, pydantic_settings
System role: Raw document storage configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from course_qa.configs.base import BaseSettings


class StorageSettings(BaseSettings):
    """Uploaded document storage configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STORAGE_",
        case_sensitive=False,
        extra="ignore",
    )

    backend: str = Field(
        default="local",
        description="Storage backend: 'local' for a directory, 's3' for an S3 bucket",
    )
    local_root: str = Field(
        default="./data/uploads",
        description="Root directory for the local storage backend",
    )
    s3_bucket: str = Field(
        default="course-qa-documents",
        description="S3 bucket for raw document storage",
    )
    s3_region: str = Field(default="us-east-1", description="AWS region of the S3 bucket")
    s3_prefix: str = Field(default="", description="Key prefix prepended to every storage key")
