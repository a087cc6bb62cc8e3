"""
Shared settings base.

Every settings group reads ``.env`` and ignores unknown keys; groups add
their own ``env_prefix``. The process-wide fields (``ENVIRONMENT``,
``DEBUG``, ``LOG_LEVEL``) are unprefixed.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

Environment = Literal["development", "test", "staging", "production"]


class BaseSettings(PydanticBaseSettings):
    """Settings base carrying the process-wide fields."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Environment = Field(default="development", description="Deployment environment")
    debug: bool = Field(default=False, description="Auto-reload the dev server")
    log_level: str = Field(default="INFO", description="Root log level name")

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @property
    def is_development(self) -> bool:
        return self.environment == "development"
