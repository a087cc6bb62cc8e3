"""
Retrieval and answer composition settings.

min_score is a cosine-similarity floor. It is a starting value and should be
re-derived from the similarity distribution of the deployed embedding model.

Dependencies: pydantic, pydantic_settings
System role: Search behaviour configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from course_qa.configs.base import BaseSettings


class RetrievalSettings(BaseSettings):
    """Search defaults applied when callers do not override them."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RETRIEVAL_",
        case_sensitive=False,
        extra="ignore",
    )

    top_k: int = Field(default=6, description="Default number of chunks to retrieve", ge=1)
    max_top_k: int = Field(default=50, description="Upper bound accepted for topK", ge=1)
    min_score: float = Field(
        default=0.5,
        description="Minimum cosine similarity for a chunk to be cited",
        ge=-1.0,
        le=1.0,
    )
    snippet_chars: int = Field(default=300, description="Maximum snippet length in a citation")
    answer_max_sentences: int = Field(
        default=3,
        description="Maximum number of extracted sentences in a composed answer",
        ge=1,
    )
    search_timeout_s: float = Field(
        default=30.0,
        description="Upper bound for a single search in seconds",
        gt=0,
    )
