"""
Vector store configuration settings.

Manages the local FAISS index location and the embedding provider used to
produce vectors for both chunks and queries.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for retrieval
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from course_qa.configs.base import BaseSettings


class VectorStoreSettings(BaseSettings):
    """Vector index and embedding provider configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    index_dir: str = Field(
        default="./data/faiss_index",
        description="Directory holding one FAISS index file per course",
    )

    embedding_provider: str = Field(
        default="google",
        description="Embedding provider: 'google' (Gemini) or 'bedrock' (Titan)",
    )
    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Embedding model ID for the selected provider",
    )
    embedding_dimension: int = Field(
        default=1024,
        description="Embedding vector dimension",
    )
    embedding_region: str = Field(
        default="us-east-1",
        description="AWS region for Bedrock embeddings",
    )
    embed_batch_size: int = Field(
        default=64,
        description="Number of chunk texts sent per embedding call",
        ge=1,
    )
