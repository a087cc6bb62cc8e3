"""
Embedding provider factory.

Selects the embedding provider based on VECTOR_STORE_EMBEDDING_PROVIDER:
- 'google': Gemini embeddings with a fixed output dimension
- 'bedrock': Amazon Titan v2 embeddings through Bedrock

Dependencies: langchain_core, langchain_google_genai, langchain_aws
System role: Embedding provider selection
"""

import logging

from langchain_core.embeddings import Embeddings

from course_qa.configs.vector_store import VectorStoreSettings

logger = logging.getLogger(__name__)


def get_embeddings(settings: VectorStoreSettings) -> Embeddings:
    """
    Build the configured embedding provider.

    Imports are deferred so only the selected provider's SDK is loaded.

    Args:
        settings: Vector store settings

    Returns:
        Embeddings: LangChain embeddings instance

    Raises:
        ValueError: For an unknown provider name
    """
    provider = settings.embedding_provider.lower()
    logger.info(
        "Initializing embeddings",
        extra={"provider": provider, "model": settings.embedding_model},
    )

    if provider == "google":
        from course_qa.boundary.embeddings.embeddings_wrapper import FixedDimensionEmbeddings

        return FixedDimensionEmbeddings(
            model=settings.embedding_model,
            output_dimensionality=settings.embedding_dimension,
        )

    if provider == "bedrock":
        from langchain_aws import BedrockEmbeddings

        return BedrockEmbeddings(
            model_id=settings.embedding_model,
            region_name=settings.embedding_region,
            model_kwargs={"dimensions": settings.embedding_dimension, "normalize": True},
        )

    raise ValueError(f"Unknown embedding provider: {settings.embedding_provider}")
