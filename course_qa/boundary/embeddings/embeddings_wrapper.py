"""
Gemini embeddings pinned to one vector size and retrieval task types.

Chunks are embedded as RETRIEVAL_DOCUMENT and questions as RETRIEVAL_QUERY,
both at the dimension the course indexes were created with.

Dependencies: langchain_google_genai
System role: Google embedding provider
"""

import logging
from typing import Any, List

from langchain_google_genai import GoogleGenerativeAIEmbeddings

logger = logging.getLogger(__name__)

DOCUMENT_TASK_TYPE = "RETRIEVAL_DOCUMENT"
QUERY_TASK_TYPE = "RETRIEVAL_QUERY"


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """Google embeddings whose every call carries the configured dimension."""

    # The constructor argument is not applied by the base class.
    _output_dimensionality: int = 1024

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 1024,
        **kwargs,
    ) -> None:
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(
            "Google embeddings ready",
            extra={"model": model, "output_dimensionality": output_dimensionality},
        )

    def _call_options(
        self, task_type: str | None, default_task: str, dimension: int | None
    ) -> dict[str, Any]:
        return {
            "task_type": task_type or default_task,
            "output_dimensionality": dimension or self._output_dimensionality,
        }

    def embed_documents(
        self,
        texts: List[str],
        *,
        batch_size: int = 100,
        task_type: str | None = None,
        titles: List[str] | None = None,
        output_dimensionality: int | None = None,
    ) -> List[List[float]]:
        options = self._call_options(task_type, DOCUMENT_TASK_TYPE, output_dimensionality)
        return super().embed_documents(texts, batch_size=batch_size, titles=titles, **options)

    def embed_query(
        self,
        text: str,
        task_type: str | None = None,
        title: str | None = None,
        output_dimensionality: int | None = None,
    ) -> List[float]:
        options = self._call_options(task_type, QUERY_TASK_TYPE, output_dimensionality)
        return super().embed_query(text, title=title, **options)
