"""
Retrieval and answer composition.

Exports: Retriever, CitationBuilder, AnswerComposer, RetrievedChunk, NOT_FOUND_ANSWER
"""

from course_qa.core.retrieval.citation_builder import CitationBuilder
from course_qa.core.retrieval.composer import NOT_FOUND_ANSWER, AnswerComposer
from course_qa.core.retrieval.models import RetrievedChunk
from course_qa.core.retrieval.retriever import Retriever

__all__ = [
    "AnswerComposer",
    "CitationBuilder",
    "NOT_FOUND_ANSWER",
    "RetrievedChunk",
    "Retriever",
]
