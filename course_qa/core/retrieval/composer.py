"""
Grounded answer composer.

Builds an extractive answer from the sentences of retrieved chunks that
share the most terms with the query. Nothing outside the retrieved text
is ever added, so every statement in the answer is backed by a citation.

Dependencies: re
System role: Answer generation from retrieved context
"""

import re

from course_qa.core.retrieval.models import RetrievedChunk

NOT_FOUND_ANSWER = (
    "I did not find this in your materials. Please try rephrasing your question "
    "or check if the relevant documents have been uploaded."
)

_SENTENCE_SPLIT = re.compile(r"(?<=[.!?])\s+|\n{2,}|\n(?=[-*•])")
_TOKEN = re.compile(r"[a-z0-9]+")
_WHITESPACE = re.compile(r"\s+")

STOPWORDS = frozenset(
    """
    a an and are as at be by can do does for from how i in is it its me my of on or
    that the their there these this to was what when where which who why will with
    you your about explain describe define tell please
    """.split()
)


def tokenize(text: str) -> list[str]:
    """Lowercase word tokens without stopwords or single characters."""
    return [t for t in _TOKEN.findall(text.lower()) if len(t) > 1 and t not in STOPWORDS]


class AnswerComposer:
    """Compose an extractive answer from retrieved chunks."""

    def __init__(self, max_sentences: int = 3, min_sentence_chars: int = 20) -> None:
        """
        Initialize composer.

        Args:
            max_sentences: Upper bound on sentences in the answer
            min_sentence_chars: Fragments shorter than this are ignored
        """
        self._max_sentences = max_sentences
        self._min_sentence_chars = min_sentence_chars

    def compose(self, query: str, chunks: list[RetrievedChunk]) -> str:
        """
        Compose an answer grounded in the given chunks.

        Sentences are ranked by distinct query-term overlap, then by the
        rank of their chunk, then by position, and emitted in reading order
        (chunk rank, position). With no overlap anywhere, the opening of the
        best chunk is used.

        Args:
            query: User question
            chunks: Retrieved chunks, best first

        Returns:
            str: Answer text, or NOT_FOUND_ANSWER when chunks is empty
        """
        if not chunks:
            return NOT_FOUND_ANSWER

        terms = set(tokenize(query))
        candidates: list[tuple[int, int, int, str]] = []
        seen: set[str] = set()
        for rank, chunk in enumerate(chunks):
            for position, sentence in enumerate(self.split_sentences(chunk.content)):
                key = sentence.lower()
                if key in seen:
                    continue
                seen.add(key)
                overlap = len(terms.intersection(tokenize(sentence)))
                candidates.append((overlap, rank, position, sentence))

        if not candidates:
            return _WHITESPACE.sub(" ", chunks[0].content).strip()

        relevant = [c for c in candidates if c[0] > 0]
        if not relevant:
            best_rank = min(c[1] for c in candidates)
            opening = [c for c in candidates if c[1] == best_rank][: self._max_sentences]
            return " ".join(c[3] for c in opening)

        relevant.sort(key=lambda c: (-c[0], c[1], c[2]))
        chosen = sorted(relevant[: self._max_sentences], key=lambda c: (c[1], c[2]))
        return " ".join(c[3] for c in chosen)

    def split_sentences(self, text: str) -> list[str]:
        """Split chunk text into whitespace-normalised sentences."""
        sentences = []
        for piece in _SENTENCE_SPLIT.split(text):
            sentence = _WHITESPACE.sub(" ", piece).strip()
            if len(sentence) >= self._min_sentence_chars:
                sentences.append(sentence)
        return sentences
