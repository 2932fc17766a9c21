# Embedding-ranked retrieval over the knowledge index.
# retrieve(query, top_k) -> at most top_k matches, non-increasing score.
# Embedding and index failures propagate; nothing is masked.

from __future__ import annotations

from typing import List

from seo_agent.errors import EmbeddingError, InvalidInputError, VectorIndexError
from seo_agent.log import get_logger

from .index import FaissKnowledgeIndex
from .types import RetrievalMatch

logger = get_logger("seo_agent.retriever")


class Retriever:
    def __init__(self, embedder, index: FaissKnowledgeIndex):
        self.embedder = embedder
        self.index = index

    def retrieve(self, query: str, top_k: int) -> List[RetrievalMatch]:
        if top_k <= 0:
            raise InvalidInputError(f"top_k must be positive, got {top_k}")
        try:
            qvec = self.embedder.embed(query)
        except EmbeddingError:
            raise
        except Exception as e:
            raise EmbeddingError(f"Embedding failed: {e}") from e

        try:
            matches = self.index.query(qvec, top_k)
        except VectorIndexError:
            raise
        except Exception as e:
            raise VectorIndexError(f"Vector query failed: {e}") from e

        logger.debug("Retrieved %d/%d matches for %r", len(matches), top_k, query[:80])
        return matches


def join_texts(matches: List[RetrievalMatch]) -> str:
    """Matched passages separated by blank lines, empty texts dropped."""
    return "\n\n".join(m.entry.text for m in matches if m.entry.text)


def unique_sources(matches: List[RetrievalMatch]) -> List[str]:
    seen = []
    for m in matches:
        src = m.entry.source or "Unknown"
        if src not in seen:
            seen.append(src)
    return seen
