# Makes the folder importable as a package.
# Exports the retrieval building blocks for convenience.

from .embeddings import HashingEmbedder, OllamaEmbedder, SentenceTransformerEmbedder, build_embedder
from .index import FaissKnowledgeIndex
from .knowledge import load_knowledge, seed_index
from .retriever import Retriever
from .types import KnowledgeEntry, RetrievalMatch

__all__ = [
    "Retriever",
    "FaissKnowledgeIndex",
    "KnowledgeEntry",
    "RetrievalMatch",
    "HashingEmbedder",
    "OllamaEmbedder",
    "SentenceTransformerEmbedder",
    "build_embedder",
    "load_knowledge",
    "seed_index",
]
