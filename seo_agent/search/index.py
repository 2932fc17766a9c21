"""FAISS vector index over the knowledge corpus.

Cosine similarity via inner product on L2-normalized vectors (IndexFlatIP).
Metadata lives in a sidecar list aligned with FAISS row order:

  {index_path}            : FAISS index binary via faiss.write_index
  {index_path}.meta.json  : JSON list of {id, category, text, source} in row order

Query results are re-sorted by (score desc, insertion row asc), so equal
scores always come back in insertion order.

A single FaissKnowledgeIndex is shared by request handlers, so reads and
writes go through `lock` (reentrant, so callers can hold it across a batch).
"""

from __future__ import annotations

import json
import os
import threading
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from seo_agent.errors import VectorIndexError
from seo_agent.log import get_logger

from .types import KnowledgeEntry, RetrievalMatch

logger = get_logger("seo_agent.index")


# ---- Lazy import FAISS to avoid heavy import cost if not used ----
def _import_faiss():
    try:
        import faiss  # type: ignore
        return faiss
    except Exception as e:
        raise RuntimeError(
            "FAISS is required for vector indexing. Install `faiss-cpu` "
            "e.g. `pip install faiss-cpu`."
        ) from e


def _as_row(vector: Sequence[float]) -> np.ndarray:
    x = np.asarray(vector, dtype=np.float32).reshape(1, -1)
    norm = max(float(np.linalg.norm(x)), 1e-12)
    return np.ascontiguousarray(x / norm, dtype=np.float32)


class FaissKnowledgeIndex:
    def __init__(self, dim: Optional[int] = None):
        self._index = None
        self._meta: List[Dict[str, Any]] = []
        self._ids: Dict[str, int] = {}
        self.lock = threading.RLock()
        if dim is not None:
            self._create(dim)

    def _create(self, dim: int) -> None:
        faiss = _import_faiss()
        self._index = faiss.IndexFlatIP(int(dim))

    # -------------------------
    # Introspection
    # -------------------------
    def __len__(self) -> int:
        return len(self._meta)

    def __contains__(self, entry_id: str) -> bool:
        return entry_id in self._ids

    # -------------------------
    # Write path (append-only)
    # -------------------------
    def insert(self, entry_id: str, vector: Sequence[float], metadata: Dict[str, Any]) -> None:
        with self.lock:
            self._insert(entry_id, vector, metadata)

    def _insert(self, entry_id: str, vector: Sequence[float], metadata: Dict[str, Any]) -> None:
        if entry_id in self._ids:
            raise VectorIndexError(f"Duplicate knowledge entry id: {entry_id}")
        row = _as_row(vector)
        if self._index is None:
            self._create(row.shape[1])
        if row.shape[1] != self._index.d:
            raise VectorIndexError(f"Vector dim {row.shape[1]} != index dim {self._index.d}")
        try:
            self._index.add(row)
        except Exception as e:
            raise VectorIndexError(f"FAISS insert failed: {e}") from e
        self._ids[entry_id] = len(self._meta)
        self._meta.append({**metadata, "id": entry_id})

    # -------------------------
    # Read path
    # -------------------------
    def query(self, vector: Sequence[float], top_k: int, include_vectors: bool = False) -> List[RetrievalMatch]:
        with self.lock:
            return self._query(vector, top_k, include_vectors)

    def _query(self, vector: Sequence[float], top_k: int, include_vectors: bool) -> List[RetrievalMatch]:
        if top_k <= 0 or not self._meta:
            return []
        q = _as_row(vector)
        if q.shape[1] != self._index.d:
            raise VectorIndexError(f"Query dim {q.shape[1]} != index dim {self._index.d}")

        k = min(top_k, len(self._meta))
        try:
            D, I = self._index.search(q, k)
        except Exception as e:
            raise VectorIndexError(f"FAISS search failed: {e}") from e

        hits = []
        for sim, row in zip(D[0].tolist(), I[0].tolist()):
            if 0 <= row < len(self._meta):
                hits.append((float(sim), int(row)))
        hits.sort(key=lambda h: (-h[0], h[1]))

        return [RetrievalMatch(entry=self._entry(row, include_vectors), score=sim) for sim, row in hits]

    def _entry(self, row: int, include_vector: bool) -> KnowledgeEntry:
        m = self._meta[row]
        vec = self._index.reconstruct(row).tolist() if include_vector else None
        return KnowledgeEntry(
            id=m["id"],
            category=m.get("category", ""),
            text=m.get("text", ""),
            source=m.get("source", ""),
            vector=vec,
        )

    # -------------------------
    # Persistence
    # -------------------------
    def save(self, index_path: str) -> None:
        with self.lock:
            self._save(index_path)

    def _save(self, index_path: str) -> None:
        if self._index is None:
            raise VectorIndexError("Cannot save an empty index")
        faiss = _import_faiss()
        os.makedirs(os.path.dirname(os.path.abspath(index_path)), exist_ok=True)
        faiss.write_index(self._index, index_path)
        with open(f"{index_path}.meta.json", "w", encoding="utf-8") as fh:
            json.dump(self._meta, fh, ensure_ascii=False)
        logger.info("Saved FAISS index: %s (ntotal=%d)", index_path, self._index.ntotal)

    @classmethod
    def load(cls, index_path: str) -> "FaissKnowledgeIndex":
        faiss = _import_faiss()
        if not os.path.exists(index_path):
            raise FileNotFoundError(f"FAISS index not found: {index_path}")
        meta_path = f"{index_path}.meta.json"
        if not os.path.exists(meta_path):
            raise FileNotFoundError(f"FAISS metadata sidecar not found: {meta_path}")

        inst = cls()
        inst._index = faiss.read_index(index_path)
        with open(meta_path, "r", encoding="utf-8") as fh:
            inst._meta = json.load(fh)

        # Basic sanity: vector count should match metadata length
        if inst._index.ntotal != len(inst._meta):
            raise VectorIndexError(
                f"FAISS index size ({inst._index.ntotal}) does not match metadata ({len(inst._meta)})"
            )
        inst._ids = {m["id"]: row for row, m in enumerate(inst._meta)}
        return inst

    @classmethod
    def load_or_create(cls, index_path: str) -> "FaissKnowledgeIndex":
        if os.path.exists(index_path):
            return cls.load(index_path)
        logger.info("No FAISS index at %s; starting empty", index_path)
        return cls()
