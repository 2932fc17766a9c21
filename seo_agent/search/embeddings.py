# Text -> vector backends.
# Every backend exposes embed(text) -> 1-D float32 unit vector.
# Failures are raised as EmbeddingError; no backend substitutes a fallback vector.

from __future__ import annotations

import hashlib
import os
import re

import numpy as np
import requests

from seo_agent.errors import EmbeddingError
from seo_agent.settings import settings

# Silence tokenizer parallelism warnings
os.environ.setdefault("TOKENIZERS_PARALLELISM", "false")

_TOKEN = re.compile(r"[0-9a-z]+")


def _l2_normalize(x: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    norm = max(float(np.linalg.norm(x)), eps)
    return (x / norm).astype(np.float32, copy=False)


class SentenceTransformerEmbedder:
    """Local SBERT model, loaded lazily on first use."""

    def __init__(self, model_name: str | None = None, device: str | None = None):
        self.model_name = model_name or settings.EMBED_MODEL_NAME
        self.device = device or settings.EMBED_DEVICE
        self._model = None

    def _get_model(self):
        if self._model is None:
            from sentence_transformers import SentenceTransformer  # heavy import delayed

            self._model = SentenceTransformer(self.model_name, device=self.device)
        return self._model

    def embed(self, text: str) -> np.ndarray:
        try:
            vec = self._get_model().encode(
                [text],
                convert_to_numpy=True,
                normalize_embeddings=False,
                show_progress_bar=False,
            )[0]
        except Exception as e:
            raise EmbeddingError(f"sentence-transformers embedding failed: {e}") from e
        return _l2_normalize(np.asarray(vec, dtype=np.float32))


class OllamaEmbedder:
    """Embeddings from an Ollama server (/api/embeddings)."""

    def __init__(self, model: str | None = None, host: str | None = None, timeout: float = 30):
        self.model = model or settings.OLLAMA_EMBED_MODEL
        self.host = host or settings.OLLAMA_HOST
        self.timeout = timeout

    def embed(self, text: str) -> np.ndarray:
        url = f"{self.host}/api/embeddings"
        try:
            resp = requests.post(url, json={"model": self.model, "prompt": text}, timeout=self.timeout)
            resp.raise_for_status()
            vec = np.array(resp.json()["embedding"], dtype="float32")
        except (requests.RequestException, KeyError, ValueError) as e:
            raise EmbeddingError(f"Ollama embedding failed: {e}") from e
        return _l2_normalize(vec)


class HashingEmbedder:
    """
    Deterministic bag-of-words feature hashing.
    No model download; identical text always maps to the identical vector.
    Used for local dev and in tests.
    """

    def __init__(self, dim: int | None = None):
        self.dim = int(dim or settings.EMBED_DIM)
        if self.dim <= 0:
            raise ValueError("dim must be positive")

    def embed(self, text: str) -> np.ndarray:
        vec = np.zeros(self.dim, dtype=np.float32)
        for token in _TOKEN.findall((text or "").lower()):
            digest = hashlib.sha1(token.encode("utf-8")).digest()
            bucket = int.from_bytes(digest[:4], "big") % self.dim
            sign = 1.0 if digest[4] & 1 else -1.0
            vec[bucket] += sign
        return _l2_normalize(vec)


def build_embedder(backend: str | None = None):
    backend = (backend or settings.EMBED_BACKEND).lower()
    if backend == "sentence-transformers":
        return SentenceTransformerEmbedder()
    if backend == "ollama":
        return OllamaEmbedder()
    if backend == "hashing":
        return HashingEmbedder()
    raise ValueError(f"Unknown EMBED_BACKEND: {backend}")
