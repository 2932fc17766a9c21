# Data models for the retrieval layer.

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class KnowledgeEntry:
    """One write-once passage of the SEO knowledge corpus."""
    id: str
    category: str
    text: str
    source: str
    vector: Optional[List[float]] = None

    def metadata(self) -> Dict[str, Any]:
        return {"id": self.id, "category": self.category, "text": self.text, "source": self.source}


@dataclass(frozen=True)
class RetrievalMatch:
    entry: KnowledgeEntry
    score: float
