# Seed corpus loading and index population.

from __future__ import annotations

import os
from functools import lru_cache
from typing import List, Tuple

import yaml

from seo_agent.log import get_logger

from .index import FaissKnowledgeIndex
from .types import KnowledgeEntry

logger = get_logger("seo_agent.knowledge")

KNOWLEDGE_PATH = os.path.join(os.path.dirname(__file__), "knowledge.yaml")


@lru_cache(maxsize=4)
def load_knowledge(path: str = KNOWLEDGE_PATH) -> Tuple[KnowledgeEntry, ...]:
    """Read the knowledge corpus (knowledge.yaml in this folder by default)."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"knowledge corpus not found at {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or []
    return tuple(
        KnowledgeEntry(
            id=item.get("id") or f"kb-{item['category']}",
            category=item["category"],
            text=" ".join(item["text"].split()),
            source=item.get("source", "Unknown"),
        )
        for item in data
    )


def seed_index(index: FaissKnowledgeIndex, embedder, entries: List[KnowledgeEntry] | None = None) -> int:
    """Embed and insert every entry not already in `index`. Returns the number added."""
    added = 0
    with index.lock:
        for entry in entries if entries is not None else load_knowledge():
            if entry.id in index:
                continue
            index.insert(entry.id, embedder.embed(entry.text), entry.metadata())
            added += 1
            logger.info("Added: %s", entry.category)
    logger.info("Knowledge index has %d entries (%d new)", len(index), added)
    return added
