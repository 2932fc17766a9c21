"""Single-URL analysis pipeline.

analyze(url) runs, in order and without overlap:
  1. fetch the page             (FetchError on any transport problem)
  2. extract PageFeatures
  3. retrieve knowledge passages for the title + description
  4. score the features         (rule-based, never generated)
  5. persist to the durable store
  6. cache the full result under "analysis:<url>"

Nothing is persisted or cached unless every earlier step succeeded.
analyze_cached(url) puts the cache in front: a hit is returned verbatim
and none of the steps above run.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Optional, Tuple

from seo_agent.errors import CacheError
from seo_agent.log import get_logger
from seo_agent.search.retriever import Retriever, join_texts
from seo_agent.settings import settings

from .extractor import extract_features
from .fetcher import PageFetcher, validate_url
from .scoring import evaluate
from .types import AnalysisResult, PageFeatures

if TYPE_CHECKING:
    from seo_agent.storage.cache import TTLCache
    from seo_agent.storage.db import Database

logger = get_logger("seo_agent.analyzer")


def cache_key(url: str) -> str:
    return f"analysis:{url}"


def build_query(features: PageFeatures) -> str:
    return f"SEO analysis for: {features.title}. Meta: {features.meta_description}"


class SeoAnalyzer:
    def __init__(
        self,
        fetcher: PageFetcher,
        retriever: Retriever,
        db: Database,
        cache: TTLCache,
        top_k: int | None = None,
        cache_ttl: int | None = None,
        context_chars: int | None = None,
    ):
        self.fetcher = fetcher
        self.retriever = retriever
        self.db = db
        self.cache = cache
        self.top_k = top_k or settings.ANALYSIS_TOP_K
        self.cache_ttl = cache_ttl or settings.CACHE_TTL_SECONDS
        self.context_chars = context_chars or settings.CONTEXT_PREVIEW_CHARS

    # -------------------------
    # Cache
    # -------------------------
    def lookup(self, url: str) -> Optional[AnalysisResult]:
        raw = self.cache.get(cache_key(url))
        if raw is None:
            logger.info("Cache miss: %s", url)
            return None
        logger.info("Cache hit: %s", url)
        try:
            return AnalysisResult.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            raise CacheError(f"Unreadable cache entry for {url}: {e}") from e

    # -------------------------
    # Pipeline
    # -------------------------
    def analyze(self, url: str) -> AnalysisResult:
        url = validate_url(url)
        logger.info("Analyzing %s", url)

        html = self.fetcher.fetch(url)
        features = extract_features(html)

        matches = self.retriever.retrieve(build_query(features), self.top_k)
        context = join_texts(matches)

        card = evaluate(features)
        result = AnalysisResult(
            url=url,
            page_features=features,
            score=card.score,
            issues=tuple(card.issues),
            recommendations=tuple(card.recommendations),
            retrieved_context=context[: self.context_chars],
        )

        row_id = self.db.save_analysis(result)
        self.cache.set(cache_key(url), json.dumps(result.to_dict(), ensure_ascii=False), self.cache_ttl)
        logger.info("Analysis #%d for %s: score=%d, %d issues", row_id, url, result.score, len(result.issues))
        return result

    def analyze_cached(self, url: str) -> Tuple[AnalysisResult, bool]:
        """Return (result, cached)."""
        url = validate_url(url)
        hit = self.lookup(url)
        if hit is not None:
            return hit, True
        return self.analyze(url), False
