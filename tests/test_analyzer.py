# ===============================================
# tests/test_analyzer.py
# End-to-end analysis pipeline with fakes:
# fetch -> extract -> retrieve -> score -> persist -> cache.
# ===============================================

import json

import pytest

from seo_agent.analysis import SeoAnalyzer
from seo_agent.analysis.analyzer import cache_key
from seo_agent.errors import CacheError, EmbeddingError, FetchError, InvalidInputError
from seo_agent.search import Retriever
from seo_agent.search.retriever import join_texts

from conftest import FailingEmbedder


def test_analyze_short_page(analyzer, db, cache):
    result = analyzer.analyze("https://short.example/")

    assert result.url == "https://short.example/"
    assert result.page_features.title == "Short"
    assert result.score == 45
    assert len(result.recommendations) == 10
    assert 0 < len(result.retrieved_context) <= 500

    rows = db.list_recent()
    assert len(rows) == 1
    row = rows[0]
    assert row["url"] == "https://short.example/"
    assert row["score"] == 45
    assert json.loads(row["analysis_data"])["title"] == "Short"
    assert [r["priority"] for r in json.loads(row["recommendations"])][:2] == ["High", "High"]
    assert row["created_at"]

    cached = json.loads(cache.get(cache_key("https://short.example/")))
    assert cached == result.to_dict()


def test_retrieved_context_is_a_prefix_of_the_full_join(analyzer, retriever):
    result = analyzer.analyze("https://good.example/")
    query = f"SEO analysis for: {result.page_features.title}. Meta: {result.page_features.meta_description}"
    full = join_texts(retriever.retrieve(query, 10))
    assert len(full) > 500
    assert result.retrieved_context == full[:500]
    assert result.score == 100


def test_second_call_within_ttl_is_served_from_cache(analyzer, fetcher, db):
    first, cached_first = analyzer.analyze_cached("https://short.example/")
    second, cached_second = analyzer.analyze_cached("https://short.example/")

    assert cached_first is False
    assert cached_second is True
    assert second.to_dict() == first.to_dict()
    assert json.dumps(second.to_dict()) == json.dumps(first.to_dict())
    assert fetcher.calls == ["https://short.example/"]
    assert len(db.list_recent()) == 1


def test_expired_cache_entry_triggers_fresh_analysis(analyzer, fetcher, clock, db):
    analyzer.analyze_cached("https://short.example/")
    clock.advance(3601)
    _, cached = analyzer.analyze_cached("https://short.example/")

    assert cached is False
    assert len(fetcher.calls) == 2
    assert len(db.list_recent()) == 2


def test_reanalysis_adds_a_new_row(analyzer, db):
    analyzer.analyze("https://good.example/")
    analyzer.analyze("https://good.example/")
    ids = [r["id"] for r in db.list_recent()]
    assert len(ids) == 2
    assert len(set(ids)) == 2


def test_fetch_failure_leaves_nothing_behind(analyzer, db, cache):
    with pytest.raises(FetchError):
        analyzer.analyze("https://down.example/")
    assert db.list_recent() == []
    assert cache.get(cache_key("https://down.example/")) is None


def test_retrieval_failure_leaves_nothing_behind(fetcher, index, db, cache):
    broken = SeoAnalyzer(fetcher=fetcher, retriever=Retriever(FailingEmbedder(), index), db=db, cache=cache)
    with pytest.raises(EmbeddingError):
        broken.analyze("https://short.example/")
    assert db.list_recent() == []
    assert cache.get(cache_key("https://short.example/")) is None


@pytest.mark.parametrize("url", ["", "   ", None, "ftp://files.example/", "not a url"])
def test_invalid_url_rejected_before_fetch(analyzer, fetcher, url):
    with pytest.raises(InvalidInputError):
        analyzer.analyze_cached(url)
    assert fetcher.calls == []


@pytest.mark.parametrize("raw", ["not json", '{"url": "https://short.example/"}', "[1, 2]"])
def test_unreadable_cache_entry_is_cache_error(analyzer, cache, fetcher, raw):
    cache.set(cache_key("https://short.example/"), raw, 3600)
    with pytest.raises(CacheError, match="short.example"):
        analyzer.analyze_cached("https://short.example/")
    assert fetcher.calls == []
