# ===============================================
# Shared fixtures: no network, no model downloads.
# Embeddings come from the deterministic hashing backend,
# storage lives in tmp_path SQLite files.
# ===============================================

import pytest

from seo_agent.analysis import SeoAnalyzer
from seo_agent.assistant import SeoAssistant
from seo_agent.errors import FetchError
from seo_agent.generate import ChatGenerator
from seo_agent.search import FaissKnowledgeIndex, HashingEmbedder, Retriever, seed_index
from seo_agent.storage import Database, TTLCache

SHORT_PAGE = "<html><head><title>Short</title></head><body></body></html>"

GOOD_PAGE = """<!DOCTYPE html>
<html>
<head>
  <title>Handmade Oak Kitchen Tables | Free UK Delivery Available</title>
  <meta name="description" content="Browse solid oak kitchen tables built to order in our Yorkshire workshop. Choose a size and finish, then get free delivery anywhere in the UK mainland.">
</head>
<body>
  <h1>Oak Kitchen Tables</h1>
  <h2>Sizes</h2>
  <h2>Finishes</h2>
  <h3>Care</h3>
  <img src="/img/table-1.jpg"><img src="/img/table-2.jpg">
  <a href="/">Home</a> <a href="/chairs">Chairs</a> <a href="/contact">Contact</a>
  <a href="https://example.org/reviews">Reviews</a>
</body>
</html>
"""


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeFetcher:
    """Serves canned pages and counts calls; unknown URLs are unreachable."""

    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.calls = []

    def fetch(self, url: str) -> str:
        self.calls.append(url)
        if url not in self.pages:
            raise FetchError(f"Failed to fetch {url}: connection refused")
        return self.pages[url]


class RecordingClient:
    """Model client that records every message list it receives."""

    def __init__(self, reply: str = "Use descriptive titles and meta descriptions."):
        self.model = "recording"
        self.reply = reply
        self.calls = []

    def generate(self, messages, params):
        self.calls.append(list(messages))
        return self.reply, {"engine": "recording"}


class FailingEmbedder:
    def embed(self, text):
        raise RuntimeError("embedding service unavailable")


@pytest.fixture
def embedder():
    return HashingEmbedder(dim=256)


@pytest.fixture
def index(embedder):
    idx = FaissKnowledgeIndex()
    seed_index(idx, embedder)
    return idx


@pytest.fixture
def retriever(embedder, index):
    return Retriever(embedder=embedder, index=index)


@pytest.fixture
def db(tmp_path):
    d = Database(str(tmp_path / "db" / "seo_agent.db"))
    d.init_schema()
    return d


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(tmp_path, clock):
    return TTLCache(str(tmp_path / "cache" / "cache.sqlite"), clock=clock)


@pytest.fixture
def fetcher():
    return FakeFetcher({
        "https://short.example/": SHORT_PAGE,
        "https://good.example/": GOOD_PAGE,
    })


@pytest.fixture
def analyzer(fetcher, retriever, db, cache):
    return SeoAnalyzer(fetcher=fetcher, retriever=retriever, db=db, cache=cache,
                       top_k=10, cache_ttl=3600, context_chars=500)


@pytest.fixture
def model_client():
    return RecordingClient()


@pytest.fixture
def assistant(retriever, db, model_client):
    return SeoAssistant(retriever=retriever, db=db, generator=ChatGenerator(model_client=model_client), top_k=5)
