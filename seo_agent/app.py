# ============================================================
# SEO Agent FastAPI App
# ------------------------------------------------------------
# Thin HTTP layer over the core:
#   - /api/analyze   cache-first single-page SEO analysis
#   - /api/chat      RAG-grounded SEO assistant with session memory
#   - /api/history   recent analyses, passed through
#   - /api/knowledge/populate   seed the knowledge index
# ============================================================

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

# --- Local imports ---
from seo_agent.analysis import PageFetcher, SeoAnalyzer
from seo_agent.assistant import SeoAssistant
from seo_agent.errors import FetchError, InvalidInputError, SeoAgentError
from seo_agent.generate import ChatGenerator, build_model_client
from seo_agent.log import get_logger
from seo_agent.search import FaissKnowledgeIndex, Retriever, build_embedder, seed_index
from seo_agent.settings import settings
from seo_agent.storage import Database, TTLCache

logger = get_logger("seo_agent.app")


# ------------------------------------------------------------
# 🔧 Service wiring
# ------------------------------------------------------------
@dataclass
class Services:
    analyzer: SeoAnalyzer
    assistant: SeoAssistant
    db: Database
    index: FaissKnowledgeIndex
    embedder: Any


def build_services() -> Services:
    db = Database(settings.DB_PATH)
    db.init_schema()
    cache = TTLCache(settings.CACHE_DB_PATH)
    embedder = build_embedder()
    index = FaissKnowledgeIndex.load_or_create(settings.FAISS_PATH)
    retriever = Retriever(embedder=embedder, index=index)
    generator = ChatGenerator(model_client=build_model_client())
    logger.info("Services ready (knowledge entries=%d, engine=%s)", len(index), generator.engine)
    return Services(
        analyzer=SeoAnalyzer(fetcher=PageFetcher(), retriever=retriever, db=db, cache=cache),
        assistant=SeoAssistant(retriever=retriever, db=db, generator=generator),
        db=db,
        index=index,
        embedder=embedder,
    )


@lru_cache(maxsize=1)
def get_services() -> Services:
    return build_services()


# ------------------------------------------------------------
# 🚀 FastAPI init
# ------------------------------------------------------------
app = FastAPI(title="SEO Agent API", version="0.1")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _http_error(e: SeoAgentError) -> HTTPException:
    if isinstance(e, InvalidInputError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, FetchError):
        return HTTPException(status_code=502, detail=str(e))
    logger.exception("Request failed")
    return HTTPException(status_code=500, detail=str(e))


# ------------------------------------------------------------
# 📦 Pydantic models
# ------------------------------------------------------------
class AnalyzeRequest(BaseModel):
    url: Optional[str] = None


class AnalyzePayload(BaseModel):
    cached: bool
    data: Dict[str, Any]
    message: str


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: Optional[str] = None
    session_id: Optional[str] = Field(default="default", alias="sessionId")


class ChatPayload(BaseModel):
    response: str
    sources: List[str]


# ------------------------------------------------------------
# 🔎 Analysis
# ------------------------------------------------------------
@app.post("/api/analyze", response_model=AnalyzePayload)
def analyze(req: AnalyzeRequest, services: Services = Depends(get_services)):
    if not (req.url or "").strip():
        raise HTTPException(status_code=400, detail="URL is required")
    try:
        result, cached = services.analyzer.analyze_cached(req.url)
    except SeoAgentError as e:
        raise _http_error(e)
    return AnalyzePayload(
        cached=cached,
        data=result.to_dict(),
        message="Retrieved from cache" if cached else "Analysis complete",
    )


@app.get("/api/history")
def history(services: Services = Depends(get_services)):
    try:
        return services.db.list_recent(settings.HISTORY_LIMIT)
    except SeoAgentError as e:
        raise _http_error(e)


# ------------------------------------------------------------
# 💬 Chat
# ------------------------------------------------------------
@app.post("/api/chat", response_model=ChatPayload)
def chat(req: ChatRequest, services: Services = Depends(get_services)):
    if not (req.message or "").strip():
        raise HTTPException(status_code=400, detail="message is required")
    try:
        reply = services.assistant.chat(req.message, req.session_id or "default")
    except SeoAgentError as e:
        raise _http_error(e)
    return ChatPayload(response=reply.response, sources=reply.sources)


# ------------------------------------------------------------
# 📚 Knowledge index
# ------------------------------------------------------------
@app.post("/api/knowledge/populate")
def populate_knowledge(services: Services = Depends(get_services)):
    try:
        with services.index.lock:
            added = seed_index(services.index, services.embedder)
            if added:
                services.index.save(settings.FAISS_PATH)
    except SeoAgentError as e:
        raise _http_error(e)
    return {"success": True, "added": added, "total": len(services.index)}


# ------------------------------------------------------------
# 🧭 Health checks
# ------------------------------------------------------------
@app.get("/api/health")
def api_health():
    return {"status": "ok", "message": "SEO Agent is running"}


@app.get("/health")
def health():
    return {"status": "ok", "env": settings.ENV}


@app.get("/")
def hello():
    return {"message": f"{settings.app_name} service running."}
