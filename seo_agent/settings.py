import os
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # core
    APP_NAME: str = Field(default="SEO Agent")
    ENV: str = Field(default=os.getenv("APP_ENV", "dev"))
    DEBUG: bool = Field(default=True)
    LOG_LEVEL: str = Field(default="INFO")

    # storage
    DB_PATH: str = Field(default="data/db/seo_agent.db")
    CACHE_DB_PATH: str = Field(default="data/cache/analysis_cache.sqlite")
    FAISS_PATH: str = Field(default="data/index/knowledge.index")
    CACHE_TTL_SECONDS: int = Field(default=3600)
    HISTORY_LIMIT: int = Field(default=10)

    # analysis / retrieval
    ANALYSIS_TOP_K: int = Field(default=10)
    CHAT_TOP_K: int = Field(default=5)
    CONTEXT_PREVIEW_CHARS: int = Field(default=500)
    FETCH_TIMEOUT: float = Field(default=15.0)
    USER_AGENT: str = Field(
        default="Mozilla/5.0 (compatible; SEOAgent/1.0; +https://example.invalid/seo-agent)"
    )

    # embeddings: sentence-transformers | ollama | hashing
    EMBED_BACKEND: str = Field(default="sentence-transformers")
    EMBED_MODEL_NAME: str = Field(default="BAAI/bge-base-en-v1.5")
    EMBED_DEVICE: str = Field(default="cpu")
    EMBED_DIM: int = Field(default=384)

    # generation
    USE_OLLAMA: bool = Field(default=False)
    OLLAMA_HOST: str = Field(default="http://localhost:11434")
    OLLAMA_MODEL: str = Field(default="mistral:7b-instruct")
    OLLAMA_EMBED_MODEL: str = Field(default="bge-m3:latest")
    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = Field(default="gpt-4o-mini")
    CHAT_MAX_TOKENS: int = Field(default=1024)

    # http
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    # read root-level .env.dev
    model_config = SettingsConfigDict(
        env_file=".env.dev",
        extra="ignore",
    )

    @property
    def app_name(self) -> str:
        return self.APP_NAME


settings = Settings()
