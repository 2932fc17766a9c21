# Client for Ollama local inference.
# Accepts a model name and exposes generate(messages, params).

import requests
from typing import List, Tuple, Dict, Any

from seo_agent.settings import settings
from ..types import Message, ModelParams


class OllamaClient:
    def __init__(self, model: str = "mistral:7b-instruct", host: str | None = None):
        self.model = model
        self.host = host or settings.OLLAMA_HOST

    def generate(self, messages: List[Message], params: ModelParams) -> Tuple[str, Dict[str, Any]]:
        payload = {
            "model": self.model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "stream": False,
            "options": {
                "temperature": float(params.temperature if params.temperature is not None else 0.3),
                "num_predict": int(params.max_tokens if params.max_tokens is not None else 1024),
            },
        }
        url = f"{self.host}/api/chat"
        resp = requests.post(url, json=payload, timeout=180)
        resp.raise_for_status()
        data = resp.json()
        text = (data.get("message") or {}).get("content", "")
        return text.strip(), {"engine": "ollama", "model": self.model}
