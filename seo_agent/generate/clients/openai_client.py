# Client for the OpenAI Chat Completions API.
# Same interface as OllamaClient.

from typing import List, Tuple, Dict, Any
from openai import OpenAI

from seo_agent.settings import settings
from ..types import Message, ModelParams


class OpenAIClient:
    def __init__(self, model: str = "gpt-4o-mini"):
        self.model = model
        self.client = OpenAI(api_key=settings.OPENAI_API_KEY)

    def generate(self, messages: List[Message], params: ModelParams) -> Tuple[str, Dict[str, Any]]:
        formatted = [{"role": m.role, "content": m.content} for m in messages]
        resp = self.client.chat.completions.create(
            model=self.model,
            messages=formatted,
            temperature=params.temperature if params.temperature is not None else 0.3,
            max_tokens=params.max_tokens if params.max_tokens is not None else 1024,
        )
        text = (resp.choices[0].message.content or "").strip()
        meta = {"engine": "openai", "model": self.model}
        return text, meta
