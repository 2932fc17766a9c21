# ChatGenerator: wraps any model client (Ollama, OpenAI, Echo) behind
# complete(system_instruction, user_message) -> text.
# The returned text is free-form and never parsed as structured data.

from __future__ import annotations
import os
from typing import Optional

import yaml

from seo_agent.errors import GenerationError
from seo_agent.settings import settings

from .types import Message, ModelParams

CONFIG_PATH = os.path.join(os.path.dirname(__file__), "config.yaml")


def build_model_client():
    """Ollama when USE_OLLAMA is set, OpenAI when a key is present, echo otherwise."""
    if settings.USE_OLLAMA:
        from .clients.ollama_client import OllamaClient
        return OllamaClient(model=settings.OLLAMA_MODEL)
    if settings.OPENAI_API_KEY:
        from .clients.openai_client import OpenAIClient
        return OpenAIClient(model=settings.OPENAI_MODEL)
    from .clients.echo_dev_client import EchoDevClient
    return EchoDevClient()


class ChatGenerator:
    def __init__(self, model_client, config_path: str = CONFIG_PATH):
        self.model_client = model_client
        self.config_path = config_path
        self.cfg = self._load_config()

    def _load_config(self):
        if not os.path.exists(self.config_path):
            return {}
        with open(self.config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def complete(
        self,
        system_instruction: str,
        user_message: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        messages = [
            Message(role="system", content=system_instruction),
            Message(role="user", content=user_message),
        ]
        params = ModelParams(
            temperature=temperature if temperature is not None else self.cfg.get("temperature", 0.3),
            max_tokens=max_tokens if max_tokens is not None else self.cfg.get("max_tokens", settings.CHAT_MAX_TOKENS),
        )
        try:
            text, _meta = self.model_client.generate(messages, params)
        except Exception as e:
            raise GenerationError(f"Text generation failed: {e}") from e
        return text

    @property
    def engine(self) -> str:
        return type(self.model_client).__name__
