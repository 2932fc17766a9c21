"""Conversational SEO assistant.

chat(message, session_id) runs, in order:
  1. retrieve the top passages for the message
  2. load the session's previous memory (absent means empty context)
  3. ask the generator, with passages + previous context as the system turn
  4. overwrite the session memory with a summary of this turn

Only the latest turn is remembered per session (last write wins).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import List

from seo_agent.errors import InvalidInputError
from seo_agent.generate import ChatGenerator
from seo_agent.log import get_logger
from seo_agent.search.prompts import build_system_prompt
from seo_agent.search.retriever import Retriever, join_texts, unique_sources
from seo_agent.settings import settings
from seo_agent.storage.db import Database, SessionMemory, utc_now_iso

logger = get_logger("seo_agent.assistant")

RESPONSE_SUMMARY_CHARS = 500


@dataclass
class ChatReply:
    response: str
    sources: List[str]


class SeoAssistant:
    def __init__(self, retriever: Retriever, db: Database, generator: ChatGenerator, top_k: int | None = None):
        self.retriever = retriever
        self.db = db
        self.generator = generator
        self.top_k = top_k or settings.CHAT_TOP_K

    def chat(self, message: str, session_id: str) -> ChatReply:
        message = (message or "").strip()
        session_id = (session_id or "").strip()
        if not message:
            raise InvalidInputError("message is required")
        if not session_id:
            raise InvalidInputError("session id is required")

        matches = self.retriever.retrieve(message, self.top_k)

        previous = self.db.get_session(session_id)
        prev_context = json.dumps(previous.context, ensure_ascii=False) if previous and previous.context else None
        logger.info("Chat turn for session %s (previous context: %s)", session_id, "yes" if prev_context else "no")

        system = build_system_prompt(join_texts(matches), prev_context)
        response = self.generator.complete(system, message, max_tokens=settings.CHAT_MAX_TOKENS)

        self.db.save_session(
            SessionMemory(
                session_id=session_id,
                context={"lastMessage": message, "lastResponse": response[:RESPONSE_SUMMARY_CHARS]},
                last_active=utc_now_iso(),
            )
        )
        return ChatReply(response=response, sources=unique_sources(matches))
