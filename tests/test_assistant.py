# ===============================================
# tests/test_assistant.py
# Chat turns: retrieval, session memory, sources.
# ===============================================

import pytest

from seo_agent.assistant import SeoAssistant
from seo_agent.errors import GenerationError, InvalidInputError
from seo_agent.generate import ChatGenerator

from conftest import RecordingClient


def _system(call):
    return next(m.content for m in call if m.role == "system")


def test_first_turn_has_no_previous_context(assistant, model_client):
    reply = assistant.chat("What is SEO?", "s1")

    assert reply.response == model_client.reply
    system = _system(model_client.calls[0])
    assert "You are an expert SEO consultant" in system
    assert "Previous context: None" in system
    user = [m for m in model_client.calls[0] if m.role == "user"]
    assert [m.content for m in user] == ["What is SEO?"]


def test_second_turn_sees_first_turn_summary(assistant, model_client, db):
    assistant.chat("What is SEO?", "s1")
    stored = db.get_session("s1")
    assert stored is not None
    assert stored.context["lastMessage"] == "What is SEO?"

    assistant.chat("How long should my title be?", "s1")
    system = _system(model_client.calls[1])
    assert "What is SEO?" in system
    assert "Previous context: None" not in system

    assert db.get_session("s1").context["lastMessage"] == "How long should my title be?"


def test_sessions_are_isolated(assistant, model_client):
    assistant.chat("What is SEO?", "s1")
    assistant.chat("Tell me about sitemaps", "s2")
    assert "Previous context: None" in _system(model_client.calls[1])


def test_sources_are_ordered_and_deduplicated(assistant, retriever):
    reply = assistant.chat("internal links and external links anchor text", "s1")
    hits = retriever.retrieve("internal links and external links anchor text", 5)

    expected = []
    for h in hits:
        if h.entry.source not in expected:
            expected.append(h.entry.source)
    assert reply.sources == expected
    assert len(reply.sources) == len(set(reply.sources))
    assert 1 <= len(reply.sources) <= 5


def test_system_prompt_carries_retrieved_passages(assistant, model_client, retriever):
    assistant.chat("Core Web Vitals LCP CLS", "s1")
    top = retriever.retrieve("Core Web Vitals LCP CLS", 5)[0]
    assert top.entry.text in _system(model_client.calls[0])


@pytest.mark.parametrize("message,session", [("", "s1"), ("   ", "s1"), ("hello", ""), (None, "s1")])
def test_malformed_input_rejected_before_any_call(assistant, model_client, db, message, session):
    with pytest.raises(InvalidInputError):
        assistant.chat(message, session)
    assert model_client.calls == []
    assert db.get_session("s1") is None


def test_generation_failure_keeps_previous_memory(retriever, db):
    class Boom(RecordingClient):
        def generate(self, messages, params):
            raise RuntimeError("model offline")

    ok = SeoAssistant(retriever, db, ChatGenerator(RecordingClient()), top_k=5)
    ok.chat("What is SEO?", "s1")

    broken = SeoAssistant(retriever, db, ChatGenerator(Boom()), top_k=5)
    with pytest.raises(GenerationError, match="model offline"):
        broken.chat("second question", "s1")

    assert db.get_session("s1").context["lastMessage"] == "What is SEO?"
