"""
Test configuration and fixtures.
"""

from typing import Any

import pytest

from ragchat.core.message import Message
from ragchat.providers.base import LLMProvider, LLMResponse
from ragchat.rag import GenerationError, RawDocument


class StubProvider(LLMProvider):
    """Provider that answers with a fixed text and records its prompts."""

    def __init__(self, answer: str = "Stub answer"):
        self.answer = answer
        self.calls: list[dict[str, Any]] = []

    async def complete(self, messages, *, model, temperature=0.7, max_tokens=500, **kwargs):
        self.calls.append({
            "messages": messages,
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        return LLMResponse(message=Message.assistant(self.answer))

    def get_available_models(self) -> list[str]:
        return ["stub-model"]

    @property
    def last_prompt(self) -> str:
        return self.calls[-1]["messages"][-1]["content"]


class FailingProvider(LLMProvider):
    """Provider whose every call fails."""

    async def complete(self, messages, *, model, temperature=0.7, max_tokens=500, **kwargs):
        raise GenerationError("Error calling OpenAI API: connection refused")

    def get_available_models(self) -> list[str]:
        return []


@pytest.fixture
def stub_provider():
    """Provider returning a canned answer."""
    return StubProvider()


@pytest.fixture
def failing_provider():
    """Provider raising GenerationError."""
    return FailingProvider()


@pytest.fixture
def animal_documents():
    """Three one-sentence documents sharing a small vocabulary."""
    return [
        RawDocument(name="a.txt", text="the cat sat"),
        RawDocument(name="b.txt", text="the dog sat"),
        RawDocument(name="c.txt", text="the cat ran"),
    ]


@pytest.fixture
def long_text():
    """Several paragraphs of prose with irregular whitespace."""
    sentences = [
        f"Sentence number {i} talks about topic {i % 4} in some detail."
        for i in range(1, 31)
    ]
    return "\n\n".join(
        "   ".join(sentences[i:i + 5]) for i in range(0, len(sentences), 5)
    )
