"""
LLM Providers module.
"""

from ragchat.providers.base import LLMProvider, LLMResponse
from ragchat.providers.openai import OpenAIProvider

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "OpenAIProvider",
]
