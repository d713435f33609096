"""
Base LLM Provider interface.

Answer generation goes through ``LLMProvider`` only. To use another model
service, subclass it, implement ``complete``, and pass an instance to
``RetrievalSession(llm_provider=...)``.
"""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel

from ragchat.core.message import Message


class LLMResponse(BaseModel):
    """Response from an LLM."""
    message: Message | None = None
    usage: dict[str, int] = {}
    finish_reason: str = "stop"


class LLMProvider(ABC):
    """
    Abstract base class for LLM providers.
    """

    @abstractmethod
    async def complete(
        self,
        messages: list[dict[str, Any]],
        *,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 500,
        **kwargs: Any
    ) -> LLMResponse:
        """
        Get a completion from the LLM.

        Args:
            messages: List of messages in API format
            model: Model identifier
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            **kwargs: Additional provider-specific options

        Returns:
            LLMResponse with the assistant message and token usage

        Raises:
            GenerationError: If no answer could be produced
        """
        pass

    @abstractmethod
    def get_available_models(self) -> list[str]:
        """Get list of available models."""
        pass
