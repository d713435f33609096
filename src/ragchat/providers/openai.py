"""
OpenAI LLM Provider.
"""

import os
from typing import Any

from openai import AsyncOpenAI, OpenAIError

from ragchat.core.message import Message
from ragchat.providers.base import LLMProvider, LLMResponse
from ragchat.rag.exceptions import GenerationError


class OpenAIProvider(LLMProvider):
    """
    LLM Provider for the OpenAI chat completions API.

    The API key is taken from the constructor or, failing that, from the
    OPENAI_API_KEY environment variable at call time.
    """

    API_KEY_ENV = "OPENAI_API_KEY"

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        organization: str | None = None
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.organization = organization
        self._client: AsyncOpenAI | None = None

    def _resolve_api_key(self) -> str:
        api_key = self.api_key or os.environ.get(self.API_KEY_ENV)
        if not api_key:
            raise GenerationError(
                f"OpenAI API key not found. Set the {self.API_KEY_ENV} environment variable."
            )
        return api_key

    def _get_client(self) -> AsyncOpenAI:
        """Get or create OpenAI client."""
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._resolve_api_key(),
                base_url=self.base_url,
                organization=self.organization
            )
        return self._client

    async def complete(
        self,
        messages: list[dict[str, Any]],
        *,
        model: str = "gpt-3.5-turbo",
        temperature: float = 0.7,
        max_tokens: int = 500,
        **kwargs: Any
    ) -> LLMResponse:
        """Get a completion from OpenAI."""
        client = self._get_client()

        params: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        params.update(kwargs)

        try:
            response = await client.chat.completions.create(**params)
        except OpenAIError as e:
            raise GenerationError(f"Error calling OpenAI API: {e}") from e

        if not response.choices or not response.choices[0].message.content:
            raise GenerationError(f"Unexpected API response format: {response!r}")

        choice = response.choices[0]

        return LLMResponse(
            message=Message.assistant(choice.message.content),
            usage={
                "prompt_tokens": response.usage.prompt_tokens if response.usage else 0,
                "completion_tokens": response.usage.completion_tokens if response.usage else 0,
                "total_tokens": response.usage.total_tokens if response.usage else 0
            },
            finish_reason=choice.finish_reason or "stop"
        )

    def get_available_models(self) -> list[str]:
        """Get list of available OpenAI models."""
        return [
            "gpt-3.5-turbo",
            "gpt-4o-mini",
            "gpt-4o",
            "gpt-4-turbo",
            "gpt-4",
        ]
