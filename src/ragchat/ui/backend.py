"""
Backend for the ragchat UI.
Wraps one RetrievalSession behind UI-friendly methods.
"""

from __future__ import annotations

import os
from typing import Any, Optional

from ragchat.providers.base import LLMProvider
from ragchat.providers.openai import OpenAIProvider
from ragchat.rag import BaseTextExtractor, DocumentSource, RetrievalSession
from ragchat.utils.config import RAGConfig, load_config
from ragchat.utils.logging import get_logger

logger = get_logger(__name__)


class RAGChatBackend:
    """
    Backend manager for the upload and chat screens.

    This class manages:
    - Document processing (extract, chunk, index)
    - The per-document chunk table
    - Question answering and chat history
    """

    def __init__(
        self,
        config: Optional[RAGConfig] = None,
        llm_provider: Optional[LLMProvider] = None,
        extractor: Optional[BaseTextExtractor] = None,
    ):
        self.config = config or load_config()
        self.session = RetrievalSession(
            self.config,
            llm_provider=llm_provider,
            extractor=extractor,
        )

    def configure(
        self,
        api_key: str | None = None,
        model: str | None = None,
        top_k: int | None = None,
    ) -> str:
        """Apply settings from the UI to the running session."""
        update: dict[str, Any] = {}
        if model:
            update["model"] = model
        if top_k:
            update["top_k"] = int(top_k)
        if api_key:
            update["api_key"] = api_key

        self.config = self.config.model_copy(update=update)
        self.session.config = self.config

        if api_key and isinstance(self.session.llm_provider, OpenAIProvider):
            self.session.llm_provider = OpenAIProvider(
                api_key=api_key,
                base_url=self.config.base_url,
            )

        return f"Using {self.config.model}, top {self.config.top_k} chunks"

    async def process_files(self, file_paths: list[str]) -> str:
        """Index uploaded files and describe the outcome."""
        if not file_paths:
            return "Please select files to upload."

        sources = [
            DocumentSource(name=os.path.basename(path), path=path)
            for path in file_paths
        ]
        report = await self.session.ingest(sources)

        lines = [
            f"Processed '{name}': {count} chunks"
            for name, count in report.ingested.items()
        ]
        lines.extend(
            f"Could not read '{name}': {reason}"
            for name, reason in report.failures.items()
        )
        lines.append(
            f"Knowledge base: {report.total_chunks} chunks, "
            f"{report.vocabulary_size} terms"
        )
        return "\n".join(lines)

    def document_table(self) -> list[list[Any]]:
        """Rows of (document, chunk count)."""
        return [[name, count] for name, count in self.session.document_summary().items()]

    async def chat(self, message: str) -> str:
        """Answer a chat message from the indexed documents."""
        if not message.strip():
            return ""
        return await self.session.ask(message)

    def chat_history(self) -> list[dict[str, Any]]:
        """Conversation in the role/content format the chat widget expects."""
        return [turn.to_api_format() for turn in self.session.history]

    async def reset(self) -> str:
        """Drop all documents and the conversation."""
        await self.session.reset()
        return "Session reset"

    def get_status(self) -> dict[str, Any]:
        """Get current status."""
        summary = self.session.document_summary()
        return {
            "documents": len(summary),
            "chunks": sum(summary.values()),
            "turns": len(self.session.history),
            "model": self.config.model,
        }


# Global backend instance
_backend: Optional[RAGChatBackend] = None


def get_backend() -> RAGChatBackend:
    """Get or create the global backend instance."""
    global _backend
    if _backend is None:
        _backend = RAGChatBackend()
    return _backend
