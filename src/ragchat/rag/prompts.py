"""Prompt assembly for grounded answers."""

from typing import Iterable

from .document import SearchResult

ANSWER_PROMPT = (
    "Based on the following documents, please answer this question: {question}"
    "\n\nRelevant documents:\n{context}"
)


def format_context(results: Iterable[SearchResult]) -> str:
    """Render retrieved chunks with their source labels."""
    return "\n\n".join(
        f"From document '{result.chunk.source}':\n{result.chunk.content}"
        for result in results
    )


def build_prompt(
    question: str,
    results: Iterable[SearchResult],
    template: str = ANSWER_PROMPT,
) -> str:
    """Build the prompt sent to the language model.

    Args:
        question: The user's question
        results: Retrieved chunks, best first
        template: Format string with ``{question}`` and ``{context}`` fields

    Returns:
        Prompt string
    """
    return template.format(question=question, context=format_context(results))
