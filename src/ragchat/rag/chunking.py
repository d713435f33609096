"""Sentence-aware document chunking."""

import logging
import re

from .base import BaseChunker
from .document import Chunk, RawDocument
from .exceptions import ChunkingConfigError

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")

# A sentence ends at a period followed by whitespace. Abbreviations such as
# "e.g. this" are split too; "3.14" is not.
_SENTENCE_BOUNDARY = re.compile(r"(?<=\.)\s+")


def normalize_text(text: str) -> str:
    """Collapse whitespace runs to a single space and trim the ends."""
    return _WHITESPACE.sub(" ", text).strip()


def split_sentences(text: str) -> list[str]:
    """Split text into sentence-like units."""
    return [s for s in _SENTENCE_BOUNDARY.split(text) if s]


def _validate(chunk_size: int, overlap: int) -> None:
    if chunk_size <= 0 or overlap < 0 or overlap >= chunk_size:
        raise ChunkingConfigError(chunk_size, overlap)


def _overlap_seed(closed: str, overlap: int, room: int) -> str:
    """Trailing context carried from a closed fragment into the next one."""
    if overlap == 0 or len(closed) <= overlap or room <= 0:
        return ""
    return closed[-min(overlap, room):].strip()


def chunk_text(text: str, chunk_size: int = 1000, overlap: int = 200) -> list[str]:
    """Split text into overlapping fragments of at most ``chunk_size`` characters.

    Sentences are accumulated greedily and never split, so a single sentence
    longer than ``chunk_size`` becomes a fragment of its own that exceeds the
    limit. Each new fragment starts with up to ``overlap`` trailing characters
    of the previous one, shortened when the next sentence would not fit.

    Args:
        text: Raw text; whitespace is normalized first
        chunk_size: Maximum characters per fragment
        overlap: Characters of context shared by adjacent fragments

    Returns:
        Fragments in document order (empty for blank input)

    Raises:
        ChunkingConfigError: If chunk_size <= 0 or overlap is not in [0, chunk_size)
    """
    _validate(chunk_size, overlap)

    text = normalize_text(text)
    if not text:
        return []

    chunks: list[str] = []
    current = ""

    for sentence in split_sentences(text):
        if current and len(current) + 1 + len(sentence) > chunk_size:
            chunks.append(current)
            room = chunk_size - len(sentence) - 1
            current = _overlap_seed(current, overlap, room)

        current = f"{current} {sentence}".strip() if current else sentence

    if current:
        chunks.append(current)

    return chunks


class SentenceChunker(BaseChunker):
    """Chunk documents on sentence boundaries with character overlap."""

    def __init__(
        self,
        chunk_size: int = 1000,
        overlap: int = 200,
    ):
        """Initialize the sentence chunker.

        Args:
            chunk_size: Maximum characters per chunk
            overlap: Number of characters to overlap between chunks
        """
        _validate(chunk_size, overlap)

        self.chunk_size = chunk_size
        self.overlap = overlap

    def chunk(self, document: RawDocument) -> list[Chunk]:
        """Split document into chunks numbered from 1."""
        fragments = chunk_text(document.text, self.chunk_size, self.overlap)

        chunks = [
            Chunk(source=document.name, index=i, content=fragment)
            for i, fragment in enumerate(fragments, start=1)
        ]

        logger.debug(f"Chunked {document.name!r} into {len(chunks)} chunks")
        return chunks
