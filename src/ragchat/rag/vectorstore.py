"""Similarity ranking and the in-memory vector store."""

import logging
import math
from typing import Optional, Sequence, TypeVar

from .base import BaseVectorStore
from .document import Chunk, SearchResult
from .embeddings import Vocabulary
from .exceptions import DimensionMismatchError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def cosine_similarity(a: list[float], b: list[float]) -> float:
    """Calculate cosine similarity between two vectors.

    Returns 0.0 when either vector has zero magnitude.

    Raises:
        DimensionMismatchError: If the vectors differ in length
    """
    if len(a) != len(b):
        raise DimensionMismatchError(
            f"Vectors must have the same dimension (got {len(a)} and {len(b)})"
        )

    dot_product = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(x * x for x in b))

    if norm_a == 0 or norm_b == 0:
        return 0.0

    return dot_product / (norm_a * norm_b)


def top_k(
    query_vector: list[float],
    scored_items: Sequence[tuple[T, list[float]]],
    k: int,
) -> list[tuple[T, float]]:
    """Rank items by cosine similarity to the query vector.

    Items with equal scores keep their input order.

    Args:
        query_vector: Query vector
        scored_items: (item, vector) pairs
        k: Maximum number of results, at least 1

    Returns:
        Up to k (item, score) pairs, best first
    """
    if k < 1:
        raise ValueError(f"k must be at least 1, got {k}")

    if not scored_items:
        return []

    scored = [
        (item, cosine_similarity(query_vector, vector))
        for item, vector in scored_items
    ]

    # sorted() is stable, also with reverse=True
    scored = sorted(scored, key=lambda x: x[1], reverse=True)
    return scored[:k]


class MemoryVectorStore(BaseVectorStore):
    """In-memory vector store with exact similarity search.

    Chunks keep their insertion order, which is also the tie-break order
    of search results. Vectors are replaced wholesale by ``reindex``.
    """

    def __init__(self) -> None:
        """Initialize the memory vector store."""
        self._chunks: list[Chunk] = []
        self._vectors: list[list[float]] = []
        self._vocabulary: Optional[Vocabulary] = None

    @property
    def vocabulary(self) -> Optional[Vocabulary]:
        return self._vocabulary

    @property
    def is_indexed(self) -> bool:
        return self._vocabulary is not None and len(self._vectors) == len(self._chunks)

    def texts(self) -> list[str]:
        """Return the content of every stored chunk in storage order."""
        return [chunk.content for chunk in self._chunks]

    def sources(self) -> dict[str, int]:
        """Return the number of stored chunks per source document."""
        counts: dict[str, int] = {}
        for chunk in self._chunks:
            counts[chunk.source] = counts.get(chunk.source, 0) + 1
        return counts

    async def add(self, chunks: list[Chunk]) -> list[str]:
        """Append chunks; existing vectors become stale until reindexed."""
        self._chunks.extend(chunks)
        self._vectors = []
        logger.debug(f"Added {len(chunks)} chunks to memory store")
        return [chunk.id for chunk in chunks]

    async def remove_source(self, source: str) -> int:
        """Remove every chunk of a source document.

        Returns:
            Number of chunks removed
        """
        kept = [chunk for chunk in self._chunks if chunk.source != source]
        removed = len(self._chunks) - len(kept)
        if removed:
            self._chunks = kept
            self._vectors = []
        return removed

    async def reindex(
        self,
        vocabulary: Vocabulary,
        vectors: list[list[float]],
    ) -> None:
        """Replace all vectors with ones built from ``vocabulary``."""
        if len(vectors) != len(self._chunks):
            raise ValueError("Number of vectors must match number of stored chunks")

        for vector in vectors:
            if len(vector) != vocabulary.dimension:
                raise DimensionMismatchError(
                    f"Vector of dimension {len(vector)} does not match "
                    f"vocabulary dimension {vocabulary.dimension}"
                )

        self._vocabulary = vocabulary
        self._vectors = vectors

    async def search(
        self,
        query_vector: list[float],
        k: int = 3,
        vocabulary: Optional[Vocabulary] = None,
    ) -> list[SearchResult]:
        """Search for the chunks most similar to the query vector."""
        if not self._chunks:
            return []

        if not self.is_indexed:
            raise RuntimeError("Vector store must be reindexed before searching")

        if vocabulary is not None and vocabulary.fingerprint != self._vocabulary.fingerprint:
            raise DimensionMismatchError(
                "Query vector was built from a different vocabulary than the stored vectors"
            )

        ranked = top_k(query_vector, list(zip(self._chunks, self._vectors)), k)

        return [SearchResult(chunk=chunk, score=score) for chunk, score in ranked]

    async def get(self, id: str) -> Optional[Chunk]:
        """Get a chunk by its ID."""
        for chunk in self._chunks:
            if chunk.id == id:
                return chunk
        return None

    async def count(self) -> int:
        """Return the number of chunks."""
        return len(self._chunks)

    async def clear(self) -> bool:
        """Clear all chunks."""
        self._chunks.clear()
        self._vectors = []
        self._vocabulary = None
        return True
