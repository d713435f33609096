"""Retriever implementations."""

import logging

from .base import BaseEmbedding, BaseRetriever, BaseVectorStore
from .document import SearchResult

logger = logging.getLogger(__name__)


class VectorRetriever(BaseRetriever):
    """Vector similarity retriever.

    Retrieves chunks based on embedding similarity. The query is embedded
    with the same vocabulary as the stored vectors, and the store rejects
    it otherwise.
    """

    def __init__(
        self,
        embedding: BaseEmbedding,
        vectorstore: BaseVectorStore,
    ):
        """Initialize the vector retriever.

        Args:
            embedding: Embedding model for queries
            vectorstore: Vector store to search
        """
        self.embedding = embedding
        self.vectorstore = vectorstore

    async def retrieve(self, query: str, k: int = 3) -> list[SearchResult]:
        """Retrieve chunks using vector similarity."""
        query_vector = await self.embedding.embed_query(query)

        results = await self.vectorstore.search(
            query_vector,
            k,
            vocabulary=self.embedding.vocabulary,
        )

        logger.debug(f"Retrieved {len(results)} chunks for query {query[:50]!r}")
        return results
