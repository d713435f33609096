"""Base classes and abstract interfaces for RAG components."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .document import Chunk, DocumentSource, RawDocument, SearchResult
    from .embeddings import Vocabulary


class BaseEmbedding(ABC):
    """Abstract base class for embedding models.

    Embedding models convert text into vectors. Models with a corpus-dependent
    vector space are refitted through ``fit`` whenever the corpus changes.
    """

    @abstractmethod
    def fit(self, corpus: list[str]) -> "Vocabulary":
        """Rebuild the vector space from the full corpus.

        Args:
            corpus: Texts of every chunk in the knowledge base

        Returns:
            The new vocabulary
        """
        pass

    @abstractmethod
    async def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """Embed a list of documents.

        Args:
            texts: List of text strings to embed

        Returns:
            List of embedding vectors
        """
        pass

    @abstractmethod
    async def embed_query(self, text: str) -> list[float]:
        """Embed a single query.

        Args:
            text: Query text to embed

        Returns:
            Embedding vector
        """
        pass

    @property
    @abstractmethod
    def vocabulary(self) -> Optional["Vocabulary"]:
        """Return the current vocabulary, or None before the first fit."""
        pass

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Return the dimension of the embedding vectors."""
        pass


class BaseVectorStore(ABC):
    """Abstract base class for vector stores.

    Vector stores keep chunks with their vectors and search them.
    """

    @abstractmethod
    async def add(self, chunks: list["Chunk"]) -> list[str]:
        """Add chunks to the store. They are searchable after ``reindex``.

        Args:
            chunks: List of chunks to add

        Returns:
            List of added chunk IDs
        """
        pass

    @abstractmethod
    async def reindex(
        self,
        vocabulary: "Vocabulary",
        vectors: list[list[float]],
    ) -> None:
        """Replace every stored vector.

        Args:
            vocabulary: Vocabulary the vectors were built from
            vectors: One vector per stored chunk, in storage order
        """
        pass

    @abstractmethod
    async def search(
        self,
        query_vector: list[float],
        k: int = 3,
        vocabulary: Optional["Vocabulary"] = None,
    ) -> list["SearchResult"]:
        """Search for similar chunks.

        Args:
            query_vector: Query vector
            k: Number of results to return
            vocabulary: Vocabulary the query vector was built from

        Returns:
            List of search results sorted by similarity
        """
        pass

    @abstractmethod
    async def get(self, id: str) -> Optional["Chunk"]:
        """Get a chunk by its ID."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Return the number of chunks in the store."""
        pass

    @abstractmethod
    async def clear(self) -> bool:
        """Clear all chunks from the store."""
        pass


class BaseRetriever(ABC):
    """Abstract base class for retrievers.

    Retrievers find relevant chunks for a given query.
    """

    @abstractmethod
    async def retrieve(self, query: str, k: int = 3) -> list["SearchResult"]:
        """Retrieve relevant chunks for a query.

        Args:
            query: Query string
            k: Number of results to return

        Returns:
            List of search results
        """
        pass


class BaseChunker(ABC):
    """Abstract base class for document chunkers.

    Chunkers split documents into smaller pieces for indexing.
    """

    @abstractmethod
    def chunk(self, document: "RawDocument") -> list["Chunk"]:
        """Split a document into chunks.

        Args:
            document: Document to chunk

        Returns:
            List of chunks
        """
        pass


class BaseTextExtractor(ABC):
    """Abstract base class for text extractors.

    Extractors turn an uploaded file into a raw string.
    """

    @abstractmethod
    async def extract(self, source: "DocumentSource") -> str:
        """Extract the text of a document.

        Args:
            source: The uploaded document

        Returns:
            Extracted text

        Raises:
            ExtractionError: If the document cannot be read
        """
        pass
