"""Retrieval pipeline for chatting with documents.

This module provides:
- Document, chunk and result data structures
- Sentence-aware chunking with overlap
- A bag-of-words vector space rebuilt from the whole corpus
- Cosine-similarity ranking over an in-memory vector store
- A retrieval session that ingests documents and answers questions

Example:
    ```python
    from ragchat.rag import RawDocument, RetrievalSession

    session = RetrievalSession()
    await session.ingest_documents([
        RawDocument(name="pets.txt", text="Cats are mammals. Dogs are mammals too."),
    ])

    retrieval = await session.query("Which animals are mammals?", k=3)
    answer = await session.ask("Which animals are mammals?")
    ```
"""

# Errors
from .exceptions import (
    RAGError,
    ExtractionError,
    ChunkingConfigError,
    DimensionMismatchError,
    EmptyKnowledgeBaseError,
    VocabularyNotBuiltError,
    GenerationError,
)

# Data structures
from .document import (
    RawDocument,
    DocumentSource,
    Chunk,
    SearchResult,
    RetrievalResult,
    IngestReport,
)

# Base classes
from .base import (
    BaseEmbedding,
    BaseVectorStore,
    BaseRetriever,
    BaseChunker,
    BaseTextExtractor,
)

# Chunking
from .chunking import (
    SentenceChunker,
    chunk_text,
    normalize_text,
    split_sentences,
)

# Vector space
from .embeddings import (
    BagOfWordsEmbedding,
    Vocabulary,
    build_vocabulary,
    tokenize,
    vectorize,
)

# Ranking and storage
from .vectorstore import (
    MemoryVectorStore,
    cosine_similarity,
    top_k,
)

from .retriever import VectorRetriever
from .extraction import FileTextExtractor, clean_pdf_text
from .prompts import build_prompt, format_context

# Session
from .session import RetrievalSession

__all__ = [
    # Errors
    "RAGError",
    "ExtractionError",
    "ChunkingConfigError",
    "DimensionMismatchError",
    "EmptyKnowledgeBaseError",
    "VocabularyNotBuiltError",
    "GenerationError",
    # Data structures
    "RawDocument",
    "DocumentSource",
    "Chunk",
    "SearchResult",
    "RetrievalResult",
    "IngestReport",
    # Base classes
    "BaseEmbedding",
    "BaseVectorStore",
    "BaseRetriever",
    "BaseChunker",
    "BaseTextExtractor",
    # Chunking
    "SentenceChunker",
    "chunk_text",
    "normalize_text",
    "split_sentences",
    # Vector space
    "BagOfWordsEmbedding",
    "Vocabulary",
    "build_vocabulary",
    "tokenize",
    "vectorize",
    # Ranking and storage
    "MemoryVectorStore",
    "cosine_similarity",
    "top_k",
    "VectorRetriever",
    # Extraction and prompts
    "FileTextExtractor",
    "clean_pdf_text",
    "build_prompt",
    "format_context",
    # Session
    "RetrievalSession",
]
