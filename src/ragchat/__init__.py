"""
ragchat - Chat with your documents through bag-of-words retrieval.
"""

from ragchat.core.message import Message, Role
from ragchat.rag import (
    # Session
    RetrievalSession,
    # Data
    RawDocument,
    DocumentSource,
    Chunk,
    SearchResult,
    RetrievalResult,
    IngestReport,
    # Pipeline pieces
    SentenceChunker,
    BagOfWordsEmbedding,
    Vocabulary,
    MemoryVectorStore,
    FileTextExtractor,
    chunk_text,
    build_vocabulary,
    vectorize,
    cosine_similarity,
    top_k,
    # Errors
    RAGError,
    ExtractionError,
    ChunkingConfigError,
    DimensionMismatchError,
    EmptyKnowledgeBaseError,
    GenerationError,
)
from ragchat.providers import LLMProvider, LLMResponse, OpenAIProvider
from ragchat.utils.config import RAGConfig, load_config

__version__ = "0.1.0"
__all__ = [
    # Core
    "Message",
    "Role",
    "RetrievalSession",
    "RAGConfig",
    "load_config",
    # Providers
    "LLMProvider",
    "LLMResponse",
    "OpenAIProvider",
    # Data
    "RawDocument",
    "DocumentSource",
    "Chunk",
    "SearchResult",
    "RetrievalResult",
    "IngestReport",
    # Pipeline pieces
    "SentenceChunker",
    "BagOfWordsEmbedding",
    "Vocabulary",
    "MemoryVectorStore",
    "FileTextExtractor",
    "chunk_text",
    "build_vocabulary",
    "vectorize",
    "cosine_similarity",
    "top_k",
    # Errors
    "RAGError",
    "ExtractionError",
    "ChunkingConfigError",
    "DimensionMismatchError",
    "EmptyKnowledgeBaseError",
    "GenerationError",
]
