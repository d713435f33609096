"""
RAG-specific exceptions.
"""


class RAGError(Exception):
    """Base exception for retrieval and answer-generation errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ExtractionError(RAGError):
    """Raised when text cannot be extracted from a document."""

    def __init__(self, document: str, reason: str):
        self.document = document
        self.reason = reason
        super().__init__(f"Error reading document '{document}': {reason}")


class ChunkingConfigError(RAGError, ValueError):
    """Raised when chunk_size/overlap are invalid."""

    def __init__(self, chunk_size: int, overlap: int):
        self.chunk_size = chunk_size
        self.overlap = overlap
        super().__init__(
            f"Invalid chunking configuration: chunk_size={chunk_size}, overlap={overlap} "
            "(need chunk_size > 0 and 0 <= overlap < chunk_size)"
        )


class DimensionMismatchError(RAGError, ValueError):
    """Raised when vectors from different vector spaces are compared."""

    def __init__(self, message: str = "Vectors must have the same dimension"):
        super().__init__(message)


class EmptyKnowledgeBaseError(RAGError):
    """Raised when querying before any document has been ingested."""

    def __init__(self, message: str = "No documents have been ingested"):
        super().__init__(message)


class VocabularyNotBuiltError(RAGError):
    """Raised when text is embedded before a vocabulary exists."""

    def __init__(self, message: str = "Vocabulary has not been built; call fit() first"):
        super().__init__(message)


class GenerationError(RAGError):
    """Raised by LLM providers when an answer cannot be generated."""
