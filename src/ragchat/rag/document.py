"""Document and chunk data structures for RAG."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RawDocument(BaseModel):
    """Text extracted from one uploaded document.

    Attributes:
        name: Source name shown to the user (usually the file name)
        text: Raw extracted text
    """

    model_config = ConfigDict(frozen=True)

    name: str
    text: str

    def __repr__(self) -> str:
        preview = self.text[:50] + "..." if len(self.text) > 50 else self.text
        return f"RawDocument(name={self.name!r}, text={preview!r})"


class DocumentSource(BaseModel):
    """An uploaded file waiting for text extraction."""

    model_config = ConfigDict(frozen=True)

    name: str
    path: Path

    @classmethod
    def from_path(cls, path: str | Path) -> "DocumentSource":
        path = Path(path)
        return cls(name=path.name, path=path)


class Chunk(BaseModel):
    """A fragment of a document.

    Attributes:
        source: Name of the document the chunk came from
        index: 1-based position of the chunk within its document
        content: Trimmed, non-empty fragment text
    """

    model_config = ConfigDict(frozen=True)

    source: str
    index: int = Field(ge=1)
    content: str

    @field_validator("content")
    @classmethod
    def _content_not_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Chunk content must not be empty")
        return value

    @property
    def id(self) -> str:
        return f"{self.source}#{self.index}"

    def __repr__(self) -> str:
        preview = self.content[:30] + "..." if len(self.content) > 30 else self.content
        return f"Chunk(id={self.id!r}, content={preview!r})"


class SearchResult(BaseModel):
    """A chunk together with its similarity to the query."""

    chunk: Chunk
    score: float

    def __repr__(self) -> str:
        return f"SearchResult(chunk_id={self.chunk.id!r}, score={self.score:.4f})"


class RetrievalResult(BaseModel):
    """Ranked chunks for one query, best match first."""

    query: str
    results: list[SearchResult] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.results)

    @property
    def chunks(self) -> list[Chunk]:
        return [result.chunk for result in self.results]


class IngestReport(BaseModel):
    """Outcome of one ingestion batch.

    Attributes:
        ingested: Number of chunks contributed per document name
        failures: Extraction error message per document name
        total_chunks: Chunks in the store after the batch
        vocabulary_size: Retained terms after the vocabulary rebuild
    """

    ingested: dict[str, int] = Field(default_factory=dict)
    failures: dict[str, str] = Field(default_factory=dict)
    total_chunks: int = 0
    vocabulary_size: int = 0

    @property
    def ok(self) -> bool:
        return not self.failures
