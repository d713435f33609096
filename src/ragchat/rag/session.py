"""Retrieval session: ingestion, querying and grounded answers."""

import asyncio
from typing import Iterable, Optional, TYPE_CHECKING

from ragchat.core.message import Message
from ragchat.utils.config import RAGConfig
from ragchat.utils.logging import get_logger

from .base import BaseChunker, BaseTextExtractor
from .chunking import SentenceChunker
from .document import DocumentSource, IngestReport, RawDocument, RetrievalResult
from .embeddings import BagOfWordsEmbedding, Vocabulary
from .exceptions import EmptyKnowledgeBaseError, ExtractionError, GenerationError
from .extraction import FileTextExtractor
from .prompts import build_prompt
from .retriever import VectorRetriever
from .vectorstore import MemoryVectorStore

if TYPE_CHECKING:
    from ragchat.providers.base import LLMProvider

logger = get_logger(__name__)


class RetrievalSession:
    """One user's knowledge base and conversation.

    Every ingestion rebuilds the vocabulary over all stored chunks and
    re-vectorizes them, so term statistics always describe the whole corpus.
    A single lock serializes ingestion and querying; a query never sees a
    vocabulary that is being rebuilt.

    Example:
        ```python
        session = RetrievalSession(RAGConfig(chunk_size=500, chunk_overlap=100))

        await session.ingest([DocumentSource.from_path("report.pdf")])

        retrieval = await session.query("What was the revenue?")
        answer = await session.ask("What was the revenue?")
        ```
    """

    def __init__(
        self,
        config: Optional[RAGConfig] = None,
        *,
        extractor: Optional[BaseTextExtractor] = None,
        llm_provider: Optional["LLMProvider"] = None,
        chunker: Optional[BaseChunker] = None,
        embedding: Optional[BagOfWordsEmbedding] = None,
        vectorstore: Optional[MemoryVectorStore] = None,
    ):
        """Initialize the session.

        Args:
            config: Session configuration (defaults if omitted)
            extractor: Text extractor for uploaded files (default: FileTextExtractor)
            llm_provider: Answer generator (default: OpenAIProvider)
            chunker: Document chunker (default: SentenceChunker from config)
            embedding: Vector space builder (default: BagOfWordsEmbedding from config)
            vectorstore: Chunk store (default: MemoryVectorStore)

        Raises:
            ChunkingConfigError: If the configured chunk size and overlap are invalid
        """
        self.config = config or RAGConfig()
        self.chunker = chunker or SentenceChunker(
            chunk_size=self.config.chunk_size,
            overlap=self.config.chunk_overlap,
        )
        self.embedding = embedding or BagOfWordsEmbedding(
            min_doc_freq=self.config.min_doc_freq,
            max_doc_proportion=self.config.max_doc_proportion,
        )
        self.vectorstore = vectorstore or MemoryVectorStore()
        self.retriever = VectorRetriever(self.embedding, self.vectorstore)
        self.extractor = extractor or FileTextExtractor()

        if llm_provider is None:
            from ragchat.providers.openai import OpenAIProvider

            llm_provider = OpenAIProvider(
                api_key=self.config.api_key,
                base_url=self.config.base_url,
            )
        self.llm_provider = llm_provider

        self.history: list[Message] = []
        self._lock = asyncio.Lock()

    async def ingest(self, sources: Iterable[DocumentSource]) -> IngestReport:
        """Extract, chunk and index uploaded documents.

        A document whose text cannot be extracted contributes no chunks; the
        failure is logged and reported, and the rest of the batch continues.

        Args:
            sources: Uploaded documents

        Returns:
            Report of chunks per document and extraction failures
        """
        documents: list[RawDocument] = []
        failures: dict[str, str] = {}

        for source in sources:
            try:
                text = await self.extractor.extract(source)
            except ExtractionError as e:
                logger.warning(e.message)
                failures[source.name] = e.reason
                continue
            documents.append(RawDocument(name=source.name, text=text))

        return await self._ingest(documents, failures)

    async def ingest_documents(self, documents: Iterable[RawDocument]) -> IngestReport:
        """Chunk and index documents whose text is already extracted.

        Re-ingesting a document name replaces its earlier chunks.
        """
        return await self._ingest(list(documents), {})

    async def _ingest(
        self,
        documents: list[RawDocument],
        failures: dict[str, str],
    ) -> IngestReport:
        ingested: dict[str, int] = {}

        async with self._lock:
            for document in documents:
                chunks = self.chunker.chunk(document)

                replaced = await self.vectorstore.remove_source(document.name)
                if replaced:
                    logger.info(f"Replacing {replaced} chunks of {document.name!r}")

                await self.vectorstore.add(chunks)
                ingested[document.name] = len(chunks)

            vocabulary = await self._rebuild_index()
            total_chunks = await self.vectorstore.count()

        logger.info(
            f"Ingested {len(ingested)} documents ({sum(ingested.values())} chunks), "
            f"{len(failures)} failed; {total_chunks} chunks in knowledge base"
        )

        return IngestReport(
            ingested=ingested,
            failures=failures,
            total_chunks=total_chunks,
            vocabulary_size=vocabulary.dimension,
        )

    async def rebuild_index(self) -> Vocabulary:
        """Rebuild the vocabulary from all chunks and re-vectorize them."""
        async with self._lock:
            return await self._rebuild_index()

    async def _rebuild_index(self) -> Vocabulary:
        texts = self.vectorstore.texts()
        vocabulary = self.embedding.fit(texts)
        vectors = await self.embedding.embed_documents(texts)
        await self.vectorstore.reindex(vocabulary, vectors)
        return vocabulary

    def _resolve_k(self, k: Optional[int]) -> int:
        k = self.config.top_k if k is None else k
        if k < 1:
            raise ValueError(f"k must be at least 1, got {k}")
        return k

    async def query(self, text: str, k: Optional[int] = None) -> RetrievalResult:
        """Retrieve the chunks most similar to a query.

        Args:
            text: Query text
            k: Number of chunks to return (default: config.top_k)

        Returns:
            Ranked chunks, best first

        Raises:
            EmptyKnowledgeBaseError: If there is nothing to search
            ValueError: If k < 1
        """
        k = self._resolve_k(k)

        async with self._lock:
            if await self.vectorstore.count() == 0:
                raise EmptyKnowledgeBaseError()

            vocabulary = self.embedding.vocabulary
            if vocabulary is None or vocabulary.dimension == 0:
                raise EmptyKnowledgeBaseError(
                    "The knowledge base has no searchable terms"
                )

            results = await self.retriever.retrieve(text, k)

        return RetrievalResult(query=text, results=results)

    async def generate_answer(self, prompt: str) -> str:
        """Send a prompt to the language model.

        Generation failures are returned as an error description instead of
        being raised, so the conversation can continue.
        """
        try:
            response = await self.llm_provider.complete(
                messages=[Message.user(prompt).to_api_format()],
                model=self.config.model,
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
            )
        except GenerationError as e:
            logger.warning(f"Answer generation failed: {e.message}")
            return f"Error: {e.message}"

        if response.message is None or not response.message.content:
            logger.warning("Answer generation returned no content")
            return "Error: The language model returned an empty response."

        return response.message.content

    async def ask(self, question: str, k: Optional[int] = None) -> str:
        """Answer a question from the ingested documents.

        Both the question and the answer are appended to ``history``.

        Args:
            question: The user's question
            k: Number of chunks to put in the prompt (default: config.top_k)

        Returns:
            The assistant's answer or an error description
        """
        k = self._resolve_k(k)
        self.history.append(Message.user(question))

        try:
            retrieval = await self.query(question, k)
        except EmptyKnowledgeBaseError as e:
            answer = f"{e.message}. Upload and process documents before asking questions."
        else:
            answer = await self.generate_answer(build_prompt(question, retrieval.results))

        self.history.append(Message.assistant(answer))
        return answer

    def document_summary(self) -> dict[str, int]:
        """Return the number of chunks per ingested document."""
        return self.vectorstore.sources()

    def clear_history(self) -> None:
        """Forget the conversation but keep the knowledge base."""
        self.history.clear()

    async def reset(self) -> None:
        """Drop all documents and the conversation."""
        async with self._lock:
            await self.vectorstore.clear()
            self.embedding.fit([])
        self.history.clear()
