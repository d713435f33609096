"""Tests for the retrieval session."""

import asyncio

import pytest

from ragchat.core.message import Role
from ragchat.rag import (
    BagOfWordsEmbedding,
    ChunkingConfigError,
    DocumentSource,
    EmptyKnowledgeBaseError,
    RawDocument,
    RetrievalSession,
)
from ragchat.utils.config import RAGConfig


class GatedEmbedding(BagOfWordsEmbedding):
    """Embedding that can pause document vectorization until released."""

    def __init__(self):
        super().__init__()
        self.gated = False
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def embed_documents(self, texts):
        if self.gated:
            self.started.set()
            await self.release.wait()
        return await super().embed_documents(texts)


class TestIngestion:
    """Tests for document ingestion."""

    @pytest.mark.asyncio
    async def test_ingest_documents(self, stub_provider, animal_documents):
        """Test that ingestion chunks documents and builds the vocabulary."""
        session = RetrievalSession(llm_provider=stub_provider)

        report = await session.ingest_documents(animal_documents)

        assert report.ingested == {"a.txt": 1, "b.txt": 1, "c.txt": 1}
        assert report.total_chunks == 3
        assert report.vocabulary_size == 2
        assert report.ok
        assert session.embedding.vocabulary.terms == ("cat", "sat")

    @pytest.mark.asyncio
    async def test_ingest_rebuilds_vocabulary(self, stub_provider, animal_documents):
        """Test that a later batch changes term statistics for all chunks."""
        session = RetrievalSession(llm_provider=stub_provider)
        await session.ingest_documents(animal_documents)

        report = await session.ingest_documents([
            RawDocument(name="d.txt", text="the dog ran"),
            RawDocument(name="e.txt", text="a bird flew"),
        ])

        assert report.total_chunks == 5
        assert session.embedding.vocabulary.terms == ("cat", "dog", "ran", "sat")
        assert session.vectorstore.is_indexed
        assert session.vectorstore.vocabulary == session.embedding.vocabulary

    @pytest.mark.asyncio
    async def test_reingest_replaces_document(self, stub_provider, animal_documents):
        """Test that a document name ingested twice is stored once."""
        session = RetrievalSession(llm_provider=stub_provider)
        await session.ingest_documents(animal_documents)

        await session.ingest_documents([RawDocument(name="a.txt", text="the cat slept")])

        assert session.document_summary() == {"b.txt": 1, "c.txt": 1, "a.txt": 1}
        contents = session.vectorstore.texts()
        assert "the cat slept" in contents
        assert "the cat sat" not in contents

    @pytest.mark.asyncio
    async def test_extraction_failure_continues(self, stub_provider, tmp_path):
        """Test that one unreadable file does not stop the batch."""
        good = tmp_path / "good.txt"
        good.write_text("Cats are mammals. Dogs are mammals too.")

        session = RetrievalSession(llm_provider=stub_provider)
        report = await session.ingest([
            DocumentSource.from_path(good),
            DocumentSource.from_path(tmp_path / "missing.txt"),
            DocumentSource(name="archive.zip", path=tmp_path / "archive.zip"),
        ])

        assert report.ingested == {"good.txt": 1}
        assert set(report.failures) == {"missing.txt", "archive.zip"}
        assert "unsupported file type" in report.failures["archive.zip"]
        assert not report.ok

    @pytest.mark.asyncio
    async def test_concurrent_ingestion(self, stub_provider, animal_documents):
        """Test that concurrent batches leave a consistent index."""
        session = RetrievalSession(llm_provider=stub_provider)

        await asyncio.gather(
            session.ingest_documents(animal_documents[:2]),
            session.ingest_documents(animal_documents[2:]),
        )

        assert await session.vectorstore.count() == 3
        assert session.vectorstore.is_indexed
        assert session.embedding.vocabulary.terms == ("cat", "sat")

    def test_invalid_chunking_config(self, stub_provider):
        """Test that an invalid chunk size/overlap pair is rejected."""
        config = RAGConfig(chunk_size=100, chunk_overlap=100)

        with pytest.raises(ChunkingConfigError):
            RetrievalSession(config, llm_provider=stub_provider)


class TestQuery:
    """Tests for retrieval."""

    @pytest.mark.asyncio
    async def test_query_ranking(self, stub_provider, animal_documents):
        """Test that chunks mentioning the query term rank first."""
        session = RetrievalSession(llm_provider=stub_provider)
        await session.ingest_documents(animal_documents)

        retrieval = await session.query("cat", k=3)

        sources = [chunk.source for chunk in retrieval.chunks]
        assert sources == ["c.txt", "a.txt", "b.txt"]
        scores = [result.score for result in retrieval.results]
        assert scores[2] < scores[1] < scores[0]
        assert scores[2] == pytest.approx(0.0)

    @pytest.mark.asyncio
    async def test_query_limits_results(self, stub_provider, animal_documents):
        """Test that at most k chunks are returned."""
        session = RetrievalSession(llm_provider=stub_provider)
        await session.ingest_documents(animal_documents)

        assert len(await session.query("cat", k=1)) == 1
        assert len(await session.query("cat", k=10)) == 3

    @pytest.mark.asyncio
    async def test_query_default_k(self, stub_provider, animal_documents):
        """Test that k defaults to the configured top_k."""
        session = RetrievalSession(RAGConfig(top_k=2), llm_provider=stub_provider)
        await session.ingest_documents(animal_documents)

        assert len(await session.query("cat")) == 2

    @pytest.mark.asyncio
    async def test_query_invalid_k(self, stub_provider, animal_documents):
        """Test that k < 1 is rejected."""
        session = RetrievalSession(llm_provider=stub_provider)
        await session.ingest_documents(animal_documents)

        with pytest.raises(ValueError):
            await session.query("cat", k=0)

    @pytest.mark.asyncio
    async def test_query_waits_for_ingestion(self, stub_provider, animal_documents):
        """Test that a query started mid-ingest runs against the rebuilt index."""
        embedding = GatedEmbedding()
        session = RetrievalSession(llm_provider=stub_provider, embedding=embedding)
        await session.ingest_documents(animal_documents)

        embedding.gated = True
        ingest_task = asyncio.create_task(session.ingest_documents([
            RawDocument(name="d.txt", text="the dog ran"),
            RawDocument(name="e.txt", text="a bird flew"),
        ]))
        await embedding.started.wait()

        query_task = asyncio.create_task(session.query("dog", k=2))
        for _ in range(5):
            await asyncio.sleep(0)
        assert not query_task.done()

        embedding.release.set()
        await ingest_task
        retrieval = await query_task

        assert session.embedding.vocabulary.terms == ("cat", "dog", "ran", "sat")
        assert [chunk.source for chunk in retrieval.chunks] == ["b.txt", "d.txt"]
        assert all(result.score > 0 for result in retrieval.results)

    @pytest.mark.asyncio
    async def test_query_empty_store(self, stub_provider):
        """Test that querying before ingestion is an error."""
        session = RetrievalSession(llm_provider=stub_provider)

        with pytest.raises(EmptyKnowledgeBaseError):
            await session.query("cat")

    @pytest.mark.asyncio
    async def test_query_without_searchable_terms(self, stub_provider):
        """Test that a corpus with no retained terms cannot be searched."""
        session = RetrievalSession(llm_provider=stub_provider)
        await session.ingest_documents([RawDocument(name="one.txt", text="A lonely text.")])

        with pytest.raises(EmptyKnowledgeBaseError):
            await session.query("lonely")

    @pytest.mark.asyncio
    async def test_unmatched_query_still_ranks(self, stub_provider, animal_documents):
        """Test that a query without known terms returns zero scores."""
        session = RetrievalSession(llm_provider=stub_provider)
        await session.ingest_documents(animal_documents)

        retrieval = await session.query("quantum physics", k=3)

        assert len(retrieval) == 3
        assert all(result.score == 0.0 for result in retrieval.results)
        assert [c.source for c in retrieval.chunks] == ["a.txt", "b.txt", "c.txt"]


class TestAsk:
    """Tests for grounded answers."""

    @pytest.mark.asyncio
    async def test_ask(self, stub_provider, animal_documents):
        """Test that the answer is generated from the retrieved chunks."""
        session = RetrievalSession(RAGConfig(model="test-model"), llm_provider=stub_provider)
        await session.ingest_documents(animal_documents)

        answer = await session.ask("Where did the cat go?", k=2)

        assert answer == "Stub answer"
        prompt = stub_provider.last_prompt
        assert prompt.startswith(
            "Based on the following documents, please answer this question: Where did the cat go?"
        )
        assert "From document 'c.txt':\nthe cat ran" in prompt
        assert "From document 'a.txt':\nthe cat sat" in prompt
        assert "dog" not in prompt
        assert stub_provider.calls[-1]["model"] == "test-model"

    @pytest.mark.asyncio
    async def test_ask_records_history(self, stub_provider, animal_documents):
        """Test that question and answer are appended to the history."""
        session = RetrievalSession(llm_provider=stub_provider)
        await session.ingest_documents(animal_documents)

        await session.ask("first question about cats")
        await session.ask("second question about dogs")

        assert [m.role for m in session.history] == [
            Role.USER, Role.ASSISTANT, Role.USER, Role.ASSISTANT,
        ]
        assert session.history[2].content == "second question about dogs"

        session.clear_history()
        assert session.history == []
        assert await session.vectorstore.count() == 3

    @pytest.mark.asyncio
    async def test_ask_empty_knowledge_base(self, stub_provider):
        """Test that asking before ingestion explains what to do."""
        session = RetrievalSession(llm_provider=stub_provider)

        answer = await session.ask("anything?")

        assert "No documents have been ingested" in answer
        assert stub_provider.calls == []
        assert len(session.history) == 2

    @pytest.mark.asyncio
    async def test_generation_failure_surfaced(self, failing_provider, animal_documents):
        """Test that a failing model turns into an error answer."""
        session = RetrievalSession(llm_provider=failing_provider)
        await session.ingest_documents(animal_documents)

        answer = await session.ask("cat?")

        assert answer.startswith("Error: ")
        assert "connection refused" in answer
        assert session.history[-1].role == Role.ASSISTANT
        assert session.history[-1].content == answer

    @pytest.mark.asyncio
    async def test_reset(self, stub_provider, animal_documents):
        """Test that reset drops documents and history."""
        session = RetrievalSession(llm_provider=stub_provider)
        await session.ingest_documents(animal_documents)
        await session.ask("cat?")

        await session.reset()

        assert session.history == []
        assert session.document_summary() == {}
        with pytest.raises(EmptyKnowledgeBaseError):
            await session.query("cat")
