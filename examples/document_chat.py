"""
Document chat example demonstrating ingestion, retrieval and answers.
"""

import asyncio

from ragchat import RAGConfig, RawDocument, RetrievalSession
from ragchat.providers.openai import OpenAIProvider


DOCUMENTS = [
    RawDocument(
        name="animals.txt",
        text=(
            "Cats are mammals. Cats sleep for most of the day. "
            "Dogs are mammals too. Dogs were domesticated from wolves."
        ),
    ),
    RawDocument(
        name="ocean.txt",
        text=(
            "Fish live in water. Most fish breathe through gills. "
            "Whales live in water but are mammals."
        ),
    ),
    RawDocument(
        name="plants.txt",
        text="Plants make food from sunlight. Most plants need water and soil.",
    ),
]


async def main():
    # Create the LLM provider
    provider = OpenAIProvider(
        api_key="your-api-key-here",  # Replace with your API key
    )

    # Small chunks so each sentence pair gets its own chunk
    config = RAGConfig(chunk_size=80, chunk_overlap=20, top_k=2)

    session = RetrievalSession(config, llm_provider=provider)

    report = await session.ingest_documents(DOCUMENTS)
    print(f"Indexed {report.total_chunks} chunks, {report.vocabulary_size} terms")
    for name, count in report.ingested.items():
        print(f"  {name}: {count} chunks")

    # Retrieval only
    retrieval = await session.query("Which animals live in water?")
    for result in retrieval.results:
        print(f"{result.score:.3f}  {result.chunk.id}  {result.chunk.content}")

    # Grounded answer
    answer = await session.ask("Which animals live in water?")
    print(f"Answer: {answer}")


if __name__ == "__main__":
    asyncio.run(main())
