"""
Shared test fixtures and configuration for entire test suite.

Provides: Deterministic fake embedding gateway, retrieval settings and service fixtures
Dependencies: pytest, docsearch
System role: Test infrastructure and fixture management
"""

import asyncio

import pytest

from docsearch.application.retrieval_service import RetrievalService
from docsearch.boundary.embeddings.base import BaseEmbeddingGateway
from docsearch.configs.retrieval import RetrievalSettings
from docsearch.core.exceptions import EmbeddingError, EmbeddingQuotaError

VOCABULARY = ("sky", "blue", "grass", "green", "apple", "red", "cat", "dog")


def keyword_vector(text: str) -> list[float]:
    """Count vocabulary words in text; one dimension per word."""
    lowered = text.lower()
    return [float(lowered.count(word)) for word in VOCABULARY]


class FakeEmbeddingGateway(BaseEmbeddingGateway):
    """
    In-memory embedding gateway with keyword-count vectors.

    Batches that contain any text including a ``fail_on`` marker raise
    ``batch_error``; batches matching a ``truncate_on`` marker come back with
    shortened vectors. Every request is recorded for assertions.
    """

    def __init__(
        self,
        fail_on: tuple[str, ...] = (),
        batch_error: EmbeddingError | None = None,
        query_error: EmbeddingError | None = None,
        delay: float = 0.0,
        drop_last_vector: bool = False,
        truncate_on: tuple[str, ...] = (),
    ) -> None:
        self.fail_on = fail_on
        self.batch_error = batch_error or EmbeddingQuotaError("quota exhausted")
        self.query_error = query_error
        self.delay = delay
        self.drop_last_vector = drop_last_vector
        self.truncate_on = truncate_on
        self.batch_calls: list[list[str]] = []
        self.query_calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        self.batch_calls.append(list(texts))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if any(marker in text for text in texts for marker in self.fail_on):
                raise self.batch_error
            vectors = [keyword_vector(text) for text in texts]
            if any(marker in text for text in texts for marker in self.truncate_on):
                vectors = [vector[:4] for vector in vectors]
            if self.drop_last_vector:
                vectors = vectors[:-1]
            return vectors
        finally:
            self.in_flight -= 1

    async def embed_query(self, text: str) -> list[float]:
        self.query_calls.append(text)
        if self.query_error is not None:
            raise self.query_error
        return keyword_vector(text)


@pytest.fixture
def fake_gateway() -> FakeEmbeddingGateway:
    """Provide a fake gateway that never fails."""
    return FakeEmbeddingGateway()


@pytest.fixture
def small_settings() -> RetrievalSettings:
    """Provide settings with a small chunk window for readable fixtures."""
    return RetrievalSettings(
        chunk_size=20,
        chunk_overlap=5,
        embedding_batch_size=100,
        max_concurrent_batches=8,
        default_top_k=5,
        max_upload_files=100,
    )


@pytest.fixture
def retrieval_service(
    fake_gateway: FakeEmbeddingGateway, small_settings: RetrievalSettings
) -> RetrievalService:
    """Provide a RetrievalService backed by the fake gateway."""
    return RetrievalService(gateway=fake_gateway, settings=small_settings)
