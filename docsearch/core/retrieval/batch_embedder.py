"""
Concurrent batch embedding orchestrator.

Partitions chunk texts into bounded groups, embeds every group with one
gateway request through a bounded worker pool, and merges the results while
isolating per-group failures. Provider-level failures (credentials,
malformed requests) abort the whole run once every group has settled.

Dependencies: asyncio, tenacity, docsearch.boundary.embeddings, docsearch.models
System role: Second stage of document ingestion
"""

import asyncio
import logging
from collections import Counter
from collections.abc import Sequence

from pydantic import BaseModel, Field
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from docsearch.boundary.embeddings.base import BaseEmbeddingGateway
from docsearch.core.exceptions import (
    CatastrophicEmbeddingError,
    EmbeddingError,
    EmbeddingQuotaError,
)
from docsearch.models.chunk import DocumentChunk, TextChunk
from docsearch.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100
DEFAULT_MAX_CONCURRENCY = 8


class BatchEmbeddingOutcome(BaseModel):
    """Merged result of a batch embedding run."""

    embedded: list[DocumentChunk] = Field(
        default_factory=list,
        description="Embedded chunks in group completion order",
    )
    failed_sources: set[str] = Field(
        default_factory=set,
        description="Sources with no successfully embedded chunk",
    )
    partial_sources: set[str] = Field(
        default_factory=set,
        description="Sources with some, but not all, chunks embedded",
    )
    total_batches: int = 0
    failed_batches: int = 0


class _BatchSkipped(Exception):
    """Raised for queued groups that never ran because the run was aborted."""


class _EmbeddingRun:
    """Shared state of one embed_all call."""

    def __init__(self, max_concurrency: int) -> None:
        self.semaphore = asyncio.Semaphore(max_concurrency)
        self.abort = asyncio.Event()
        # Set by the first group that embeds successfully
        self.dimension: int | None = None


def partition(chunks: Sequence[TextChunk], batch_size: int) -> list[list[TextChunk]]:
    """
    Split chunks into contiguous groups of at most batch_size.

    Args:
        chunks: Chunks in ingestion order
        batch_size: Maximum group size

    Returns:
        list[list[TextChunk]]: Groups preserving the original order
    """
    if batch_size <= 0:
        raise ValueError("batch_size must be positive")
    return [list(chunks[i:i + batch_size]) for i in range(0, len(chunks), batch_size)]


class BatchEmbedder:
    """
    Embed chunk texts in concurrent, failure-isolated batches.

    At most ``max_concurrency`` gateway requests are in flight at once. Rate
    limit errors are retried up to ``max_attempts`` times per group; every
    other failure is final for that group.

    A group whose vectors disagree in length with each other, or with the
    first successful group, is dropped like any other failed group.
    """

    def __init__(
        self,
        gateway: BaseEmbeddingGateway,
        batch_size: int = DEFAULT_BATCH_SIZE,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        max_attempts: int = 1,
        retry_initial_wait: float = 1.0,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            gateway: Embedding gateway used for every group request
            batch_size: Maximum chunks per request
            max_concurrency: Maximum requests in flight
            max_attempts: Attempts per group on rate-limit errors
            retry_initial_wait: Initial backoff between attempts, in seconds

        Raises:
            ValueError: When a size or limit is not positive
        """
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        if max_concurrency <= 0:
            raise ValueError("max_concurrency must be positive")
        if max_attempts <= 0:
            raise ValueError("max_attempts must be positive")

        self._gateway = gateway
        self._batch_size = batch_size
        self._max_concurrency = max_concurrency
        self._max_attempts = max_attempts
        self._retry_initial_wait = retry_initial_wait

    @property
    def batch_size(self) -> int:
        return self._batch_size

    @property
    def max_concurrency(self) -> int:
        return self._max_concurrency

    def _log_retry(self, retry_state: RetryCallState) -> None:
        logger.warning(
            f"{__name__}:embed_all - Retry {retry_state.attempt_number}/{self._max_attempts} "
            f"after rate limiting"
        )

    async def _request(self, texts: list[str]) -> list[list[float]]:
        if self._max_attempts == 1:
            return await self._gateway.embed_batch(texts)

        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(EmbeddingQuotaError),
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential_jitter(
                initial=self._retry_initial_wait,
                max=30,
                jitter=self._retry_initial_wait,
            ),
            before_sleep=self._log_retry,
            reraise=True,
        ):
            with attempt:
                return await self._gateway.embed_batch(texts)
        raise AssertionError("unreachable")

    def _check_dimension(self, vectors: list[list[float]], run: _EmbeddingRun) -> None:
        lengths = {len(vector) for vector in vectors if vector}
        if len(lengths) > 1:
            raise EmbeddingError(
                "Embedding provider returned vectors of different lengths in one batch",
                details={"lengths": sorted(lengths)},
            )
        if not lengths:
            return

        (dimension,) = lengths
        if run.dimension is None:
            run.dimension = dimension
        elif dimension != run.dimension:
            raise EmbeddingError(
                f"Embedding provider returned {dimension}-dimensional vectors, "
                f"expected {run.dimension}",
                details={"expected": run.dimension, "actual": dimension},
            )

    async def _embed_group(
        self,
        group: list[TextChunk],
        run: _EmbeddingRun,
    ) -> list[DocumentChunk]:
        async with run.semaphore:
            if run.abort.is_set():
                raise _BatchSkipped()
            try:
                vectors = await self._request([chunk.text for chunk in group])
            except EmbeddingError as e:
                if e.fatal:
                    run.abort.set()
                raise

        if len(vectors) != len(group):
            raise EmbeddingError(
                f"Embedding provider returned {len(vectors)} vectors for {len(group)} texts",
                details={"expected": len(group), "actual": len(vectors)},
            )

        self._check_dimension(vectors, run)

        # Vector i belongs to text i of the same group
        return [
            DocumentChunk(source=chunk.source, text=chunk.text, embedding=vector)
            for chunk, vector in zip(group, vectors)
        ]

    async def embed_all(self, chunks: Sequence[TextChunk]) -> BatchEmbeddingOutcome:
        """
        Embed all chunks, one request per group, isolating group failures.

        Every group is scheduled before any is awaited, and every group
        settles before this method returns or raises.

        Args:
            chunks: Chunks to embed, in ingestion order

        Returns:
            BatchEmbeddingOutcome: Embedded chunks and per-source accounting

        Raises:
            CatastrophicEmbeddingError: When a group failed with a fatal
                provider error (credentials or malformed request)
        """
        if not chunks:
            return BatchEmbeddingOutcome()

        groups = partition(chunks, self._batch_size)
        state = _EmbeddingRun(self._max_concurrency)
        embedded: list[DocumentChunk] = []

        async def run(group: list[TextChunk]) -> None:
            embedded.extend(await self._embed_group(group, state))

        logger.info(
            f"{__name__}:embed_all - START chunks={len(chunks)}, batches={len(groups)}, "
            f"max_concurrency={self._max_concurrency}"
        )

        tasks = [asyncio.create_task(run(group)) for group in groups]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        fatal: EmbeddingError | None = None
        failed_batches = 0
        for batch_number, (group, result) in enumerate(zip(groups, results), start=1):
            if result is None:
                continue
            if not isinstance(result, Exception):
                raise result
            failed_batches += 1
            if isinstance(result, _BatchSkipped):
                continue
            if isinstance(result, EmbeddingError) and result.fatal:
                fatal = fatal or result
                logger.error(
                    f"{__name__}:embed_all - Batch {batch_number}/{len(groups)} failed fatally: {result}"
                )
            elif isinstance(result, EmbeddingError):
                logger.warning(
                    f"{__name__}:embed_all - A batch of embeddings failed. "
                    f"Skipping {len(group)} chunks (batch {batch_number}/{len(groups)}): {result}"
                )
            else:
                log_exception_with_context(
                    logger,
                    f"{__name__}:embed_all - Unexpected batch failure, skipping {len(group)} chunks",
                    result,
                    batch_number=batch_number,
                )

        totals = Counter(chunk.source for chunk in chunks)
        done = Counter(chunk.source for chunk in embedded)
        failed_sources = {source for source in totals if done[source] == 0}
        partial_sources = {source for source in totals if 0 < done[source] < totals[source]}

        if fatal is not None:
            raise CatastrophicEmbeddingError(
                f"Embedding aborted by provider error: {fatal.message}",
                cause=fatal,
                embedded=embedded,
                failed_sources=failed_sources,
                details={"failed_batches": failed_batches, "total_batches": len(groups)},
            )

        logger.info(
            f"{__name__}:embed_all - END embedded={len(embedded)}/{len(chunks)}, "
            f"failed_batches={failed_batches}/{len(groups)}"
        )

        return BatchEmbeddingOutcome(
            embedded=embedded,
            failed_sources=failed_sources,
            partial_sources=partial_sources,
            total_batches=len(groups),
            failed_batches=failed_batches,
        )
