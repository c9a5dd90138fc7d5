"""
Retrieval service orchestrator.

Owns the published vector index and exposes the ingest / search / reset
lifecycle to the orchestrating application. Ingestion builds a fresh index
value and swaps it in whole; an ingestion overtaken by a reset or a newer
ingestion is discarded instead of published.

Dependencies: docsearch.core.retrieval, docsearch.boundary.embeddings, docsearch.configs
System role: Retrieval orchestration
"""

import logging
from collections.abc import Iterable
from enum import Enum

from docsearch.boundary.embeddings.base import BaseEmbeddingGateway
from docsearch.configs.retrieval import RetrievalSettings
from docsearch.core.exceptions import (
    CatastrophicEmbeddingError,
    ChunkingError,
    EmbeddingError,
    IngestionError,
    QueryEmbeddingError,
    ValidationError,
    VectorIndexError,
)
from docsearch.core.retrieval.batch_embedder import BatchEmbedder
from docsearch.core.retrieval.chunker import chunk_document
from docsearch.core.retrieval.ranker import SimilarityRanker
from docsearch.core.retrieval.vector_index import VectorIndex
from docsearch.models.chunk import TextChunk
from docsearch.models.document import IngestionResult, UploadedFile
from docsearch.models.search import SearchResult
from docsearch.observability.log_utils import log_with_context, preview_text

logger = logging.getLogger(__name__)


class IndexState(str, Enum):
    """Lifecycle state of the retrieval index."""

    EMPTY = "empty"
    INDEXING = "indexing"
    READY = "ready"


class RetrievalService:
    """
    Long-lived retrieval service.

    Flow:
    1. ingest(): publish an empty index, chunk every file, embed all chunks
       in batches, then publish the new index if no newer run started
    2. search(): embed the query and rank the published index
    3. reset(): publish an empty index and invalidate in-flight ingestions
    """

    def __init__(
        self,
        gateway: BaseEmbeddingGateway,
        settings: RetrievalSettings | None = None,
        ranker: SimilarityRanker | None = None,
    ) -> None:
        """
        Initialize retrieval service.

        Args:
            gateway: Embedding gateway for chunks and queries
            settings: Retrieval settings (uses defaults if None)
            ranker: Similarity ranker (uses default if None)
        """
        self._settings = settings or RetrievalSettings()
        self._gateway = gateway
        self._ranker = ranker or SimilarityRanker()
        self._embedder = BatchEmbedder(
            gateway=gateway,
            batch_size=self._settings.embedding_batch_size,
            max_concurrency=self._settings.max_concurrent_batches,
            max_attempts=self._settings.embedding_max_attempts,
            retry_initial_wait=self._settings.retry_initial_wait,
        )
        self._generation = 0
        self._index = VectorIndex.empty()
        self._state = IndexState.EMPTY

    @property
    def state(self) -> IndexState:
        return self._state

    @property
    def index(self) -> VectorIndex:
        """Currently published index."""
        return self._index

    @property
    def index_version(self) -> int:
        return self._index.version

    @property
    def chunk_count(self) -> int:
        return len(self._index)

    def _start_generation(self, state: IndexState) -> int:
        self._generation += 1
        self._index = VectorIndex.empty(version=self._generation)
        self._state = state
        return self._generation

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def reset(self) -> None:
        """Discard the index and any ingestion still in flight."""
        generation = self._start_generation(IndexState.EMPTY)
        logger.info(f"{__name__}:reset - Index cleared (version={generation})")

    def _chunk_files(self, files: list[UploadedFile]) -> tuple[list[TextChunk], set[str]]:
        chunks: list[TextChunk] = []
        failed: set[str] = set()
        for file in files:
            try:
                file_chunks = chunk_document(
                    file.name,
                    file.content,
                    chunk_size=self._settings.chunk_size,
                    overlap=self._settings.chunk_overlap,
                )
            except ChunkingError as e:
                logger.warning(f"{__name__}:ingest - Failed to chunk file {file.name!r}: {e}")
                failed.add(file.name)
                continue

            if not file_chunks:
                logger.warning(f"{__name__}:ingest - File {file.name!r} has no text to index")
                failed.add(file.name)
                continue
            chunks.extend(file_chunks)
        return chunks, failed

    async def ingest(self, files: Iterable[UploadedFile]) -> IngestionResult:
        """
        Replace the index with one built from the given files.

        Per-file chunking problems and per-batch embedding failures are
        reported in the result rather than raised. A file is reported failed
        when none of its chunks made it into the index, and partial when only
        some did.

        Args:
            files: Documents with already-extracted text

        Returns:
            IngestionResult: Failed and partial file names plus index stats

        Raises:
            ValidationError: When more than max_upload_files files are given
            IngestionError: When a provider-level embedding failure aborted
                the run; the index is left empty
        """
        files = list(files)
        if len(files) > self._settings.max_upload_files:
            raise ValidationError(
                f"You can upload a maximum of {self._settings.max_upload_files} documents.",
                field="files",
                details={"file_count": len(files)},
            )

        generation = self._start_generation(IndexState.INDEXING)
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:ingest - START generation={generation}, files={len(files)}",
            generation=generation,
            file_count=len(files),
        )

        chunks, failed = self._chunk_files(files)

        if not chunks:
            if self._is_current(generation):
                self._state = IndexState.EMPTY
            return IngestionResult(
                failed_file_names=failed,
                chunk_count=0,
                index_version=generation,
                published=self._is_current(generation),
            )

        try:
            outcome = await self._embedder.embed_all(chunks)
            index = VectorIndex(outcome.embedded, version=generation)
        except CatastrophicEmbeddingError as e:
            failed |= e.failed_sources
            self._abort_generation(generation)
            logger.error(
                f"{__name__}:ingest - A critical error occurred during document embedding: {e}"
            )
            raise IngestionError(
                f"Could not create document embeddings via API. {e.user_message}",
                failed_file_names=failed,
                details={"error_type": type(e.cause).__name__},
            ) from e
        except VectorIndexError as e:
            failed |= {file.name for file in files}
            self._abort_generation(generation)
            logger.error(f"{__name__}:ingest - Could not build vector index: {e}")
            raise IngestionError(
                "Could not build the document index from the embedding results. Please try again.",
                failed_file_names=failed,
                details=e.details,
            ) from e

        failed |= outcome.failed_sources
        if outcome.partial_sources:
            logger.warning(
                f"{__name__}:ingest - Partially indexed files: {sorted(outcome.partial_sources)}"
            )

        published = self._is_current(generation)
        if published:
            self._index = index
            self._state = IndexState.READY if len(index) else IndexState.EMPTY
            logger.info(
                f"{__name__}:ingest - END published version={generation}, chunks={len(index)}, "
                f"failed_files={len(failed)}"
            )
        else:
            logger.info(
                f"{__name__}:ingest - Discarding superseded index version={generation} "
                f"(current generation={self._generation})"
            )

        return IngestionResult(
            failed_file_names=failed,
            partial_file_names=set(outcome.partial_sources),
            chunk_count=len(index),
            index_version=generation,
            published=published,
        )

    def _abort_generation(self, generation: int) -> None:
        if self._is_current(generation):
            self._index = VectorIndex.empty(version=generation)
            self._state = IndexState.EMPTY

    async def search(self, query: str, top_k: int | None = None) -> list[SearchResult]:
        """
        Return the extracts most similar to the query.

        An empty index short-circuits to no results, before the query is
        validated and without calling the embedding gateway.

        Args:
            query: Natural-language question
            top_k: Maximum number of results (configured default if None)

        Returns:
            list[SearchResult]: At most top_k extracts, best first

        Raises:
            ValidationError: When the index is not empty and the query is blank
                or top_k is negative
            QueryEmbeddingError: When the query could not be embedded
        """
        # Snapshot: a concurrent ingest or reset may publish a new index
        index = self._index
        if index.is_empty:
            return []

        if not query or not query.strip():
            raise ValidationError("Query must not be empty", field="query")
        if top_k is None:
            top_k = self._settings.default_top_k
        if top_k < 0:
            raise ValidationError("top_k must be non-negative", field="top_k")
        if top_k == 0:
            return []

        try:
            query_vector = await self._gateway.embed_query(query)
        except EmbeddingError as e:
            logger.error(
                f"{__name__}:search - Failed to embed search query "
                f"{preview_text(query)!r}: {e}"
            )
            raise QueryEmbeddingError(
                f"Could not perform search via API. {e.user_message}",
                details={"error_type": type(e).__name__},
            ) from e

        ranked = self._ranker.rank(query_vector, index, top_k)
        logger.info(
            f"{__name__}:search - Returned {len(ranked)} of {len(index)} chunks "
            f"(index_version={index.version})"
        )
        return [
            SearchResult(source=item.chunk.source, text=item.chunk.text, score=item.score)
            for item in ranked
        ]
