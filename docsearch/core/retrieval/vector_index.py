"""
In-memory vector index.

Immutable, versioned collection of embedded chunks. Ingestion builds a new
index value and the retrieval service swaps it in whole; an index is never
mutated after construction.

Dependencies: docsearch.models, docsearch.core.exceptions
System role: Published search corpus for the similarity ranker
"""

from collections.abc import Iterable, Iterator

from docsearch.core.exceptions import VectorIndexError
from docsearch.models.chunk import DocumentChunk


class VectorIndex:
    """
    Ordered, read-only collection of DocumentChunks.

    All chunks that carry an embedding share one dimensionality. Chunks
    without an embedding are allowed and are ranked below every match.
    """

    __slots__ = ("_chunks", "_version", "_dimension")

    def __init__(self, chunks: Iterable[DocumentChunk] = (), version: int = 0) -> None:
        """
        Build an index from embedded chunks.

        Args:
            chunks: Chunks in insertion order
            version: Monotonic version assigned by the owning service

        Raises:
            VectorIndexError: When embeddings have different lengths
        """
        self._chunks: tuple[DocumentChunk, ...] = tuple(chunks)
        self._version = version
        self._dimension = self._check_dimension(self._chunks)

    @staticmethod
    def _check_dimension(chunks: tuple[DocumentChunk, ...]) -> int | None:
        dimension: int | None = None
        for chunk in chunks:
            if not chunk.has_embedding:
                continue
            if dimension is None:
                dimension = len(chunk.embedding)
            elif len(chunk.embedding) != dimension:
                raise VectorIndexError(
                    "Embedding dimensions must match across the index",
                    details={
                        "expected": dimension,
                        "actual": len(chunk.embedding),
                        "source": chunk.source,
                    },
                )
        return dimension

    @classmethod
    def empty(cls, version: int = 0) -> "VectorIndex":
        """Create an index with no chunks."""
        return cls((), version=version)

    @property
    def chunks(self) -> tuple[DocumentChunk, ...]:
        return self._chunks

    @property
    def version(self) -> int:
        return self._version

    @property
    def dimension(self) -> int | None:
        """Shared embedding length, or None when no chunk is embedded."""
        return self._dimension

    @property
    def is_empty(self) -> bool:
        return not self._chunks

    def sources(self) -> set[str]:
        """Names of all documents with at least one indexed chunk."""
        return {chunk.source for chunk in self._chunks}

    def __len__(self) -> int:
        return len(self._chunks)

    def __iter__(self) -> Iterator[DocumentChunk]:
        return iter(self._chunks)

    def __repr__(self) -> str:
        return (
            f"VectorIndex(version={self._version}, chunks={len(self._chunks)}, "
            f"dimension={self._dimension})"
        )
