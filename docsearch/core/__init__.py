"""
Core business logic module.

Contains the exception hierarchy and the retrieval components (chunking,
batch embedding, indexing, ranking).
"""

from docsearch.core.exceptions import (
    CatastrophicEmbeddingError,
    ChunkingError,
    DocSearchException,
    EmbeddingAuthError,
    EmbeddingContentBlockedError,
    EmbeddingError,
    EmbeddingQuotaError,
    EmbeddingRequestError,
    IngestionError,
    QueryEmbeddingError,
    RetrievalError,
    ValidationError,
    VectorIndexError,
)

__all__ = [
    "DocSearchException",
    "ValidationError",
    "ChunkingError",
    "EmbeddingError",
    "EmbeddingAuthError",
    "EmbeddingRequestError",
    "EmbeddingQuotaError",
    "EmbeddingContentBlockedError",
    "CatastrophicEmbeddingError",
    "VectorIndexError",
    "IngestionError",
    "RetrievalError",
    "QueryEmbeddingError",
]
