"""
Retrieval module.

This module provides:
- Chunking: Split documents into overlapping character windows
- Batch embedding: Embed chunks in concurrent, failure-isolated groups
- Indexing: Immutable, versioned in-memory vector index
- Ranking: Cosine-similarity top-K search
"""

from docsearch.core.retrieval.batch_embedder import (
    BatchEmbedder,
    BatchEmbeddingOutcome,
    partition,
)
from docsearch.core.retrieval.chunker import chunk_document, chunk_text
from docsearch.core.retrieval.ranker import MISSING_EMBEDDING_SCORE, SimilarityRanker
from docsearch.core.retrieval.vector_index import VectorIndex
from docsearch.core.retrieval.vector_math import cosine_similarity, dot_product, magnitude

__all__ = [
    "BatchEmbedder",
    "BatchEmbeddingOutcome",
    "partition",
    "chunk_document",
    "chunk_text",
    "MISSING_EMBEDDING_SCORE",
    "SimilarityRanker",
    "VectorIndex",
    "cosine_similarity",
    "dot_product",
    "magnitude",
]
