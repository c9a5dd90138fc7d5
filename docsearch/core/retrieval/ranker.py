"""
Cosine-similarity ranker.

Scores every chunk of a vector index against a query vector and returns the
top-K, best first.

Dependencies: docsearch.core.retrieval.vector_math, docsearch.models
System role: Query-time ranking for retrieval
"""

import logging
import sys
from collections.abc import Sequence

from docsearch.core.retrieval.vector_index import VectorIndex
from docsearch.core.retrieval.vector_math import cosine_similarity
from docsearch.models.chunk import ScoredChunk

logger = logging.getLogger(__name__)

# Below every valid cosine value, so unembedded chunks never outrank a match
MISSING_EMBEDDING_SCORE = -sys.float_info.max


class SimilarityRanker:
    """Rank indexed chunks by cosine similarity to a query vector."""

    def score(self, query_vector: Sequence[float], index: VectorIndex) -> list[ScoredChunk]:
        """
        Score every chunk of the index, in index order.

        Args:
            query_vector: Embedding of the query
            index: Index to score

        Returns:
            list[ScoredChunk]: One entry per indexed chunk
        """
        scored = []
        for chunk in index:
            if not chunk.has_embedding:
                score = MISSING_EMBEDDING_SCORE
            else:
                score = cosine_similarity(query_vector, chunk.embedding)
            scored.append(ScoredChunk(chunk=chunk, score=score))
        return scored

    def rank(
        self,
        query_vector: Sequence[float],
        index: VectorIndex,
        top_k: int,
    ) -> list[ScoredChunk]:
        """
        Return the top_k chunks most similar to the query vector.

        The sort is stable, so chunks with equal scores keep their index
        order.

        Args:
            query_vector: Embedding of the query
            index: Index to search
            top_k: Maximum number of results

        Returns:
            list[ScoredChunk]: At most top_k chunks, descending by score
        """
        if top_k <= 0 or index.is_empty:
            return []

        scored = self.score(query_vector, index)
        scored.sort(key=lambda item: item.score, reverse=True)
        top = scored[:top_k]

        logger.debug(
            f"{__name__}:rank - Ranked {len(scored)} chunks, "
            f"returning {len(top)} (index_version={index.version})"
        )
        return top
