"""
Vector math primitives for similarity scoring.

Pure-Python dot product, magnitude and cosine similarity over plain float
sequences as returned by the embedding provider.

Dependencies: math (stdlib)
System role: Scoring primitives for the similarity ranker
"""

import math
from collections.abc import Sequence


def dot_product(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    """Sum of pairwise products over the shared length of both vectors."""
    return sum(a * b for a, b in zip(vec_a, vec_b))


def magnitude(vec: Sequence[float]) -> float:
    """Euclidean norm of a vector."""
    return math.sqrt(sum(v * v for v in vec))


def cosine_similarity(
    vec_a: Sequence[float] | None,
    vec_b: Sequence[float] | None,
) -> float:
    """
    Compute cosine similarity between two vectors.

    Never raises for degenerate input: absent or empty vectors, vectors of
    different lengths and zero-magnitude vectors all score 0.0.

    Args:
        vec_a: First vector
        vec_b: Second vector

    Returns:
        float: Similarity in [-1.0, 1.0]
    """
    if not vec_a or not vec_b or len(vec_a) != len(vec_b):
        return 0.0

    mag_a = magnitude(vec_a)
    mag_b = magnitude(vec_b)
    if mag_a == 0 or mag_b == 0:
        return 0.0

    similarity = dot_product(vec_a, vec_b) / (mag_a * mag_b)
    # Float rounding can push parallel vectors a hair past the bounds
    return max(-1.0, min(1.0, similarity))
