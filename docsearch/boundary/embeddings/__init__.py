"""
Embedding provider boundary.

Provides the embedding gateway interface, the Gemini implementation and
provider error classification.

Dependencies: langchain_google_genai
System role: Embedding adapter for chunk ingestion and query search
"""

from docsearch.boundary.embeddings.base import BaseEmbeddingGateway
from docsearch.boundary.embeddings.errors import classify_embedding_error


def get_gemini_gateway():
    """Lazy import for GeminiEmbeddingGateway to keep the SDK import optional at startup."""
    from docsearch.boundary.embeddings.gemini_gateway import GeminiEmbeddingGateway
    return GeminiEmbeddingGateway


__all__ = [
    "BaseEmbeddingGateway",
    "classify_embedding_error",
    "get_gemini_gateway",
]
