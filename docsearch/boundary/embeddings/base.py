"""
Embedding gateway interface.

Contract the retrieval core relies on for turning text into vectors.

Dependencies: abc (stdlib)
System role: Port between the retrieval core and embedding providers
"""

from abc import ABC, abstractmethod


class BaseEmbeddingGateway(ABC):
    """
    Asynchronous embedding provider.

    Implementations must raise ``docsearch.core.exceptions.EmbeddingError``
    subclasses for provider failures so callers can tell fatal errors
    (credentials, malformed requests) from transient ones.
    """

    @abstractmethod
    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """
        Embed a group of texts in a single provider request.

        The vector at position ``i`` must belong to ``texts[i]``; providers
        that reorder results are not valid implementations.

        Args:
            texts: Texts to embed

        Returns:
            list[list[float]]: One vector per input text, in input order
        """

    @abstractmethod
    async def embed_query(self, text: str) -> list[float]:
        """
        Embed a single search query.

        Args:
            text: Query text

        Returns:
            list[float]: Query vector
        """
