"""
Google Gemini embedding gateway.

Embeds document chunks and queries with Google Generative AI embeddings
(text-embedding-004 by default) through LangChain's async interface.

Dependencies: langchain_google_genai, docsearch.boundary.embeddings
System role: Production embedding adapter
"""

import logging

from langchain_google_genai import GoogleGenerativeAIEmbeddings

from docsearch.boundary.embeddings.base import BaseEmbeddingGateway
from docsearch.boundary.embeddings.errors import classify_embedding_error
from docsearch.configs.embedding import EmbeddingSettings
from docsearch.core.exceptions import EmbeddingError

logger = logging.getLogger(__name__)


class GeminiEmbeddingGateway(BaseEmbeddingGateway):
    """
    Embedding gateway backed by GoogleGenerativeAIEmbeddings.

    Every ``embed_batch`` call is sent as exactly one provider request, so
    batching and concurrency stay under the control of the caller.
    """

    def __init__(
        self,
        model: str = "models/text-embedding-004",
        google_api_key: str | None = None,
        document_task_type: str | None = "RETRIEVAL_DOCUMENT",
        query_task_type: str | None = "RETRIEVAL_QUERY",
    ) -> None:
        """
        Initialize Gemini embeddings client.

        Args:
            model: Google embedding model ID
            google_api_key: API key (falls back to GOOGLE_API_KEY when None)
            document_task_type: Task type sent with document batches
            query_task_type: Task type sent with queries
        """
        kwargs = {"model": model}
        if google_api_key:
            kwargs["google_api_key"] = google_api_key

        self._model = model
        self._document_task_type = document_task_type
        self._query_task_type = query_task_type
        self._embeddings = GoogleGenerativeAIEmbeddings(**kwargs)
        logger.info(f"{__name__}:__init__ - Initialized with model={model}")

    @classmethod
    def from_settings(cls, settings: EmbeddingSettings) -> "GeminiEmbeddingGateway":
        """Build a gateway from embedding settings."""
        return cls(
            model=settings.model,
            google_api_key=settings.google_api_key or None,
            document_task_type=settings.document_task_type,
            query_task_type=settings.query_task_type,
        )

    @property
    def model(self) -> str:
        return self._model

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """
        Embed a group of texts in one request.

        Args:
            texts: Texts to embed

        Returns:
            list[list[float]]: One vector per text, in input order

        Raises:
            EmbeddingError: Classified provider failure
        """
        if not texts:
            return []

        try:
            vectors = await self._embeddings.aembed_documents(
                texts,
                batch_size=len(texts),
                task_type=self._document_task_type,
            )
        except Exception as e:
            raise classify_embedding_error(e, operation="embed_batch") from e

        return [list(vector) for vector in vectors]

    async def embed_query(self, text: str) -> list[float]:
        """
        Embed a search query.

        Args:
            text: Query text

        Returns:
            list[float]: Query vector

        Raises:
            EmbeddingError: Classified provider failure or empty response
        """
        try:
            vector = await self._embeddings.aembed_query(
                text,
                task_type=self._query_task_type,
            )
        except Exception as e:
            raise classify_embedding_error(e, operation="embed_query") from e

        if not vector:
            raise EmbeddingError(
                "Embedding provider returned an empty query vector",
                details={"operation": "embed_query", "model": self._model},
            )
        return list(vector)
