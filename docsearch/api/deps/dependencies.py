"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: docsearch.configs, docsearch.application, docsearch.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from docsearch.application.retrieval_service import RetrievalService
from docsearch.configs import Settings, get_settings


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self) -> None:
        self._gateway = None
        self._retrieval_service: RetrievalService | None = None

    @property
    def gateway(self):
        """Get cached embedding gateway."""
        if self._gateway is None:
            from docsearch.boundary.embeddings.gemini_gateway import GeminiEmbeddingGateway

            self._gateway = GeminiEmbeddingGateway.from_settings(get_settings().embedding)
        return self._gateway

    @property
    def retrieval_service(self) -> RetrievalService:
        """Get the long-lived retrieval service that owns the index."""
        if self._retrieval_service is None:
            self._retrieval_service = RetrievalService(
                gateway=self.gateway,
                settings=get_settings().retrieval,
            )
        return self._retrieval_service

    def clear(self) -> None:
        """Clear all cached instances."""
        self._gateway = None
        self._retrieval_service = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_retrieval_service() -> RetrievalService:
    """
    Get the retrieval service instance.

    One instance serves every request so ingestions and searches share the
    same published index.

    Returns:
        RetrievalService: Cached retrieval service
    """
    return get_service_cache().retrieval_service
