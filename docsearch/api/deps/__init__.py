"""FastAPI dependency providers."""

from docsearch.api.deps.dependencies import (
    ServiceCache,
    get_retrieval_service,
    get_service_cache,
    get_settings_dependency,
)

__all__ = [
    "ServiceCache",
    "get_retrieval_service",
    "get_service_cache",
    "get_settings_dependency",
]
