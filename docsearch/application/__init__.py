"""
Application layer.

Services that orchestrate the retrieval core for callers.
"""

from docsearch.application.retrieval_service import IndexState, RetrievalService

__all__ = ["IndexState", "RetrievalService"]
