"""
Domain and API models.

Pydantic models for chunks, ingestion and search.
"""

from docsearch.models.chunk import DocumentChunk, ScoredChunk, TextChunk
from docsearch.models.document import (
    IngestionResult,
    IngestRequest,
    IngestResponse,
    UploadedFile,
)
from docsearch.models.search import (
    IndexStatusResponse,
    SearchRequest,
    SearchResponse,
    SearchResult,
)

__all__ = [
    "TextChunk",
    "DocumentChunk",
    "ScoredChunk",
    "UploadedFile",
    "IngestionResult",
    "IngestRequest",
    "IngestResponse",
    "SearchResult",
    "SearchRequest",
    "SearchResponse",
    "IndexStatusResponse",
]
