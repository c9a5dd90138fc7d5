"""
Search models.

Query and ranked-extract shapes returned to the orchestrating application.

Dependencies: pydantic
System role: Search data structures shared by the service and the API
"""

from pydantic import BaseModel, Field


class SearchResult(BaseModel):
    """A verbatim extract ranked against a query."""

    source: str = Field(description="Name of the originating document")
    text: str = Field(description="Verbatim chunk text")
    score: float = Field(description="Cosine similarity to the query")


class SearchRequest(BaseModel):
    """Request body for POST /retrieval/search."""

    query: str = Field(min_length=1, description="Natural-language question")
    top_k: int | None = Field(
        default=None,
        ge=0,
        description="Maximum number of extracts (defaults to configured top_k)",
    )


class SearchResponse(BaseModel):
    """Response body for POST /retrieval/search."""

    results: list[SearchResult]


class IndexStatusResponse(BaseModel):
    """State of the published vector index."""

    state: str
    index_version: int
    chunk_count: int
