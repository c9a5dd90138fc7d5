"""
Health check API endpoints.

Routes: GET /health, GET /health/index

Dependencies: docsearch.application
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from docsearch.api.deps.dependencies import get_retrieval_service
from docsearch.application.retrieval_service import RetrievalService
from docsearch.models.search import IndexStatusResponse


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/index", response_model=IndexStatusResponse)
async def health_check_index(
    service: RetrievalService = Depends(get_retrieval_service),
) -> IndexStatusResponse:
    """Report the state of the published vector index."""
    return IndexStatusResponse(
        state=service.state.value,
        index_version=service.index_version,
        chunk_count=service.chunk_count,
    )
