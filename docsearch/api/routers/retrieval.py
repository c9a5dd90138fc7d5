"""
Retrieval API endpoints.

Routes: POST /retrieval/documents, DELETE /retrieval/documents, POST /retrieval/search

Dependencies: docsearch.application, docsearch.models
System role: Retrieval HTTP API
"""

from fastapi import APIRouter, Depends

from docsearch.api.deps.dependencies import get_retrieval_service
from docsearch.api.routers.error_handling import handle_retrieval_errors
from docsearch.application.retrieval_service import RetrievalService
from docsearch.models.document import IngestRequest, IngestResponse
from docsearch.models.search import IndexStatusResponse, SearchRequest, SearchResponse

router = APIRouter(prefix="/retrieval", tags=["retrieval"])


@router.post("/documents", response_model=IngestResponse)
@handle_retrieval_errors
async def ingest_documents(
    request: IngestRequest,
    service: RetrievalService = Depends(get_retrieval_service),
) -> IngestResponse:
    """Replace the searchable document set with the uploaded files."""
    result = await service.ingest(request.files)
    return IngestResponse.from_result(result)


@router.delete("/documents", response_model=IndexStatusResponse)
@handle_retrieval_errors
async def reset_documents(
    service: RetrievalService = Depends(get_retrieval_service),
) -> IndexStatusResponse:
    """Discard all indexed documents."""
    service.reset()
    return IndexStatusResponse(
        state=service.state.value,
        index_version=service.index_version,
        chunk_count=service.chunk_count,
    )


@router.post("/search", response_model=SearchResponse)
@handle_retrieval_errors
async def search_documents(
    request: SearchRequest,
    service: RetrievalService = Depends(get_retrieval_service),
) -> SearchResponse:
    """Return the extracts most relevant to the query."""
    results = await service.search(request.query, top_k=request.top_k)
    return SearchResponse(results=results)
