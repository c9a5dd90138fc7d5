"""
Test suite for retrieval API endpoints.

The retrieval service dependency is overridden with a service backed by the
in-memory FakeEmbeddingGateway.

System role: Verification of the retrieval HTTP API
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from conftest import FakeEmbeddingGateway
from docsearch.api.deps.dependencies import get_retrieval_service
from docsearch.api.main import create_app
from docsearch.application.retrieval_service import RetrievalService
from docsearch.configs.retrieval import RetrievalSettings
from docsearch.core.exceptions import EmbeddingAuthError, EmbeddingQuotaError

SKY_FILE = {"name": "doc.txt", "content": "The sky is blue. The grass is green."}


@pytest.fixture
def gateway() -> FakeEmbeddingGateway:
    """Provide the gateway behind the overridden service."""
    return FakeEmbeddingGateway()


@pytest.fixture
def service(gateway: FakeEmbeddingGateway, small_settings: RetrievalSettings) -> RetrievalService:
    """Provide a retrieval service with a small chunk window."""
    return RetrievalService(gateway=gateway, settings=small_settings)


@pytest.fixture
def client(service: RetrievalService) -> TestClient:
    """Provide a test client with the retrieval service overridden."""
    app = create_app()
    app.dependency_overrides[get_retrieval_service] = lambda: service
    return TestClient(app)


class TestIngestDocumentsEndpoint:
    """Test suite for POST /api/v1/retrieval/documents."""

    def test_ingest_should_return_index_summary(self, client: TestClient) -> None:
        """Should index the files and report counts."""
        # Act
        response = client.post("/api/v1/retrieval/documents", json={"files": [SKY_FILE]})

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["chunk_count"] == 3
        assert body["failed_file_names"] == []
        assert body["partial_file_names"] == []
        assert body["published"] is True

    def test_ingest_should_list_failed_files_sorted(self, client: TestClient) -> None:
        """Should report files without text in name order."""
        files = [SKY_FILE, {"name": "z.txt", "content": ""}, {"name": "a.txt", "content": ""}]

        response = client.post("/api/v1/retrieval/documents", json={"files": files})

        assert response.status_code == 200
        assert response.json()["failed_file_names"] == ["a.txt", "z.txt"]

    def test_ingest_should_reject_too_many_files(
        self, gateway: FakeEmbeddingGateway, small_settings: RetrievalSettings
    ) -> None:
        """Should return 400 when the upload cap is exceeded."""
        settings = small_settings.model_copy(update={"max_upload_files": 1})
        app = create_app()
        service = RetrievalService(gateway=gateway, settings=settings)
        app.dependency_overrides[get_retrieval_service] = lambda: service
        files = [SKY_FILE, {"name": "other.txt", "content": "text"}]

        response = TestClient(app).post("/api/v1/retrieval/documents", json={"files": files})

        assert response.status_code == 400
        assert "maximum of 1 documents" in response.json()["detail"]

    def test_ingest_should_return_502_on_provider_failure(
        self, small_settings: RetrievalSettings
    ) -> None:
        """Should map an aborted ingestion to 502 with the failed files."""
        gateway = FakeEmbeddingGateway(fail_on=("",), batch_error=EmbeddingAuthError("bad key"))
        app = create_app()
        service = RetrievalService(gateway=gateway, settings=small_settings)
        app.dependency_overrides[get_retrieval_service] = lambda: service

        response = TestClient(app).post("/api/v1/retrieval/documents", json={"files": [SKY_FILE]})

        assert response.status_code == 502
        detail = response.json()["detail"]
        assert detail["failed_file_names"] == ["doc.txt"]
        assert detail["message"].startswith("Could not create document embeddings via API.")

    def test_ingest_should_reject_file_without_name(self, client: TestClient) -> None:
        """Should fail request validation for an empty file name."""
        response = client.post(
            "/api/v1/retrieval/documents",
            json={"files": [{"name": "", "content": "text"}]},
        )

        assert response.status_code == 422

    def test_ingest_should_return_500_on_unexpected_error(self) -> None:
        """Should map unexpected failures to 500."""
        app = create_app()
        broken = MagicMock()
        broken.ingest = AsyncMock(side_effect=RuntimeError("disk on fire"))
        app.dependency_overrides[get_retrieval_service] = lambda: broken

        response = TestClient(app).post("/api/v1/retrieval/documents", json={"files": [SKY_FILE]})

        assert response.status_code == 500


class TestResetDocumentsEndpoint:
    """Test suite for DELETE /api/v1/retrieval/documents."""

    def test_reset_should_clear_index(self, client: TestClient) -> None:
        """Should return an empty index status."""
        client.post("/api/v1/retrieval/documents", json={"files": [SKY_FILE]})

        response = client.delete("/api/v1/retrieval/documents")

        assert response.status_code == 200
        assert response.json()["state"] == "empty"
        assert response.json()["chunk_count"] == 0


class TestSearchEndpoint:
    """Test suite for POST /api/v1/retrieval/search."""

    def test_search_should_return_ranked_extracts(self, client: TestClient) -> None:
        """Should return the best extract first."""
        # Arrange
        client.post("/api/v1/retrieval/documents", json={"files": [SKY_FILE]})

        # Act
        response = client.post(
            "/api/v1/retrieval/search",
            json={"query": "What color is the grass?", "top_k": 1},
        )

        # Assert
        assert response.status_code == 200
        results = response.json()["results"]
        assert len(results) == 1
        assert results[0]["source"] == "doc.txt"
        assert results[0]["text"] == ". The grass is green"

    def test_search_should_return_empty_results_without_documents(
        self, client: TestClient, gateway: FakeEmbeddingGateway
    ) -> None:
        """Should return no results and skip the provider for an empty index."""
        response = client.post("/api/v1/retrieval/search", json={"query": "sky"})

        assert response.status_code == 200
        assert response.json() == {"results": []}
        assert gateway.query_calls == []

    def test_search_should_reject_empty_query(self, client: TestClient) -> None:
        """Should fail request validation for an empty query string."""
        response = client.post("/api/v1/retrieval/search", json={"query": ""})

        assert response.status_code == 422

    def test_search_should_reject_whitespace_query(self, client: TestClient) -> None:
        """Should return 400 for a query with no visible characters."""
        client.post("/api/v1/retrieval/documents", json={"files": [SKY_FILE]})

        response = client.post("/api/v1/retrieval/search", json={"query": "   "})

        assert response.status_code == 400

    def test_search_should_reject_negative_top_k(self, client: TestClient) -> None:
        """Should fail request validation for a negative top_k."""
        response = client.post("/api/v1/retrieval/search", json={"query": "sky", "top_k": -1})

        assert response.status_code == 422

    def test_search_should_return_502_when_query_embedding_fails(
        self, client: TestClient, gateway: FakeEmbeddingGateway
    ) -> None:
        """Should map provider failures to 502 with a user-facing message."""
        client.post("/api/v1/retrieval/documents", json={"files": [SKY_FILE]})
        gateway.query_error = EmbeddingQuotaError("429")

        response = client.post("/api/v1/retrieval/search", json={"query": "sky"})

        assert response.status_code == 502
        assert response.json()["detail"].startswith("Could not perform search via API.")

    def test_search_should_accept_top_k_larger_than_index(self, client: TestClient) -> None:
        """Should return every chunk when top_k exceeds the index size."""
        client.post("/api/v1/retrieval/documents", json={"files": [SKY_FILE]})

        response = client.post("/api/v1/retrieval/search", json={"query": "sky", "top_k": 1000})

        assert response.status_code == 200
        assert len(response.json()["results"]) == 3
