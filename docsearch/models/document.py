"""
Document ingestion models.

Request and result shapes for replacing the searchable document set.

Dependencies: pydantic
System role: Ingestion data structures shared by the service and the API
"""

from pydantic import BaseModel, Field


class UploadedFile(BaseModel):
    """A document whose text has already been extracted by the caller."""

    name: str = Field(min_length=1, description="File name, used as the chunk source")
    content: str = Field(description="Plain text content of the document")


class IngestionResult(BaseModel):
    """Outcome of an ingestion run."""

    failed_file_names: set[str] = Field(
        default_factory=set,
        description="Files with no chunk in the published index",
    )
    partial_file_names: set[str] = Field(
        default_factory=set,
        description="Files with some, but not all, chunks embedded",
    )
    chunk_count: int = Field(default=0, description="Number of chunks in the resulting index")
    index_version: int = Field(default=0, description="Version of the index built by this run")
    published: bool = Field(
        default=True,
        description="False when a newer ingest or reset superseded this run",
    )


class IngestRequest(BaseModel):
    """Request body for POST /retrieval/documents."""

    files: list[UploadedFile] = Field(description="Documents that replace the current index")


class IngestResponse(BaseModel):
    """Response body for POST /retrieval/documents."""

    failed_file_names: list[str]
    partial_file_names: list[str]
    chunk_count: int
    index_version: int
    published: bool

    @classmethod
    def from_result(cls, result: IngestionResult) -> "IngestResponse":
        """Build a response with deterministically ordered file names."""
        return cls(
            failed_file_names=sorted(result.failed_file_names),
            partial_file_names=sorted(result.partial_file_names),
            chunk_count=result.chunk_count,
            index_version=result.index_version,
            published=result.published,
        )
