"""
Chunk domain models.

Represents document chunks before and after embedding.

Dependencies: pydantic
System role: Chunk data structures for the retrieval pipeline
"""

from pydantic import BaseModel, ConfigDict, Field


class TextChunk(BaseModel):
    """A window of document text that has not been embedded yet."""

    model_config = ConfigDict(frozen=True)

    source: str = Field(description="Name of the originating document")
    text: str = Field(description="Verbatim substring of the document")
    position: int = Field(default=0, ge=0, description="Index of the chunk within its document")


class DocumentChunk(BaseModel):
    """Chunk with its embedding vector, as stored in the vector index."""

    model_config = ConfigDict(frozen=True)

    source: str = Field(description="Name of the originating document")
    text: str = Field(description="Verbatim substring of the document")
    embedding: list[float] = Field(
        default_factory=list,
        description="Embedding vector (empty when no embedding could be obtained)",
    )

    @property
    def has_embedding(self) -> bool:
        """Whether the chunk carries a usable vector."""
        return len(self.embedding) > 0


class ScoredChunk(BaseModel):
    """Indexed chunk paired with its similarity to a query."""

    model_config = ConfigDict(frozen=True)

    chunk: DocumentChunk
    score: float = Field(description="Cosine similarity, or the missing-embedding sentinel")
