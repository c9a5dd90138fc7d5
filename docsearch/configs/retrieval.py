"""
Retrieval configuration settings.

Chunking window, embedding batch sizing, concurrency and search defaults.

Dependencies: pydantic, pydantic_settings
System role: Tuning knobs for ingestion and search
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RetrievalSettings(BaseSettings):
    """Retrieval pipeline configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RETRIEVAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking settings
    chunk_size: int = Field(default=512, gt=0, description="Chunk window width in characters")
    chunk_overlap: int = Field(
        default=50,
        ge=0,
        description="Characters shared by consecutive chunks",
    )

    # Embedding batch settings
    embedding_batch_size: int = Field(
        default=100,
        gt=0,
        description="Maximum chunks per embedding request (provider limit is often 100)",
    )
    max_concurrent_batches: int = Field(
        default=8,
        gt=0,
        description="Maximum embedding requests in flight during ingestion",
    )
    embedding_max_attempts: int = Field(
        default=1,
        ge=1,
        description="Attempts per batch on rate-limit errors (1 disables retries)",
    )
    retry_initial_wait: float = Field(
        default=1.0,
        ge=0.0,
        description="Initial backoff in seconds between batch attempts",
    )

    # Search settings
    default_top_k: int = Field(default=5, ge=0, description="Extracts returned when top_k is omitted")
    max_upload_files: int = Field(
        default=100,
        gt=0,
        description="Maximum documents accepted by a single ingestion",
    )

    @model_validator(mode="after")
    def _check_window(self) -> "RetrievalSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be less than chunk_size")
        return self
