"""
Embedding provider configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Embedding model and credential configuration
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmbeddingSettings(BaseSettings):
    """Google Gemini embedding configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EMBEDDING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    model: str = Field(
        default="models/text-embedding-004",
        description="Google embedding model ID",
    )
    google_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("EMBEDDING_GOOGLE_API_KEY", "GOOGLE_API_KEY", "google_api_key"),
        description="Google API key (empty defers to the SDK's own lookup)",
    )
    document_task_type: str | None = Field(
        default="RETRIEVAL_DOCUMENT",
        description="Task type sent when embedding document chunks",
    )
    query_task_type: str | None = Field(
        default="RETRIEVAL_QUERY",
        description="Task type sent when embedding search queries",
    )
