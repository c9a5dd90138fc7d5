"""
Retrieval error handling utilities.

Provides a decorator for consistent error handling across retrieval
endpoints, mapping domain exceptions to HTTP responses.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from docsearch.core.exceptions import (
    ChunkingError,
    IngestionError,
    QueryEmbeddingError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def handle_retrieval_errors(func: F) -> F:
    """
    Decorator to handle retrieval errors and transform them into HTTPExceptions.

    - ValidationError / ChunkingError -> 400
    - IngestionError / QueryEmbeddingError -> 502 (embedding provider failed)
    - anything else -> 500
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except (ValidationError, ChunkingError) as e:
            logger.warning("Invalid retrieval request", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=e.message,
            )

        except IngestionError as e:
            logger.error(
                "Document ingestion failed",
                extra={"error": str(e), "failed_files": sorted(e.failed_file_names)},
            )
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail={
                    "message": e.message,
                    "failed_file_names": sorted(e.failed_file_names),
                },
            )

        except QueryEmbeddingError as e:
            logger.error("Search failed", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=e.message,
            )

        except HTTPException:
            raise

        except Exception as e:
            logger.exception(
                "Unexpected failure in retrieval operation",
                extra={"error": str(e)},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"An internal error occurred during retrieval operation: {str(e)}",
            )

    return wrapper  # type: ignore
