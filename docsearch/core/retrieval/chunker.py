"""
Fixed-size sliding-window text chunker.

Splits document text into overlapping character windows. Pure and
deterministic: the same text and parameters always yield the same chunks.

Dependencies: docsearch.models, docsearch.core.exceptions
System role: First stage of document ingestion
"""

from docsearch.core.exceptions import ChunkingError
from docsearch.models.chunk import TextChunk

DEFAULT_CHUNK_SIZE = 512
DEFAULT_CHUNK_OVERLAP = 50


def _validate_window(chunk_size: int, overlap: int) -> None:
    if chunk_size <= 0:
        raise ChunkingError(
            "chunk_size must be positive",
            details={"chunk_size": chunk_size},
        )
    if overlap < 0:
        raise ChunkingError(
            "overlap must be non-negative",
            details={"overlap": overlap},
        )
    if overlap >= chunk_size:
        raise ChunkingError(
            "overlap must be less than chunk_size",
            details={"chunk_size": chunk_size, "overlap": overlap},
        )


def chunk_text(
    text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_CHUNK_OVERLAP,
) -> list[str]:
    """
    Split text into overlapping chunks.

    Windows of ``chunk_size`` characters start every ``chunk_size - overlap``
    characters. The last window is truncated at the end of the text, and no
    window is emitted once one has reached the end.

    Args:
        text: Text content to chunk
        chunk_size: Window width in characters
        overlap: Characters shared by consecutive chunks

    Returns:
        list[str]: Ordered chunks (empty for empty text)

    Raises:
        ChunkingError: When chunk_size <= overlap or overlap < 0
    """
    _validate_window(chunk_size, overlap)
    if not text:
        return []

    chunks: list[str] = []
    text_len = len(text)
    step = chunk_size - overlap
    start = 0
    while start < text_len:
        end = min(start + chunk_size, text_len)
        chunks.append(text[start:end])
        if end == text_len:
            break
        start += step

    return chunks


def chunk_document(
    source: str,
    content: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_CHUNK_OVERLAP,
) -> list[TextChunk]:
    """
    Chunk a document and tag every chunk with its source and position.

    Args:
        source: Document name
        content: Document text
        chunk_size: Window width in characters
        overlap: Characters shared by consecutive chunks

    Returns:
        list[TextChunk]: Chunks in document order

    Raises:
        ChunkingError: When the content is not text or the window is invalid
    """
    if not isinstance(content, str):
        raise ChunkingError(
            f"Document content must be text, got {type(content).__name__}",
            source=source,
        )

    try:
        windows = chunk_text(content, chunk_size=chunk_size, overlap=overlap)
    except ChunkingError as e:
        e.details["source"] = source
        raise

    return [
        TextChunk(source=source, text=window, position=position)
        for position, window in enumerate(windows)
    ]
