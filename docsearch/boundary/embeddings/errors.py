"""
Embedding provider error classification.

Maps arbitrary exceptions raised by embedding SDKs to the domain's
EmbeddingError hierarchy. Looks for HTTP-style status codes anywhere on the
exception chain first, then falls back to well-known message markers, since
SDK wrappers often re-raise provider errors as generic exceptions.

Dependencies: docsearch.core.exceptions
System role: Provider-agnostic error taxonomy for the embedding boundary
"""

from docsearch.core.exceptions import (
    EmbeddingAuthError,
    EmbeddingContentBlockedError,
    EmbeddingError,
    EmbeddingQuotaError,
    EmbeddingRequestError,
)

_AUTH_MARKERS = (
    "api key",
    "api_key",
    "unauthenticated",
    "permission denied",
    "permission_denied",
    "invalid authentication",
)
_QUOTA_MARKERS = ("429", "quota", "rate limit", "resource exhausted", "resource_exhausted")
_BLOCKED_MARKERS = ("safety", "blocked")
_REQUEST_MARKERS = ("invalid argument", "invalid_argument", "malformed", "bad request")

_STATUS_TO_ERROR: dict[int, type[EmbeddingError]] = {
    400: EmbeddingRequestError,
    401: EmbeddingAuthError,
    403: EmbeddingAuthError,
    429: EmbeddingQuotaError,
}


def _exception_chain(exc: BaseException) -> list[BaseException]:
    chain: list[BaseException] = []
    current: BaseException | None = exc
    while current is not None and current not in chain:
        chain.append(current)
        current = current.__cause__ or current.__context__
    return chain


def _status_code(exc: BaseException) -> int | None:
    for attr in ("code", "status_code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    response = getattr(exc, "response", None)
    value = getattr(response, "status_code", None)
    if isinstance(value, int):
        return value
    return None


def classify_embedding_error(exc: BaseException, operation: str = "embed") -> EmbeddingError:
    """
    Convert a provider exception into a classified EmbeddingError.

    Message markers take precedence over status codes for credentials, since
    some providers report an invalid key as a 400. Already-classified errors
    are returned unchanged.

    Args:
        exc: Exception raised by the provider SDK
        operation: Name of the failed operation, recorded in details

    Returns:
        EmbeddingError: Classified error (not raised)
    """
    if isinstance(exc, EmbeddingError):
        return exc

    chain = _exception_chain(exc)
    text = " ".join(str(e) for e in chain).lower()
    details = {"operation": operation, "error_type": type(exc).__name__}

    error_cls: type[EmbeddingError] = EmbeddingError
    if any(marker in text for marker in _AUTH_MARKERS):
        error_cls = EmbeddingAuthError
    else:
        for e in chain:
            code = _status_code(e)
            if code in _STATUS_TO_ERROR:
                error_cls = _STATUS_TO_ERROR[code]
                details["status_code"] = code
                break
            if code is not None and code >= 500:
                details["status_code"] = code
                break
        else:
            if any(marker in text for marker in _QUOTA_MARKERS):
                error_cls = EmbeddingQuotaError
            elif any(marker in text for marker in _BLOCKED_MARKERS):
                error_cls = EmbeddingContentBlockedError
            elif any(marker in text for marker in _REQUEST_MARKERS):
                error_cls = EmbeddingRequestError

    if error_cls is EmbeddingRequestError and any(m in text for m in _BLOCKED_MARKERS):
        error_cls = EmbeddingContentBlockedError

    return error_cls(f"Embedding {operation} failed: {exc}", details=details)
