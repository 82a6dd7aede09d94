"""API Clients for ViralShorts Studio."""

from .gemini_client import (
    GeminiClient,
    GeminiError,
    GeminiAuthError,
    GeminiRateLimitError,
    GeminiBlockedError,
    GeminiMalformedResponseError,
    GeminiEmptyResponseError,
    classify_http_error,
)

__all__ = [
    "GeminiClient",
    "GeminiError",
    "GeminiAuthError",
    "GeminiRateLimitError",
    "GeminiBlockedError",
    "GeminiMalformedResponseError",
    "GeminiEmptyResponseError",
    "classify_http_error",
]
