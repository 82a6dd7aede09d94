"""User-facing error messages for the studio tools.

``user_message`` is a total function over ``ErrorKind``. Gemini errors carry
their kind already; ``classify_exception`` falls back to the message text for
anything else that reaches a controller.
"""

from enum import Enum

from clients.gemini_client import GeminiError


class ErrorKind(str, Enum):
    UNAUTHORIZED = "unauthorized"
    RATE_LIMITED = "rate_limited"
    CONTENT_BLOCKED = "content_blocked"
    NO_RESPONSE = "no_response"
    MALFORMED = "malformed"
    UNKNOWN = "unknown"


INVALID_API_KEY_MESSAGE = "Invalid API Key. Please check your settings."
RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please wait a moment before retrying."

# Per-tool wording for the generic and safety-filter cases
GENERIC_MESSAGES = {
    "title": "Failed to analyze title. Please try again.",
    "thumbnail": "Analysis failed. Ensure the image is valid and try again.",
    "seo": "Failed to generate content. Please try again.",
    "trend": "Failed to analyze trend. Please try again.",
}

SAFETY_MESSAGES = {
    "title": "The content was blocked by safety filters. Please try a different title.",
    "thumbnail": "Image flagged by safety filters.",
    "seo": "Content flagged by safety filters.",
    "trend": "The content was blocked by safety filters. Please try a different trend.",
}

DEFAULT_GENERIC_MESSAGE = "Failed to generate. Please try again."
DEFAULT_SAFETY_MESSAGE = "The content was blocked by safety filters."


def classify_exception(error: BaseException) -> ErrorKind:
    """Tag a failure. Gemini errors are trusted; others are read from the text."""
    if isinstance(error, GeminiError):
        return ErrorKind(error.kind)

    message = str(error)
    if "API key" in message:
        return ErrorKind.UNAUTHORIZED
    if "429" in message:
        return ErrorKind.RATE_LIMITED
    if "Safety" in message or "blocked" in message:
        return ErrorKind.CONTENT_BLOCKED
    return ErrorKind.UNKNOWN


def user_message(kind: ErrorKind, tool: str, raw_message: str = "") -> str:
    """Message shown to the user for a failure of ``kind`` in ``tool``."""
    if kind == ErrorKind.UNAUTHORIZED:
        return INVALID_API_KEY_MESSAGE
    if kind == ErrorKind.RATE_LIMITED:
        return RATE_LIMIT_MESSAGE
    if kind == ErrorKind.CONTENT_BLOCKED:
        return SAFETY_MESSAGES.get(tool, DEFAULT_SAFETY_MESSAGE)
    if kind in (ErrorKind.NO_RESPONSE, ErrorKind.MALFORMED):
        return GENERIC_MESSAGES.get(tool, DEFAULT_GENERIC_MESSAGE)
    return raw_message or GENERIC_MESSAGES.get(tool, DEFAULT_GENERIC_MESSAGE)
