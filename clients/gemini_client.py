"""Google Gemini API client for structured JSON generation."""

import logging
import os
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

# Finish reasons that mean the candidate was withheld by a content filter
BLOCKED_FINISH_REASONS = {"SAFETY", "BLOCKLIST", "PROHIBITED_CONTENT", "SPII", "IMAGE_SAFETY"}


class GeminiError(Exception):
    """Base error for a failed Gemini call. ``kind`` tags the failure."""

    kind = "unknown"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class GeminiAuthError(GeminiError):
    """Missing or rejected API key."""

    kind = "unauthorized"


class GeminiRateLimitError(GeminiError):
    """Upstream returned 429 / RESOURCE_EXHAUSTED."""

    kind = "rate_limited"


class GeminiBlockedError(GeminiError):
    """Prompt or candidate blocked by the safety filters."""

    kind = "content_blocked"


class GeminiMalformedResponseError(GeminiError):
    """Response text is not JSON, or does not match the declared schema."""

    kind = "malformed"


class GeminiEmptyResponseError(GeminiMalformedResponseError):
    """Response carried no text at all."""

    kind = "no_response"

    def __init__(self, message: str = "No response from Gemini", status_code: Optional[int] = None):
        super().__init__(message, status_code)


def classify_http_error(status_code: int, message: str) -> GeminiError:
    """Map an HTTP error from the Gemini API onto the tagged error types."""
    lowered = message.lower()
    if status_code in (401, 403) or "api key" in lowered or "api_key_invalid" in lowered:
        return GeminiAuthError(message, status_code)
    if status_code == 429 or "resource_exhausted" in lowered:
        return GeminiRateLimitError(message, status_code)
    if "safety" in lowered or "blocked" in lowered:
        return GeminiBlockedError(message, status_code)
    return GeminiError(message, status_code)


class GeminiClient:
    """Client for Google Gemini API (REST-based, no SDK dependency)."""

    BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
    DEFAULT_MODEL = "gemini-2.5-flash"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key or os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
        self.model = model or self.DEFAULT_MODEL
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout
        self._transport = transport
        # Don't raise here - the key is checked per call so the failure surfaces as a tagged error
        if not self.api_key:
            logger.warning("GEMINI_API_KEY not found - every request will fail as unauthorized")

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    def _require_api_key(self):
        """Raise a tagged error if the API key is missing (called before actual API use)."""
        if not self.api_key:
            raise GeminiAuthError("GEMINI_API_KEY not found in environment (API key missing)")

    def build_payload(
        self,
        instruction: str,
        schema: dict,
        image: Optional[dict] = None,
    ) -> dict:
        """Build the generateContent request body.

        Args:
            instruction: Prompt text.
            schema: Gemini responseSchema the JSON reply must follow.
            image: Optional ``{"mime_type": ..., "data": <base64>}`` inline image.
                Sent before the text part.
        """
        parts = []
        if image is not None:
            parts.append({
                "inline_data": {
                    "mime_type": image["mime_type"],
                    "data": image["data"],
                }
            })
        parts.append({"text": instruction})

        return {
            "contents": [{"parts": parts}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": schema,
            },
        }

    async def generate_json_text(
        self,
        instruction: str,
        schema: dict,
        image: Optional[dict] = None,
        model: Optional[str] = None,
    ) -> str:
        """Issue one generateContent call and return the raw JSON text.

        No retry and no streaming: the request is awaited to completion.

        Returns:
            The text payload of the first candidate (expected to be JSON).

        Raises:
            GeminiAuthError, GeminiRateLimitError, GeminiBlockedError,
            GeminiEmptyResponseError, GeminiMalformedResponseError, GeminiError
        """
        self._require_api_key()

        model_name = model or self.model
        url = f"{self.base_url}/models/{model_name}:generateContent"
        params = {"key": self.api_key}
        payload = self.build_payload(instruction, schema, image)

        logger.info(
            "Gemini request: model=%s, parts=%d",
            model_name,
            len(payload["contents"][0]["parts"]),
        )

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, params=params, json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            error = classify_http_error(e.response.status_code, self._error_message(e.response))
            logger.warning("Gemini API error %s: %s", e.response.status_code, error.message)
            raise error from e
        except httpx.HTTPError as e:
            raise GeminiError(f"Gemini request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise GeminiMalformedResponseError(
                f"Gemini returned a non-JSON body: {response.text[:200]}", response.status_code
            ) from e

        return self.extract_text(data)

    @staticmethod
    def extract_text(data: dict) -> str:
        """Pull the text payload out of a generateContent response body."""
        if not isinstance(data, dict):
            raise GeminiMalformedResponseError(
                f"Gemini response body is a {type(data).__name__}, expected an object"
            )

        block_reason = (data.get("promptFeedback") or {}).get("blockReason")
        if block_reason:
            raise GeminiBlockedError(f"Prompt blocked by Gemini Safety filters ({block_reason})")

        candidates = data.get("candidates") or []
        if not candidates:
            raise GeminiEmptyResponseError()

        candidate = candidates[0]
        if not isinstance(candidate, dict):
            raise GeminiMalformedResponseError("Gemini candidate is not an object")
        parts = (candidate.get("content") or {}).get("parts") or []
        text = "".join(part.get("text", "") for part in parts)

        if not text.strip():
            finish_reason = candidate.get("finishReason", "")
            if finish_reason in BLOCKED_FINISH_REASONS:
                raise GeminiBlockedError(f"Response blocked by Gemini Safety filters ({finish_reason})")
            raise GeminiEmptyResponseError()

        return text

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Best-effort error message from a Gemini error body."""
        try:
            body = response.json()
        except ValueError:
            return f"HTTP {response.status_code}: {response.text[:200]}"

        error = body.get("error") or {}
        message = error.get("message") or response.reason_phrase
        status = error.get("status")
        if status:
            return f"{response.status_code} {status}: {message}"
        return f"{response.status_code}: {message}"
