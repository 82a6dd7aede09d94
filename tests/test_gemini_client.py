"""Tests for the Gemini REST client.

Requests go through ``httpx.MockTransport``, so no network calls are made.
"""

import asyncio
import json

import httpx
import pytest

from clients.gemini_client import (
    GeminiAuthError,
    GeminiBlockedError,
    GeminiClient,
    GeminiEmptyResponseError,
    GeminiError,
    GeminiMalformedResponseError,
    GeminiRateLimitError,
    classify_http_error,
)


SCHEMA = {"type": "OBJECT", "properties": {"score": {"type": "NUMBER"}}, "required": ["score"]}


def _reply(text, finish_reason="STOP"):
    return {
        "candidates": [
            {"content": {"parts": [{"text": text}], "role": "model"}, "finishReason": finish_reason}
        ]
    }


def _client(handler, **kwargs) -> GeminiClient:
    kwargs.setdefault("api_key", "test-key")
    return GeminiClient(transport=httpx.MockTransport(handler), **kwargs)


class Recorder:
    """MockTransport handler that records requests and replies with a fixed response."""

    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self.body = body if body is not None else _reply('{"score": 42}')
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)


# ---------------------------------------------------------------------------
# Request shape
# ---------------------------------------------------------------------------

class TestRequest:
    def test_text_only_payload(self):
        handler = Recorder()
        text = asyncio.run(_client(handler).generate_json_text("Rate this", SCHEMA))

        assert text == '{"score": 42}'
        request = handler.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/v1beta/models/gemini-2.5-flash:generateContent"
        assert request.url.params["key"] == "test-key"

        body = json.loads(request.content)
        assert body["contents"][0]["parts"] == [{"text": "Rate this"}]
        assert body["generationConfig"] == {
            "responseMimeType": "application/json",
            "responseSchema": SCHEMA,
        }

    def test_image_part_precedes_text(self):
        handler = Recorder()
        image = {"mime_type": "image/png", "data": "iVBORw0KGgo="}
        asyncio.run(_client(handler).generate_json_text("Rate this", SCHEMA, image=image))

        parts = json.loads(handler.requests[0].content)["contents"][0]["parts"]
        assert parts == [
            {"inline_data": {"mime_type": "image/png", "data": "iVBORw0KGgo="}},
            {"text": "Rate this"},
        ]

    def test_model_override(self):
        handler = Recorder()
        asyncio.run(_client(handler).generate_json_text("x", SCHEMA, model="gemini-2.0-flash"))
        assert handler.requests[0].url.path.endswith("/models/gemini-2.0-flash:generateContent")

    def test_custom_base_url(self):
        handler = Recorder()
        client = _client(handler, base_url="http://localhost:8080/v1/")
        asyncio.run(client.generate_json_text("x", SCHEMA))
        assert str(handler.requests[0].url).startswith("http://localhost:8080/v1/models/")

    def test_multiple_text_parts_joined(self):
        body = {"candidates": [{"content": {"parts": [{"text": '{"score":'}, {"text": " 7}"}]}}]}
        text = asyncio.run(_client(Recorder(body=body)).generate_json_text("x", SCHEMA))
        assert text == '{"score": 7}'


# ---------------------------------------------------------------------------
# API key
# ---------------------------------------------------------------------------

class TestApiKey:
    def test_missing_key_fails_without_request(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.delenv("API_KEY", raising=False)
        handler = Recorder()
        client = GeminiClient(transport=httpx.MockTransport(handler))

        assert not client.has_api_key
        with pytest.raises(GeminiAuthError, match="API key"):
            asyncio.run(client.generate_json_text("x", SCHEMA))
        assert handler.requests == []

    def test_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "from-env")
        assert GeminiClient().api_key == "from-env"

    def test_fallback_env_name(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.setenv("API_KEY", "legacy")
        assert GeminiClient().api_key == "legacy"


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------

class TestFailures:
    def test_invalid_key(self):
        body = {"error": {"code": 400, "message": "API key not valid. Please pass a valid API key.",
                          "status": "INVALID_ARGUMENT"}}
        with pytest.raises(GeminiAuthError) as exc_info:
            asyncio.run(_client(Recorder(400, body)).generate_json_text("x", SCHEMA))
        assert exc_info.value.status_code == 400
        assert "API key not valid" in str(exc_info.value)

    def test_rate_limited(self):
        body = {"error": {"code": 429, "message": "Quota exceeded", "status": "RESOURCE_EXHAUSTED"}}
        with pytest.raises(GeminiRateLimitError, match="429 RESOURCE_EXHAUSTED"):
            asyncio.run(_client(Recorder(429, body)).generate_json_text("x", SCHEMA))

    def test_server_error_is_generic(self):
        body = {"error": {"code": 500, "message": "Internal error", "status": "INTERNAL"}}
        with pytest.raises(GeminiError) as exc_info:
            asyncio.run(_client(Recorder(500, body)).generate_json_text("x", SCHEMA))
        assert type(exc_info.value) is GeminiError
        assert exc_info.value.kind == "unknown"

    def test_non_json_error_body(self):
        def handler(request):
            return httpx.Response(502, text="Bad Gateway")

        with pytest.raises(GeminiError, match="HTTP 502"):
            asyncio.run(_client(handler).generate_json_text("x", SCHEMA))

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(GeminiError, match="Gemini request failed"):
            asyncio.run(_client(handler).generate_json_text("x", SCHEMA))

    def test_non_json_success_body(self):
        def handler(request):
            return httpx.Response(200, content=b"<html>")

        with pytest.raises(GeminiMalformedResponseError, match="non-JSON"):
            asyncio.run(_client(handler).generate_json_text("x", SCHEMA))

    @pytest.mark.parametrize("body", [[1, 2], "text", {"candidates": ["oops"]}])
    def test_unexpected_body_shape(self, body):
        with pytest.raises(GeminiMalformedResponseError) as exc_info:
            asyncio.run(_client(Recorder(body=body)).generate_json_text("x", SCHEMA))
        assert exc_info.value.kind == "malformed"

    def test_prompt_blocked(self):
        body = {"promptFeedback": {"blockReason": "SAFETY"}}
        with pytest.raises(GeminiBlockedError, match="Safety"):
            asyncio.run(_client(Recorder(body=body)).generate_json_text("x", SCHEMA))

    def test_candidate_blocked(self):
        body = {"candidates": [{"finishReason": "SAFETY"}]}
        with pytest.raises(GeminiBlockedError):
            asyncio.run(_client(Recorder(body=body)).generate_json_text("x", SCHEMA))

    def test_no_candidates(self):
        with pytest.raises(GeminiEmptyResponseError):
            asyncio.run(_client(Recorder(body={"candidates": []})).generate_json_text("x", SCHEMA))

    def test_empty_text(self):
        with pytest.raises(GeminiEmptyResponseError):
            asyncio.run(_client(Recorder(body=_reply("  "))).generate_json_text("x", SCHEMA))


class TestClassifyHttpError:
    @pytest.mark.parametrize("status,message,error_cls", [
        (401, "Unauthorized", GeminiAuthError),
        (403, "Forbidden", GeminiAuthError),
        (400, "400 INVALID_ARGUMENT: API key not valid", GeminiAuthError),
        (400, "API_KEY_INVALID", GeminiAuthError),
        (429, "Too Many Requests", GeminiRateLimitError),
        (400, "RESOURCE_EXHAUSTED", GeminiRateLimitError),
        (400, "Request blocked by Safety settings", GeminiBlockedError),
        (503, "UNAVAILABLE: overloaded", GeminiError),
    ])
    def test_mapping(self, status, message, error_cls):
        error = classify_http_error(status, message)
        assert type(error) is error_cls
        assert error.status_code == status
        assert error.message == message
