"""Tests for the chat completion client's retry behaviour."""

import json

import httpx
import pytest

from lifeboard.services.ai_client import ChatCompletionClient
from lifeboard.services.errors import DependencyError


def _ok(content: str) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


def _client(handler, *, models=("primary", "backup"), max_attempts=3, api_key="test-key") -> ChatCompletionClient:
    return ChatCompletionClient(
        api_key=api_key,
        base_url="https://ai.example.com/v1/",
        models=list(models),
        max_attempts=max_attempts,
        backoff_seconds=0,
        transport=httpx.MockTransport(handler),
    )


class TestChatCompletionClient:
    @pytest.mark.asyncio
    async def test_success_on_first_attempt(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return _ok("  hello  ")

        reply = await _client(handler).generate("hi", max_tokens=42)

        assert reply == "hello"
        assert str(seen[0].url) == "https://ai.example.com/v1/chat/completions"
        assert seen[0].headers["Authorization"] == "Bearer test-key"
        body = json.loads(seen[0].content)
        assert body["model"] == "primary"
        assert body["max_tokens"] == 42
        assert body["messages"] == [{"role": "user", "content": "hi"}]

    @pytest.mark.asyncio
    async def test_retryable_failure_moves_to_fallback_model(self):
        models = []

        def handler(request: httpx.Request) -> httpx.Response:
            model = json.loads(request.content)["model"]
            models.append(model)
            if model == "primary":
                return httpx.Response(503, text="overloaded")
            return _ok("from backup")

        assert await _client(handler).generate("hi") == "from backup"
        assert models == ["primary", "backup"]

    @pytest.mark.asyncio
    async def test_attempts_are_bounded_and_reuse_last_model(self):
        models = []

        def handler(request: httpx.Request) -> httpx.Response:
            models.append(json.loads(request.content)["model"])
            return httpx.Response(429, text="slow down")

        with pytest.raises(DependencyError) as exc_info:
            await _client(handler, max_attempts=4).generate("hi")

        assert exc_info.value.retryable is True
        assert models == ["primary", "backup", "backup", "backup"]

    @pytest.mark.asyncio
    async def test_client_error_is_not_retried(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(401, text="bad key")

        with pytest.raises(DependencyError, match="HTTP 401") as exc_info:
            await _client(handler).generate("hi")

        assert exc_info.value.retryable is False
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_transport_errors_and_empty_content_are_retried(self):
        responses = iter(["timeout", "empty", "ok"])

        def handler(request: httpx.Request) -> httpx.Response:
            step = next(responses)
            if step == "timeout":
                raise httpx.ReadTimeout("read timed out", request=request)
            if step == "empty":
                return _ok("   ")
            return _ok("finally")

        assert await _client(handler).generate("hi") == "finally"

    @pytest.mark.asyncio
    async def test_malformed_body_is_a_dependency_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"unexpected": True})

        with pytest.raises(DependencyError, match="no message content"):
            await _client(handler, max_attempts=1).generate("hi")

    @pytest.mark.asyncio
    async def test_missing_api_key_fails_without_calling_out(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        with pytest.raises(DependencyError, match="not configured"):
            await _client(handler, api_key="").generate("hi")

    def test_requires_a_model(self):
        with pytest.raises(ValueError):
            ChatCompletionClient(api_key="k", base_url="https://x", models=[])

    @pytest.mark.asyncio
    async def test_no_attempts_still_raises_dependency_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        client = _client(handler)
        client.max_attempts = 0

        with pytest.raises(DependencyError, match="no attempts"):
            await client.generate("hi")
