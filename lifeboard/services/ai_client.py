"""Text generation against an OpenAI-compatible chat completions API."""

from __future__ import annotations

import asyncio
from typing import Any, Protocol

import httpx

from lifeboard.config import settings
from lifeboard.logger import get_logger, log_external_api
from lifeboard.services.errors import DependencyError

logger = get_logger(__name__)

RETRYABLE_STATUS_CODES = (429, 500, 502, 503, 504)


class TextGenerator(Protocol):
    """The only capability the habit-insight path needs from an AI provider."""

    async def generate(self, prompt: str, *, max_tokens: int = 500) -> str: ...


class ChatCompletionClient:
    """Bounded-retry client for ``POST {base_url}/chat/completions``.

    Attempts walk the model chain (primary, then fallbacks); once the chain
    is exhausted the last model is reused until ``max_attempts`` is spent.
    Non-retryable failures (bad credentials, 4xx) stop immediately.
    """

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str,
        models: list[str],
        max_attempts: int = 3,
        timeout: float = 30.0,
        temperature: float = 0.7,
        backoff_seconds: float = 0.5,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not models:
            raise ValueError("At least one model is required")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.models = models
        self.max_attempts = max(1, max_attempts)
        self.timeout = timeout
        self.temperature = temperature
        self.backoff_seconds = backoff_seconds
        self._transport = transport

    @classmethod
    def from_settings(cls, transport: httpx.AsyncBaseTransport | None = None) -> ChatCompletionClient:
        return cls(
            api_key=settings.ai_api_key,
            base_url=settings.ai_base_url,
            models=[settings.ai_primary_model, *settings.ai_fallback_models],
            max_attempts=settings.ai_max_attempts,
            timeout=settings.ai_timeout_seconds,
            temperature=settings.ai_temperature,
            backoff_seconds=settings.ai_retry_backoff_seconds,
            transport=transport,
        )

    def _model_for_attempt(self, attempt: int) -> str:
        return self.models[min(attempt, len(self.models) - 1)]

    async def generate(self, prompt: str, *, max_tokens: int = 500) -> str:
        if not self.api_key:
            raise DependencyError("AI API key not configured", retryable=False)

        last_error: DependencyError | None = None
        for attempt in range(self.max_attempts):
            model = self._model_for_attempt(attempt)
            try:
                return await self._complete(model, prompt, max_tokens)
            except DependencyError as exc:
                last_error = exc
                logger.warning(
                    "AI generation attempt failed",
                    model=model,
                    attempt=attempt + 1,
                    max_attempts=self.max_attempts,
                    retryable=exc.retryable,
                    error=str(exc),
                )
                if not exc.retryable:
                    break
                if attempt + 1 < self.max_attempts and self.backoff_seconds:
                    await asyncio.sleep(self.backoff_seconds * (attempt + 1))

        if last_error is None:
            raise DependencyError("AI generation made no attempts", retryable=False)
        raise last_error

    @log_external_api("ai")
    async def _complete(self, model: str, prompt: str, max_tokens: int) -> str:
        payload: dict[str, Any] = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": max_tokens,
            "temperature": self.temperature,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        timeout_config = httpx.Timeout(self.timeout, connect=min(10.0, self.timeout))

        try:
            async with httpx.AsyncClient(timeout=timeout_config, transport=self._transport) as client:
                response = await client.post(f"{self.base_url}/chat/completions", headers=headers, json=payload)
        except httpx.TimeoutException as exc:
            raise DependencyError(f"AI request timed out: {exc}", retryable=True) from exc
        except httpx.TransportError as exc:
            raise DependencyError(f"AI service unreachable: {exc}", retryable=True) from exc

        if response.status_code != 200:
            raise DependencyError(
                f"HTTP {response.status_code}: {response.text[:200]}",
                retryable=response.status_code in RETRYABLE_STATUS_CODES,
            )

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise DependencyError("AI response has no message content", retryable=True) from exc

        if not isinstance(content, str) or not content.strip():
            raise DependencyError(f"Model {model} returned empty response", retryable=True)
        return content.strip()


def get_text_generator() -> TextGenerator:
    """FastAPI dependency; tests override it with a stub generator."""
    return ChatCompletionClient.from_settings()
