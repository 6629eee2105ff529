"""OpenRouter chat completions adapter for the ChatProvider port."""

import logging

import httpx

from applihero.application.interfaces.chat_provider import ChatProvider
from applihero.domain.entities import ChatCompletionResult, ChatMessage, TokenUsage
from applihero.domain.exceptions import ChatProviderError
from applihero.infrastructure.openrouter.http_base import (
    DEFAULT_BASE_URL,
    OpenRouterHttpBase,
    error_message,
)

logger = logging.getLogger(__name__)


def _status_code(code: object) -> int:
    """HTTP status from an error body's ``code``; anything that is not one becomes 502."""
    try:
        value = int(code)
    except (TypeError, ValueError):
        return 502
    return value if 400 <= value < 600 else 502


class OpenRouterClient(OpenRouterHttpBase, ChatProvider):
    """Non-streaming ``/chat/completions`` calls; every failure becomes ChatProviderError."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        app_name: str = "AppliHero",
        *,
        timeout: float = 120.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        super().__init__(api_key, base_url, app_name, timeout=timeout, http_client=http_client)

    @property
    def provider_name(self) -> str:
        return self.provider

    async def complete(
        self,
        messages: list[ChatMessage],
        model: str,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> ChatCompletionResult:
        payload: dict = {
            "model": model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
        }
        if temperature is not None:
            payload["temperature"] = temperature
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens

        try:
            response = await self._post("/chat/completions", payload)
        except httpx.TransportError as e:
            logger.error("Chat completion request failed: %s", e)
            raise ChatProviderError(
                provider=self.provider,
                status_code=502,
                message=f"{type(e).__name__}: {e}",
            ) from e

        if response.status_code != 200:
            message = error_message(response)
            logger.error("Chat completion error %d: %s", response.status_code, message)
            raise ChatProviderError(self.provider, response.status_code, message)

        result = self._to_result(response.json())
        logger.info(
            "Completion from %s: finish=%s tokens=%d cost=%s",
            result.model or model,
            result.finish_reason,
            result.usage.total_tokens,
            result.usage.cost,
        )
        return result

    def _to_result(self, data: dict) -> ChatCompletionResult:
        # OpenRouter can report upstream failures inside a 200 body.
        if "error" in data:
            error = data["error"] or {}
            raise ChatProviderError(
                provider=self.provider,
                status_code=_status_code(error.get("code")),
                message=error.get("message", "Unknown error"),
            )

        choices = data.get("choices") or []
        if not choices:
            raise ChatProviderError(self.provider, 500, "No choices in response")

        choice = choices[0]
        usage = data.get("usage") or {}
        return ChatCompletionResult(
            model=data.get("model", ""),
            content=(choice.get("message") or {}).get("content") or "",
            finish_reason=choice.get("finish_reason") or "stop",
            usage=TokenUsage(
                prompt_tokens=usage.get("prompt_tokens", 0),
                completion_tokens=usage.get("completion_tokens", 0),
                total_tokens=usage.get("total_tokens", 0),
                cost=usage.get("cost"),
            ),
            provider=self.provider,
        )
