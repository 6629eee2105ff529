"""OpenRouter embeddings adapter for the EmbeddingProvider port.

Transient failures (HTTP 429, 5xx, transport errors and timeouts) get a
bounded tenacity retry with exponential backoff; every other failure is
raised immediately.
"""

import logging
from typing import Any

import httpx
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from applihero.application.interfaces.embedding_provider import EmbeddingProvider
from applihero.domain.exceptions import EmbeddingProviderError
from applihero.infrastructure.openrouter.http_base import (
    DEFAULT_BASE_URL,
    OpenRouterHttpBase,
    error_message,
)

logger = logging.getLogger(__name__)


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, EmbeddingProviderError) and exc.retryable


class OpenRouterEmbeddingProvider(OpenRouterHttpBase, EmbeddingProvider):
    """Batch ``/embeddings`` calls, returned in input order."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        app_name: str = "AppliHero",
        model: str = "openai/text-embedding-3-small",
        model_dimensions: int = 1536,
        *,
        timeout: float = 30.0,
        max_attempts: int = 2,
        retry_wait_seconds: float = 1.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        super().__init__(api_key, base_url, app_name, timeout=timeout, http_client=http_client)
        self._model = model
        self._dimensions = model_dimensions
        self._max_attempts = max(1, max_attempts)
        self._retry_wait_seconds = retry_wait_seconds

    @property
    def dimensions(self) -> int:
        return self._dimensions

    @property
    def model_name(self) -> str:
        return self._model

    async def generate_embeddings(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for a batch of texts, in input order."""
        if not texts:
            return []

        @retry(
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(
                multiplier=self._retry_wait_seconds,
                min=self._retry_wait_seconds,
                max=self._retry_wait_seconds * 4,
            ),
            retry=retry_if_exception(_is_retryable),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        async def _post_with_retry() -> list[list[float]]:
            return await self._post_embeddings(texts)

        return await _post_with_retry()

    async def generate_query_embedding(self, query: str) -> list[float]:
        """Generate a single embedding for a search query."""
        results = await self.generate_embeddings([query])
        return results[0]

    async def _post_embeddings(self, texts: list[str]) -> list[list[float]]:
        """One /embeddings round trip, mapped onto EmbeddingProviderError."""
        payload: dict[str, Any] = {
            "model": self._model,
            "input": texts,
            "dimensions": self._dimensions,
        }

        try:
            response = await self._post("/embeddings", payload)
        except httpx.TransportError as e:
            # Timeouts are transport errors too.
            logger.warning("Embedding request failed: %s", e)
            raise EmbeddingProviderError(
                provider=self.provider,
                status_code=504 if isinstance(e, httpx.TimeoutException) else 503,
                message=f"{type(e).__name__}: {e}",
                retryable=True,
            ) from e

        if response.status_code != 200:
            message = error_message(response)
            logger.error("Embedding API error %d: %s", response.status_code, message)
            raise EmbeddingProviderError(
                provider=self.provider,
                status_code=response.status_code,
                message=message,
                retryable=response.status_code == 429 or response.status_code >= 500,
            )

        try:
            data = response.json()
            items = sorted(data.get("data") or [], key=lambda item: item.get("index", 0))
            vectors = [list(item["embedding"]) for item in items]
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error("Malformed embedding response: %s", e)
            raise EmbeddingProviderError(
                provider=self.provider,
                status_code=502,
                message=f"Malformed embedding response: {type(e).__name__}: {e}",
            ) from e

        if len(vectors) != len(texts):
            raise EmbeddingProviderError(
                provider=self.provider,
                status_code=502,
                message=f"Expected {len(texts)} embeddings, got {len(vectors)}",
            )

        logger.debug(
            "Generated %d embeddings (model=%s, dims=%d)",
            len(vectors),
            self._model,
            len(vectors[0]) if vectors else 0,
        )
        return vectors
