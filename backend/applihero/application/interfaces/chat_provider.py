"""Port for LLM chat completions used by the coaching services."""

from abc import ABC, abstractmethod

from applihero.domain.entities import ChatCompletionResult, ChatMessage


class ChatProvider(ABC):

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Short provider id used in error details, e.g. ``"openrouter"``."""
        ...

    @abstractmethod
    async def complete(
        self,
        messages: list[ChatMessage],
        model: str,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> ChatCompletionResult:
        """Run one non-streaming completion over ``messages``.

        ``temperature`` and ``max_tokens`` are only sent when given, so the
        provider's defaults apply otherwise.

        Raises:
            ChatProviderError: Transport failure, non-200 status, or an error
                reported in the response body.
        """
        ...
