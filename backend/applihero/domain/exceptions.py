"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist (or is not visible to the caller)."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class InvalidRequestError(Exception):
    """Raised when input is rejected before any external service is called."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ChatProviderError(Exception):
    """Raised when a chat provider returns an error.

    Provider-agnostic — works for OpenRouter, OpenAI, etc.
    """

    def __init__(self, provider: str, status_code: int, message: str):
        self.provider = provider
        self.status_code = status_code
        self.message = message
        super().__init__(f"[{provider}] {status_code}: {message}")


class EmbeddingProviderError(Exception):
    """Raised when the embedding service fails or returns unusable vectors.

    ``retryable`` marks transient failures (rate limiting, 5xx, transport errors).
    """

    def __init__(
        self,
        provider: str,
        status_code: int,
        message: str,
        *,
        retryable: bool = False,
    ):
        self.provider = provider
        self.status_code = status_code
        self.message = message
        self.retryable = retryable
        super().__init__(f"[{provider}] {status_code}: {message}")
