"""OpenRouter adapters for the chat and embedding ports."""

from .openrouter_client import OpenRouterClient
from .openrouter_embedding_provider import OpenRouterEmbeddingProvider

__all__ = ["OpenRouterClient", "OpenRouterEmbeddingProvider"]
