"""Provider-neutral value objects for chat completions."""

from dataclasses import dataclass, field


@dataclass
class ChatMessage:
    role: str  # "system" | "user" | "assistant"
    content: str = ""


@dataclass
class TokenUsage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    cost: float | None = None  # USD, when the provider reports it


@dataclass
class ChatCompletionResult:
    """The first choice of a completion, with usage accounting."""

    model: str
    content: str
    finish_reason: str  # "stop" | "length" | ...
    usage: TokenUsage = field(default_factory=TokenUsage)
    provider: str = ""
