"""Unit tests for the OpenRouterClient."""

import json

import httpx
import pytest

from applihero.domain.entities import ChatMessage
from applihero.domain.exceptions import ChatProviderError
from applihero.infrastructure.openrouter.openrouter_client import OpenRouterClient


# ── Helpers ──


def _mock_openrouter_response(
    content: str = "Hello!",
    model: str = "openai/gpt-4o-mini",
    cost: float | None = 0.00014,
) -> dict:
    """Build a mock OpenRouter JSON response."""
    return {
        "id": "chatcmpl-test123",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "model": model,
        "usage": {
            "prompt_tokens": 10,
            "completion_tokens": 5,
            "total_tokens": 15,
            **({"cost": cost} if cost is not None else {}),
        },
    }


def _make_mock_transport(
    response_data: dict | None = None,
    status_code: int = 200,
    captured: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    """Create a mock transport that returns a fixed response."""

    def handler(request: httpx.Request) -> httpx.Response:
        if captured is not None:
            captured.append(request)
        return httpx.Response(status_code, json=response_data or {})

    return httpx.MockTransport(handler)


def _client(transport: httpx.MockTransport) -> OpenRouterClient:
    return OpenRouterClient(
        api_key="test-key",
        http_client=httpx.AsyncClient(transport=transport),
    )


# ── Tests ──


@pytest.mark.asyncio
async def test_complete_parses_response():
    """Non-streaming call correctly parses OpenRouter JSON response."""
    client = _client(_make_mock_transport(_mock_openrouter_response(content="The answer is 42.")))

    result = await client.complete(
        messages=[ChatMessage(role="user", content="What is 42?")],
        model="openai/gpt-4o-mini",
    )

    assert result.content == "The answer is 42."
    assert result.model == "openai/gpt-4o-mini"
    assert result.usage.prompt_tokens == 10
    assert result.usage.total_tokens == 15
    assert result.usage.cost == 0.00014
    assert result.provider == "openrouter"


@pytest.mark.asyncio
async def test_complete_sends_sampling_options():
    captured: list[httpx.Request] = []
    client = _client(_make_mock_transport(_mock_openrouter_response(), captured=captured))

    await client.complete(
        messages=[
            ChatMessage(role="system", content="Be brief."),
            ChatMessage(role="user", content="Hi"),
        ],
        model="openai/gpt-4o-mini",
        temperature=0.7,
        max_tokens=500,
    )

    body = json.loads(captured[0].content)
    assert body["temperature"] == 0.7
    assert body["max_tokens"] == 500
    assert [m["role"] for m in body["messages"]] == ["system", "user"]
    assert captured[0].headers["Authorization"] == "Bearer test-key"
    assert captured[0].url.path.endswith("/chat/completions")


@pytest.mark.asyncio
async def test_complete_omits_unset_options():
    captured: list[httpx.Request] = []
    client = _client(_make_mock_transport(_mock_openrouter_response(), captured=captured))

    await client.complete(messages=[ChatMessage(role="user", content="Hi")], model="m")

    body = json.loads(captured[0].content)
    assert "temperature" not in body
    assert "max_tokens" not in body


@pytest.mark.asyncio
async def test_complete_error_handling():
    """Non-streaming call raises ChatProviderError on 4xx/5xx."""
    error_data = {"error": {"code": 429, "message": "Rate limit exceeded"}}
    client = _client(_make_mock_transport(error_data, status_code=429))

    with pytest.raises(ChatProviderError) as exc_info:
        await client.complete(
            messages=[ChatMessage(role="user", content="Hi")],
            model="openai/gpt-4o-mini",
        )

    assert exc_info.value.status_code == 429
    assert "Rate limit" in exc_info.value.message


@pytest.mark.asyncio
async def test_complete_non_json_error_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="Service Unavailable")

    client = _client(httpx.MockTransport(handler))

    with pytest.raises(ChatProviderError) as exc_info:
        await client.complete(messages=[ChatMessage(role="user", content="Hi")], model="m")

    assert exc_info.value.status_code == 503
    assert exc_info.value.message == "Service Unavailable"


@pytest.mark.asyncio
async def test_complete_error_in_200_body():
    error_data = {"error": {"code": 400, "message": "Model not found"}}
    client = _client(_make_mock_transport(error_data))

    with pytest.raises(ChatProviderError) as exc_info:
        await client.complete(messages=[ChatMessage(role="user", content="Hi")], model="m")

    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_complete_without_choices():
    client = _client(_make_mock_transport({"choices": [], "model": "m"}))

    with pytest.raises(ChatProviderError, match="No choices"):
        await client.complete(messages=[ChatMessage(role="user", content="Hi")], model="m")


@pytest.mark.asyncio
async def test_complete_transport_error_maps_to_bad_gateway():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(httpx.MockTransport(handler))

    with pytest.raises(ChatProviderError) as exc_info:
        await client.complete(messages=[ChatMessage(role="user", content="Hi")], model="m")

    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "code, expected",
    [("429", 429), ("rate_limited", 502), (None, 502), (200, 502), (503, 503)],
)
async def test_complete_error_code_in_body_is_coerced(code, expected):
    error_data = {"error": {"code": code, "message": "Upstream trouble"}}
    client = _client(_make_mock_transport(error_data))

    with pytest.raises(ChatProviderError) as exc_info:
        await client.complete(messages=[ChatMessage(role="user", content="Hi")], model="m")

    assert exc_info.value.status_code == expected
    assert isinstance(exc_info.value.status_code, int)
