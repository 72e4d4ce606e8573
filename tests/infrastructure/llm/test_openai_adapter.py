"""Tests for the OpenAI-compatible language-model adapter."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from openai import APIConnectionError, APITimeoutError

from truth_engine.domain.errors import ModelTimeoutError, ModelUnavailableError
from truth_engine.domain.ports.language_model import GenerationOptions
from truth_engine.infrastructure.llm.openai_adapter import OpenAIAdapter, OpenAIConfig

REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


def completion(text):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=text))],
        model="gpt-4o-mini-2024-07-18",
    )


@pytest.fixture
def client():
    client = MagicMock()
    client.models.list = AsyncMock(return_value=SimpleNamespace(data=[SimpleNamespace(id="gpt-4o-mini")]))
    client.chat.completions.create = AsyncMock(return_value=completion("Hello there"))
    client.close = AsyncMock()
    return client


@pytest.mark.asyncio
async def test_list_models(client):
    adapter = OpenAIAdapter(client=client)

    models = await adapter.list_models()

    assert [m.name for m in models] == ["gpt-4o-mini"]
    assert await adapter.is_available() is True


@pytest.mark.asyncio
async def test_generate(client):
    adapter = OpenAIAdapter(OpenAIConfig(max_tokens=50), client=client)

    result = await adapter.generate("gpt-4o-mini", "Say hello", GenerationOptions(temperature=0.2))

    assert result.text == "Hello there"
    assert result.model == "gpt-4o-mini-2024-07-18"
    client.chat.completions.create.assert_awaited_once_with(
        model="gpt-4o-mini",
        messages=[{"role": "user", "content": "Say hello"}],
        max_tokens=50,
        temperature=0.2,
    )


@pytest.mark.asyncio
async def test_empty_content_is_empty_text(client):
    client.chat.completions.create.return_value = completion(None)
    result = await OpenAIAdapter(client=client).generate("gpt-4o-mini", "prompt")
    assert result.text == ""


@pytest.mark.asyncio
async def test_timeout_maps_to_model_timeout(client):
    client.chat.completions.create.side_effect = APITimeoutError(request=REQUEST)
    with pytest.raises(ModelTimeoutError):
        await OpenAIAdapter(client=client).generate("gpt-4o-mini", "prompt")


@pytest.mark.asyncio
async def test_api_errors_map_to_unavailable(client):
    client.chat.completions.create.side_effect = APIConnectionError(request=REQUEST)
    client.models.list.side_effect = APIConnectionError(request=REQUEST)
    adapter = OpenAIAdapter(client=client)

    assert await adapter.is_available() is False
    with pytest.raises(ModelUnavailableError):
        await adapter.generate("gpt-4o-mini", "prompt")


@pytest.mark.asyncio
async def test_missing_api_key_leaves_provider_unavailable():
    adapter = OpenAIAdapter(OpenAIConfig(api_key=""))
    await adapter.initialize()

    assert await adapter.is_available() is False
    with pytest.raises(ModelUnavailableError):
        await adapter.generate("gpt-4o-mini", "prompt")


@pytest.mark.asyncio
async def test_shutdown_closes_client(client):
    adapter = OpenAIAdapter(client=client)
    await adapter.shutdown()
    client.close.assert_awaited_once()
    assert await adapter.is_available() is False
