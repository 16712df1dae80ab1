"""
Tests for the Gemini completion client with the SDK mocked out.
"""

import pytest
from unittest.mock import AsyncMock, Mock, patch

from moviesense.errors import UpstreamError, UpstreamRefusalError
from moviesense.llm import GeminiCompletionClient


class BlockedResponse:
    prompt_feedback = "block_reason: SAFETY"

    @property
    def text(self):
        raise ValueError("The response.text quick accessor requires a valid Part")


@pytest.fixture
def gemini():
    with patch("moviesense.llm.genai") as genai:
        client = GeminiCompletionClient(api_key="test-key", model_name="gemini-test")
        client.model.generate_content_async = AsyncMock()
        yield client, genai


@pytest.mark.asyncio
async def test_complete_returns_stripped_text(gemini):
    client, genai = gemini
    client.model.generate_content_async.return_value = Mock(text='  {"sentiment":"Positive"}\n')

    assert await client.complete("prompt") == '{"sentiment":"Positive"}'
    genai.configure.assert_called_once_with(api_key="test-key")
    client.model.generate_content_async.assert_awaited_once()


@pytest.mark.asyncio
async def test_sdk_exception_is_upstream_error(gemini):
    client, _ = gemini
    client.model.generate_content_async.side_effect = RuntimeError("429 quota exceeded")

    with pytest.raises(UpstreamError) as exc_info:
        await client.complete("prompt")

    assert not isinstance(exc_info.value, UpstreamRefusalError)


@pytest.mark.asyncio
async def test_blocked_reply_is_refusal(gemini):
    client, _ = gemini
    client.model.generate_content_async.return_value = BlockedResponse()

    with pytest.raises(UpstreamRefusalError):
        await client.complete("prompt")


@pytest.mark.asyncio
async def test_blank_reply_is_refusal(gemini):
    client, _ = gemini
    client.model.generate_content_async.return_value = Mock(text="   ")

    with pytest.raises(UpstreamRefusalError):
        await client.complete("prompt")


@pytest.mark.asyncio
async def test_missing_api_key_fails_on_call_not_construction():
    with patch("moviesense.llm.genai") as genai:
        client = GeminiCompletionClient(api_key="", model_name="gemini-test")
        genai.configure.assert_not_called()

        with pytest.raises(UpstreamError):
            await client.complete("prompt")
