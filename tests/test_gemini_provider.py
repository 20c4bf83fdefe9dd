"""
Tests for the Gemini provider.

The SDK client is replaced with a mock, so no network calls are made.
These tests check the request shape sent to generateContent and how
SDK results and errors become AIResponse objects.
"""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from google.genai import errors

from lettercraft.ai.providers.base import AIResponse, ProviderType, TokenUsage
from lettercraft.ai.providers.gemini import GeminiProvider


def sdk_response(text=None, prompt_tokens=10, completion_tokens=20):
    """Build an object shaped like a generateContent response."""
    parts = [SimpleNamespace(text=text)] if text is not None else []
    return SimpleNamespace(
        candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts))],
        usage_metadata=SimpleNamespace(
            prompt_token_count=prompt_tokens,
            candidates_token_count=completion_tokens,
        ),
    )


@pytest.fixture
def gemini():
    provider = GeminiProvider(model="gemini-2.5-flash", api_key="test-key")
    provider._client = MagicMock()
    provider._client.aio.models.generate_content = AsyncMock(
        return_value=sdk_response("<p>Hello</p>")
    )
    return provider


class TestTokenUsage:

    def test_auto_calculate_total(self):
        """Total is derived when not given."""
        usage = TokenUsage(prompt_tokens=100, completion_tokens=50)

        assert usage.total_tokens == 150


class TestGeminiProvider:
    """Tests for GeminiProvider.generate_parts."""

    @pytest.mark.asyncio
    async def test_sends_parts_as_one_user_message(self, gemini):
        """System instruction and prompt go out as two ordered parts."""
        await gemini.generate_parts(["You are an HR assistant.", "Write a letter"])

        kwargs = gemini._client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash"
        assert kwargs["config"] is None

        contents = kwargs["contents"]
        assert len(contents) == 1
        assert contents[0].role == "user"
        assert [part.text for part in contents[0].parts] == [
            "You are an HR assistant.",
            "Write a letter",
        ]

    @pytest.mark.asyncio
    async def test_generation_config_only_when_asked(self, gemini):
        await gemini.generate_parts(["Write a letter"], temperature=0.2, max_tokens=512)

        config = gemini._client.aio.models.generate_content.call_args.kwargs["config"]
        assert config.temperature == 0.2
        assert config.max_output_tokens == 512

    @pytest.mark.asyncio
    async def test_success(self, gemini):
        response = await gemini.generate_parts(["Write a letter"])

        assert isinstance(response, AIResponse)
        assert response.success is True
        assert response.content == "<p>Hello</p>"
        assert response.provider == ProviderType.GEMINI
        assert response.usage.total_tokens == 30

    @pytest.mark.asyncio
    async def test_missing_text_yields_empty_content(self, gemini):
        """A response with no text part is still a success."""
        gemini._client.aio.models.generate_content.return_value = sdk_response(None)

        response = await gemini.generate_parts(["Write a letter"])

        assert response.success is True
        assert response.content == ""

    @pytest.mark.asyncio
    async def test_no_candidates(self, gemini):
        gemini._client.aio.models.generate_content.return_value = SimpleNamespace(
            candidates=None, usage_metadata=None
        )

        response = await gemini.generate_parts(["Write a letter"])

        assert response.success is True
        assert response.content == ""
        assert response.usage.total_tokens == 0

    @pytest.mark.asyncio
    async def test_api_error_keeps_status_and_body(self, gemini):
        """Non-2xx answers carry the upstream status and raw error body."""
        error_body = {
            "error": {
                "code": 429,
                "message": "Resource has been exhausted",
                "status": "RESOURCE_EXHAUSTED",
            }
        }
        gemini._client.aio.models.generate_content.side_effect = errors.ClientError(
            429, error_body
        )

        response = await gemini.generate_parts(["Write a letter"])

        assert response.success is False
        assert response.status_code == 429
        assert json.loads(response.error) == error_body

    @pytest.mark.asyncio
    async def test_transport_error_has_no_status(self, gemini):
        gemini._client.aio.models.generate_content.side_effect = ConnectionError(
            "Connection refused"
        )

        response = await gemini.generate_parts(["Write a letter"])

        assert response.success is False
        assert response.status_code is None
        assert response.error == "Connection refused"

    @pytest.mark.asyncio
    async def test_missing_api_key(self, monkeypatch):
        monkeypatch.setattr("lettercraft.ai.providers.gemini.settings.GEMINI_API_KEY", "")
        provider = GeminiProvider()

        response = await provider.generate_parts(["Write a letter"])

        assert response.success is False
        assert response.status_code is None
        assert response.error == "API key missing"
