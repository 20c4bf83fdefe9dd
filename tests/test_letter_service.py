"""
Tests for the Letter Service.

Covers request narrowing, prompt construction, and how provider results
map to LetterResult or LetterError.
"""

import pytest

from lettercraft.ai.prompts import EMPTY_RESPONSE_PLACEHOLDER, LETTER_SYSTEM_INSTRUCTION
from lettercraft.core.exceptions import (
    EmptyPromptError,
    GenerationError,
    InvalidLetterTypeError,
    InvalidRequestError,
    UpstreamError,
)
from lettercraft.schemas.letter import (
    CustomPromptRequest,
    GenerateLetterBody,
    TemplateRequest,
    parse_generate_request,
)


def body(**kwargs) -> GenerateLetterBody:
    return GenerateLetterBody.model_validate(kwargs)


# ---------------------------------------------------------------------------
# REQUEST NARROWING
# ---------------------------------------------------------------------------

class TestParseGenerateRequest:

    def test_custom_prompt(self):
        request = parse_generate_request(body(type="custom", customPrompt="Write a note"))

        assert isinstance(request, CustomPromptRequest)
        assert request.custom_prompt == "Write a note"

    def test_template_with_variables(self):
        request = parse_generate_request(
            body(type="cover-letter", variables={"Company Name": "Acme"})
        )

        assert isinstance(request, TemplateRequest)
        assert request.template_id == "cover-letter"
        assert request.variables == {"Company Name": "Acme"}

    def test_empty_variables_object_is_a_template_request(self):
        request = parse_generate_request(body(type="cover-letter", variables={}))

        assert isinstance(request, TemplateRequest)

    def test_custom_with_variables_and_no_prompt_is_a_template_request(self):
        request = parse_generate_request(body(type="custom", variables={}))

        assert isinstance(request, TemplateRequest)
        assert request.template_id == "custom"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {},
            {"type": "custom"},
            {"type": "custom", "customPrompt": ""},
            {"type": "cover-letter"},
            {"variables": {"A": "1"}},
            {"type": "", "variables": {}},
        ],
    )
    def test_unrecognised_shapes(self, kwargs):
        with pytest.raises(InvalidRequestError):
            parse_generate_request(body(**kwargs))


# ---------------------------------------------------------------------------
# PROMPT CONSTRUCTION
# ---------------------------------------------------------------------------

class TestBuildPrompt:

    def test_custom_prompt_is_sent_verbatim(self, letter_service):
        prompt = letter_service.build_prompt(
            CustomPromptRequest(custom_prompt="  Write a note  ")
        )

        assert prompt == "  Write a note  "

    def test_template_prompt_is_filled(self, letter_service):
        prompt = letter_service.build_prompt(
            TemplateRequest(template_id="cover-letter", variables={"Company Name": "Acme"})
        )

        assert "Acme" in prompt
        assert "[Company Name]" not in prompt

    def test_unknown_template(self, letter_service):
        with pytest.raises(InvalidLetterTypeError):
            letter_service.build_prompt(TemplateRequest(template_id="nonexistent-id"))

    def test_whitespace_custom_prompt(self, letter_service):
        with pytest.raises(EmptyPromptError):
            letter_service.build_prompt(CustomPromptRequest(custom_prompt="   "))


# ---------------------------------------------------------------------------
# GENERATION
# ---------------------------------------------------------------------------

class TestGenerate:

    @pytest.mark.asyncio
    async def test_custom_letter(self, letter_service, provider):
        result = await letter_service.generate(
            body(type="custom", customPrompt="Write a thank you note")
        )

        assert result.type == "Custom Prompt"
        assert result.length == "1 page"
        assert result.content == "<p>Dear Hiring Manager,</p>"
        assert provider.calls == [[LETTER_SYSTEM_INSTRUCTION, "Write a thank you note"]]

    @pytest.mark.asyncio
    async def test_template_letter(self, letter_service, provider):
        result = await letter_service.generate(
            body(type="cover-letter", variables={"Company Name": "Acme"})
        )

        assert result.type == "cover-letter"
        system, prompt = provider.calls[0]
        assert system == LETTER_SYSTEM_INSTRUCTION
        assert "Acme" in prompt

    @pytest.mark.asyncio
    async def test_validation_failure_skips_the_provider(self, letter_service, provider):
        with pytest.raises(InvalidLetterTypeError):
            await letter_service.generate(body(type="nonexistent-id", variables={}))

        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_empty_model_output_uses_placeholder(self, letter_service, provider):
        provider.response = provider.success("")

        result = await letter_service.generate(body(type="custom", customPrompt="Hi"))

        assert result.content == EMPTY_RESPONSE_PLACEHOLDER

    @pytest.mark.asyncio
    async def test_upstream_status_is_kept(self, letter_service, provider):
        provider.response = provider.failure('{"error": "quota"}', status_code=429)

        with pytest.raises(UpstreamError) as exc_info:
            await letter_service.generate(body(type="custom", customPrompt="Hi"))

        assert exc_info.value.status_code == 429
        assert exc_info.value.message == '{"error": "quota"}'

    @pytest.mark.asyncio
    async def test_transport_failure(self, letter_service, provider):
        provider.response = provider.failure("Connection refused")

        with pytest.raises(GenerationError) as exc_info:
            await letter_service.generate(body(type="custom", customPrompt="Hi"))

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Connection refused"

    @pytest.mark.asyncio
    async def test_requests_are_tracked(self, letter_service, provider, monitor):
        await letter_service.generate(body(type="custom", customPrompt="Hi"))
        provider.response = provider.failure("boom")
        with pytest.raises(GenerationError):
            await letter_service.generate(body(type="cover-letter", variables={}))

        stats = monitor.get_stats()
        assert stats.total_requests == 2
        assert stats.failed_requests == 1
        assert stats.requests_by_letter_type == {"Custom Prompt": 1, "cover-letter": 1}

    @pytest.mark.asyncio
    async def test_raising_provider_is_still_tracked(self, letter_service, provider, monitor):
        async def explode(parts, temperature=None, max_tokens=None):
            raise RuntimeError("socket closed")

        provider.generate_parts = explode

        with pytest.raises(RuntimeError):
            await letter_service.generate(body(type="custom", customPrompt="Hi"))

        stats = monitor.get_stats()
        assert stats.failed_requests == 1
        assert stats.failures_by_status == {"transport": 1}
        assert stats.requests_by_letter_type == {"Custom Prompt": 1}
        assert monitor.get_recent()[0].letter_type == "Custom Prompt"
