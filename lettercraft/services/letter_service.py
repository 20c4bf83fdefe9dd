"""
Letter Service - business logic behind POST /api/generate-letter.

The router only does HTTP handling; everything else lives here:

1. Narrow the body into a custom or template request
2. Resolve the template and substitute placeholders
3. Reject prompts that are empty after trimming
4. Send [system instruction, prompt] as one message to the AI provider
5. Map provider failures to LetterError subclasses

Nothing is retried. A failure is final for that request.

Usage:
    from lettercraft.services.letter_service import letter_service

    result = await letter_service.generate(body)
    print(result.content)
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from lettercraft.ai.monitoring import AIMonitor, ai_monitor
from lettercraft.ai.prompts import EMPTY_RESPONSE_PLACEHOLDER, LETTER_SYSTEM_INSTRUCTION
from lettercraft.ai.providers import AIProvider, AIResponse, gemini_provider
from lettercraft.core.exceptions import (
    EmptyPromptError,
    GenerationError,
    InvalidLetterTypeError,
    UpstreamError,
)
from lettercraft.schemas.letter import (
    CustomPromptRequest,
    GenerateLetterBody,
    GenerateRequest,
    parse_generate_request,
)
from lettercraft.templates.catalog import TemplateCatalog, get_catalog
from lettercraft.templates.prompt_builder import fill_template

logger = logging.getLogger("lettercraft.services.letter")


CUSTOM_PROMPT_LABEL = "Custom Prompt"
LETTER_LENGTH = "1 page"


@dataclass
class LetterResult:
    """A successfully generated letter."""
    type: str
    length: str
    content: str

    def to_dict(self):
        return {"type": self.type, "length": self.length, "content": self.content}


class LetterService:
    """
    Builds the final prompt and calls the AI provider.

    Provider, catalog and monitor are injectable so tests can swap them.
    """

    def __init__(
        self,
        provider: Optional[AIProvider] = None,
        catalog: Optional[TemplateCatalog] = None,
        monitor: Optional[AIMonitor] = None,
    ):
        self._provider = provider
        self._catalog = catalog
        self._monitor = monitor or ai_monitor

    @property
    def provider(self) -> AIProvider:
        return self._provider or gemini_provider

    @property
    def monitor(self) -> AIMonitor:
        return self._monitor

    @property
    def catalog(self) -> TemplateCatalog:
        if self._catalog is None:
            self._catalog = get_catalog()
        return self._catalog

    # -----------------------------------------------------------------------
    # PROMPT CONSTRUCTION
    # -----------------------------------------------------------------------

    def build_prompt(self, request: GenerateRequest) -> str:
        """
        Resolve a request variant into the final, trimmed prompt.

        Raises:
            InvalidLetterTypeError: template id not in the catalog
            EmptyPromptError: nothing left after trimming
        """
        if isinstance(request, CustomPromptRequest):
            prompt = request.custom_prompt
        else:
            template = self.catalog.get(request.template_id)
            if template is None:
                raise InvalidLetterTypeError()
            prompt = fill_template(template.prompt, request.variables)

        if not prompt.strip():
            raise EmptyPromptError()
        return prompt

    # -----------------------------------------------------------------------
    # GENERATION
    # -----------------------------------------------------------------------

    async def generate(self, body: GenerateLetterBody) -> LetterResult:
        """
        Generate a letter for a raw request body.

        Raises:
            InvalidRequestError, InvalidLetterTypeError, EmptyPromptError:
                validation failures (400)
            UpstreamError: provider returned a non-2xx status
            GenerationError: transport failure
        """
        request = parse_generate_request(body)
        prompt = self.build_prompt(request)
        letter_type = (
            CUSTOM_PROMPT_LABEL
            if isinstance(request, CustomPromptRequest)
            else request.template_id
        )

        logger.debug(f"Final prompt for {letter_type}: {prompt}")

        request_id = uuid.uuid4().hex[:12]
        provider = self.provider
        self._monitor.start(request_id, letter_type, prompt, provider.model)

        try:
            response = await provider.generate_parts([LETTER_SYSTEM_INSTRUCTION, prompt])
        except Exception as e:
            # Providers should not raise; still close the monitor entry
            self._monitor.finish(request_id, AIResponse(
                content="",
                provider=provider.provider_type,
                model=provider.model,
                success=False,
                error=str(e),
            ))
            raise
        self._monitor.finish(request_id, response)

        if not response.success:
            if response.status_code is not None:
                raise UpstreamError(response.error or "", status_code=response.status_code)
            raise GenerationError(response.error or "Letter generation failed")

        content = response.content or EMPTY_RESPONSE_PLACEHOLDER
        if not response.content:
            logger.warning(f"Request {request_id}: model returned no text, using placeholder")

        return LetterResult(type=letter_type, length=LETTER_LENGTH, content=content)


# Singleton instance
letter_service = LetterService()
