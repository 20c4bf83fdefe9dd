"""
Gemini Provider - Google's GenAI SDK.

Sends the letter system instruction and the user prompt as two ordered
text parts of a single user message, the same shape as a raw
generateContent call.
"""

import json
import logging
import time
from typing import List, Optional

from google import genai
from google.genai import errors, types

from lettercraft.core.config import settings
from lettercraft.ai.providers.base import (
    AIProvider,
    AIResponse,
    ProviderType,
    TokenUsage,
)

logger = logging.getLogger("lettercraft.ai.gemini")


class GeminiProvider(AIProvider):
    provider_type = ProviderType.GEMINI

    def __init__(self, model: str = None, api_key: str = None):
        self.model = model or settings.GEMINI_MODEL
        self.api_key = api_key or settings.GEMINI_API_KEY

        if self.api_key:
            self._client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=settings.AI_REQUEST_TIMEOUT * 1000),
            )
            logger.info(f"Gemini provider initialized with model: {self.model}")
        else:
            self._client = None
            logger.warning("Gemini API key not configured")

    async def generate_parts(
        self,
        parts: List[str],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> AIResponse:
        start_time = time.time()

        if not self._client:
            return self._error("API key missing", start_time)

        try:
            contents = [
                types.Content(
                    role="user",
                    parts=[types.Part(text=text) for text in parts],
                )
            ]
            config = None
            if temperature is not None or max_tokens is not None:
                config = types.GenerateContentConfig(
                    temperature=temperature,
                    max_output_tokens=max_tokens,
                )

            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=contents,
                config=config,
            )

            return AIResponse(
                content=self._extract_text(response) or "",
                provider=self.provider_type,
                model=self.model,
                usage=self._extract_usage(response),
                latency_ms=self._measure_latency(start_time),
                success=True,
                raw_response=response,
            )

        except errors.APIError as e:
            # Upstream answered with a non-2xx status: keep code and body
            body = json.dumps(e.details) if e.details is not None else str(e)
            logger.error(f"Gemini API error {e.code}: {body}")
            return self._error(body, start_time, status_code=e.code)

        except Exception as e:
            logger.error(f"Gemini generation failed: {e}")
            return self._error(str(e), start_time)

    # --- PRIVATE HELPERS ---

    def _extract_text(self, response) -> Optional[str]:
        # candidates[0].content.parts[0].text, any missing level yields None
        candidates = getattr(response, "candidates", None)
        if not candidates:
            return None
        content = getattr(candidates[0], "content", None)
        parts = getattr(content, "parts", None) if content else None
        if not parts:
            return None
        return getattr(parts[0], "text", None)

    def _extract_usage(self, response):
        usage = getattr(response, "usage_metadata", None)
        prompt_t = (usage.prompt_token_count or 0) if usage else 0
        comp_t = (usage.candidates_token_count or 0) if usage else 0
        return TokenUsage(prompt_tokens=prompt_t, completion_tokens=comp_t)

    def _error(self, msg, start_time, status_code=None):
        return self._failure(msg, self._measure_latency(start_time), status_code)


# Singleton instance
gemini_provider = GeminiProvider()
