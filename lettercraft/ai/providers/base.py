"""
Base AI Provider - the contract between the letter gateway and an LLM.

Providers never raise. A failed call comes back as an AIResponse with
`success=False`; `status_code` is set when the upstream API answered with
an HTTP error and left as None for transport failures, so the gateway can
pick the status to surface.

Example:
    provider = GeminiProvider()
    response = await provider.generate_parts([system_instruction, prompt])
    if response.success:
        print(response.content)
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional

logger = logging.getLogger("lettercraft.ai")


class ProviderType(str, Enum):
    GEMINI = "gemini"


@dataclass
class TokenUsage:
    """Token counts reported by the model, used for cost estimates."""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def __post_init__(self):
        if self.total_tokens == 0:
            self.total_tokens = self.prompt_tokens + self.completion_tokens


@dataclass
class AIResponse:
    """
    Result of one provider call.

    Attributes:
        content: Generated text, "" when the model returned none
        error: Error message, or the raw upstream error body
        status_code: Upstream HTTP status for API errors
        raw_response: SDK response object, kept for debugging
    """
    content: str
    provider: ProviderType
    model: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    latency_ms: float = 0.0
    success: bool = True
    error: Optional[str] = None
    status_code: Optional[int] = None
    raw_response: Optional[Any] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class AIProvider(ABC):
    """Sends ordered text parts to a model as a single user message."""

    provider_type: ProviderType
    model: str

    @abstractmethod
    async def generate_parts(
        self,
        parts: List[str],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> AIResponse:
        """
        Args:
            parts: Text blocks in order, e.g. [system instruction, prompt]
            temperature: Optional sampling temperature
            max_tokens: Optional cap on generated tokens

        Must not raise; errors are reported through the AIResponse.
        """
        pass

    def _measure_latency(self, start_time: float) -> float:
        return (time.time() - start_time) * 1000

    def _failure(
        self,
        error: str,
        latency_ms: float = 0.0,
        status_code: Optional[int] = None,
    ) -> AIResponse:
        logger.error(f"{self.provider_type.value} call failed (status={status_code}): {error}")
        return AIResponse(
            content="",
            provider=self.provider_type,
            model=self.model,
            latency_ms=latency_ms,
            success=False,
            error=error,
            status_code=status_code,
        )
