"""
AI Providers Module - client for the LLM behind the letter gateway.

    response = await gemini_provider.generate_parts([instruction, prompt])
"""

from lettercraft.ai.providers.base import AIProvider, AIResponse, ProviderType, TokenUsage
from lettercraft.ai.providers.gemini import GeminiProvider, gemini_provider

__all__ = [
    "AIProvider",
    "AIResponse",
    "ProviderType",
    "TokenUsage",
    "GeminiProvider",
    "gemini_provider",
]
