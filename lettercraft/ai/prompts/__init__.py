"""
Prompts Module - Centralized prompt text for AI interactions.
"""

from lettercraft.ai.prompts.letter_prompts import (
    ALLOWED_HTML_TAGS,
    EMPTY_RESPONSE_PLACEHOLDER,
    LETTER_SYSTEM_INSTRUCTION,
)

__all__ = [
    "ALLOWED_HTML_TAGS",
    "EMPTY_RESPONSE_PLACEHOLDER",
    "LETTER_SYSTEM_INSTRUCTION",
]
