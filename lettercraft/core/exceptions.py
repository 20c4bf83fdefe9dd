"""
Exceptions - error taxonomy for the letter gateway.

Every error carries the HTTP status it maps to; a single exception handler
in main.py renders them as {"error": message}.
"""

from typing import Optional


class LetterError(Exception):
    """Base exception for all letter generation errors."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidRequestError(LetterError):
    """Body matches neither a custom prompt nor a template request."""

    status_code = 400

    def __init__(self, message: str = "Invalid request body"):
        super().__init__(message)


class InvalidLetterTypeError(LetterError):
    """Template request names an id that is not in the catalog."""

    status_code = 400

    def __init__(self, message: str = "Invalid letter type"):
        super().__init__(message)


class EmptyPromptError(LetterError):
    """Prompt is blank once substitution and trimming are done."""

    status_code = 400

    def __init__(self, message: str = "Prompt is empty after processing"):
        super().__init__(message)


class UpstreamError(LetterError):
    """The LLM provider answered with a non-2xx status; passed through as-is."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message, status_code=status_code)


class GenerationError(LetterError):
    """Transport failure or any unexpected exception while generating."""

    status_code = 500
