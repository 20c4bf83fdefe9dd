"""
Letter API Client - async HTTP client for the letter gateway.

Used by the document workspace to request letters and sections. Errors
are raised as LetterApiError with a message fit to show next to the form.

Usage:
    client = LetterApiClient("http://localhost:8000")
    data = await client.generate_letter({"type": "custom", "customPrompt": "..."})
"""

import logging
from typing import Any, Dict, Optional

import httpx

from lettercraft.core.config import settings

logger = logging.getLogger("lettercraft.client")


class LetterApiError(Exception):
    """Raised when the gateway call fails or returns no content."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class LetterApiClient:
    """
    Thin wrapper over the gateway endpoints.

    Pass `http_client` to reuse a connection pool or to plug in a test
    transport; otherwise a short-lived client is opened per call.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = None,
    ):
        self.base_url = (base_url or settings.LETTER_API_URL).rstrip("/")
        self._http_client = http_client
        self._timeout = timeout or float(settings.AI_REQUEST_TIMEOUT + 5)

    async def generate_letter(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """POST /api/generate-letter and return {type, length, content}."""
        return await self._post("/api/generate-letter", body)

    async def generate_section(
        self,
        letter_type: str,
        section: str,
        template_title: str,
    ) -> Dict[str, Any]:
        """POST /api/generate-section and return {content, section, type}."""
        return await self._post(
            "/api/generate-section",
            {"type": letter_type, "section": section, "templateTitle": template_title},
        )

    # -------------------------------------------------------------------------
    # HTTP
    # -------------------------------------------------------------------------

    async def _post(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            if self._http_client is not None:
                response = await self._http_client.post(url, json=body, timeout=self._timeout)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.post(url, json=body, timeout=self._timeout)
        except httpx.RequestError as e:
            logger.error(f"Network error calling {path}: {e}")
            raise LetterApiError(f"Network error: {e}")

        if not response.is_success:
            logger.warning(f"{path} returned HTTP {response.status_code}")
            raise LetterApiError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
            )

        data = response.json()
        if not data.get("content"):
            raise LetterApiError("No content received from server")
        return data
