"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- A scripted AI provider (no network calls, no token costs)
- A LetterService wired to that provider and a fresh monitor
- A FastAPI TestClient with service dependencies overridden
- In-memory storage and a fake HTML rasterizer
"""

from typing import Generator, List, Optional

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from lettercraft.ai.monitoring import AIMonitor
from lettercraft.ai.providers.base import (
    AIProvider,
    AIResponse,
    ProviderType,
    TokenUsage,
)
from lettercraft.deps import get_letter_service, get_pdf_exporter
from lettercraft.documents.storage import InMemoryStorage
from lettercraft.export.pdf import HtmlRasterizer, PdfExporter
from lettercraft.main import app
from lettercraft.services.letter_service import LetterService
from lettercraft.templates.catalog import TemplateCatalog, get_catalog


# ---------------------------------------------------------------------------
# AI PROVIDER FAKE
# ---------------------------------------------------------------------------

class ScriptedProvider(AIProvider):
    """
    Provider that returns a preset AIResponse and records what it was sent.
    """

    provider_type = ProviderType.GEMINI

    def __init__(self, response: Optional[AIResponse] = None):
        self.model = "gemini-test"
        self.response = response or self.success("<p>Dear Hiring Manager,</p>")
        self.calls: List[List[str]] = []

    async def generate_parts(self, parts, temperature=None, max_tokens=None):
        self.calls.append(list(parts))
        return self.response

    @staticmethod
    def success(content: str) -> AIResponse:
        return AIResponse(
            content=content,
            provider=ProviderType.GEMINI,
            model="gemini-test",
            usage=TokenUsage(prompt_tokens=40, completion_tokens=120),
            latency_ms=12.5,
        )

    @staticmethod
    def failure(error: str, status_code: Optional[int] = None) -> AIResponse:
        return AIResponse(
            content="",
            provider=ProviderType.GEMINI,
            model="gemini-test",
            success=False,
            error=error,
            status_code=status_code,
        )


# ---------------------------------------------------------------------------
# RASTERIZER FAKE
# ---------------------------------------------------------------------------

class FakeRasterizer(HtmlRasterizer):
    """Returns a blank image of a fixed height instead of launching a browser."""

    def __init__(self, height: int = 1000, error: Optional[Exception] = None):
        self.height = height
        self.error = error
        self.documents: List[str] = []

    async def rasterize(self, html_document, width, scale):
        self.documents.append(html_document)
        if self.error:
            raise self.error
        return Image.new("RGB", (width * scale, self.height), "white")


# ---------------------------------------------------------------------------
# FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def catalog() -> TemplateCatalog:
    """The bundled template catalog."""
    return get_catalog()


@pytest.fixture
def provider() -> ScriptedProvider:
    return ScriptedProvider()


@pytest.fixture
def monitor() -> AIMonitor:
    return AIMonitor()


@pytest.fixture
def letter_service(provider, catalog, monitor) -> LetterService:
    return LetterService(provider=provider, catalog=catalog, monitor=monitor)


@pytest.fixture
def rasterizer() -> FakeRasterizer:
    return FakeRasterizer()


@pytest.fixture
def exporter(rasterizer) -> PdfExporter:
    return PdfExporter(rasterizer=rasterizer, width=800, scale=2)


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def client(letter_service, exporter) -> Generator[TestClient, None, None]:
    """
    Test client with the letter service and PDF exporter overridden.
    """
    app.dependency_overrides[get_letter_service] = lambda: letter_service
    app.dependency_overrides[get_pdf_exporter] = lambda: exporter

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
