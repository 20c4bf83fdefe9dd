"""
Tests for LetterWorkspace and SectionWorkspace.

The section tests use a fake client whose responses are released by hand,
so overlapping generations can be driven step by step.
"""

import asyncio
from typing import Dict, List, Tuple

import httpx
import pytest

from lettercraft.client import LetterApiClient, LetterApiError
from lettercraft.documents.session import DocumentSession
from lettercraft.documents.sections import SectionWorkspace
from lettercraft.documents.storage import SECTION_CONTENTS_KEY, SELECTED_TEMPLATE_KEY
from lettercraft.documents.workspace import LetterWorkspace
from lettercraft.main import app


# ---------------------------------------------------------------------------
# FAKE CLIENTS
# ---------------------------------------------------------------------------

class RecordingLetterClient:
    """Answers generate_letter immediately, or raises a preset error."""

    def __init__(self, error: LetterApiError = None):
        self.bodies: List[Dict] = []
        self.error = error

    async def generate_letter(self, body):
        self.bodies.append(body)
        if self.error:
            raise self.error
        letter_type = "Custom Prompt" if body["type"] == "custom" else body["type"]
        return {"type": letter_type, "length": "1 page", "content": f"<p>{letter_type}</p>"}


class GatedSectionClient:
    """Each generate_section call waits until release(title) is called."""

    def __init__(self):
        self.calls: List[Tuple[str, str, str]] = []
        self._gates: Dict[str, asyncio.Event] = {}
        self._errors: Dict[str, LetterApiError] = {}

    async def generate_section(self, letter_type, section, template_title):
        self.calls.append((letter_type, section, template_title))
        gate = self._gates.setdefault(section, asyncio.Event())
        await gate.wait()
        if section in self._errors:
            raise self._errors.pop(section)
        return {"content": f"<p>{section} v{len(self.calls)}</p>", "section": section,
                "type": letter_type}

    def release(self, section, error: LetterApiError = None):
        if error:
            self._errors[section] = error
        self._gates.setdefault(section, asyncio.Event()).set()

    def hold(self, section):
        self._gates[section] = asyncio.Event()


async def settle():
    """Let pending tasks run up to their next await."""
    for _ in range(5):
        await asyncio.sleep(0)


# ---------------------------------------------------------------------------
# LETTER WORKSPACE
# ---------------------------------------------------------------------------

@pytest.fixture
def session(storage):
    return DocumentSession(storage)


class TestLetterWorkspace:

    @pytest.mark.asyncio
    async def test_template_generation(self, session, exporter):
        client = RecordingLetterClient()
        workspace = LetterWorkspace(session, client, exporter=exporter)
        workspace.select_template("cover-letter")

        assert await workspace.generate() is True

        body = client.bodies[0]
        assert body["type"] == "cover-letter"
        assert body["variables"]["Company Name"] == "Acme Corporation"
        assert session.active_content == "<p>cover-letter</p>"
        assert session.versions[0].name == "Cover Letter"
        assert session.history[0].type == "cover-letter"

    @pytest.mark.asyncio
    async def test_custom_generation(self, session):
        client = RecordingLetterClient()
        workspace = LetterWorkspace(session, client)
        workspace.select_template("cover-letter")
        workspace.set_prompt("Write a thank you note to my team")

        assert await workspace.generate() is True

        assert client.bodies[0] == {
            "type": "custom",
            "customPrompt": "Write a thank you note to my team",
        }
        assert session.versions[0].name == "Custom Prompt"

    @pytest.mark.asyncio
    async def test_blank_prompt_is_ignored(self, session):
        client = RecordingLetterClient()
        workspace = LetterWorkspace(session, client)
        workspace.set_prompt("   ")

        assert await workspace.generate() is False
        assert client.bodies == []

    @pytest.mark.asyncio
    async def test_error_is_kept_for_display(self, session):
        client = RecordingLetterClient(error=LetterApiError("HTTP 429: Too Many Requests", 429))
        workspace = LetterWorkspace(session, client)
        workspace.set_prompt("Hi")

        assert await workspace.generate() is False
        assert workspace.error == "HTTP 429: Too Many Requests"
        assert workspace.is_generating is False
        assert session.versions == []

    def test_unknown_template(self, session):
        workspace = LetterWorkspace(session, RecordingLetterClient())

        with pytest.raises(KeyError):
            workspace.select_template("nonexistent-id")

    @pytest.mark.asyncio
    async def test_export_pdf(self, session, exporter):
        workspace = LetterWorkspace(session, RecordingLetterClient(), exporter=exporter)
        assert await workspace.export_pdf() is None

        session.set_content("<p>Hi</p>")
        document = await workspace.export_pdf()

        assert document.filename.startswith("letter-")

    @pytest.mark.asyncio
    async def test_against_the_real_api(self, client, provider, session):
        """Full round trip: workspace -> HTTP client -> FastAPI app -> fake model."""
        http_client = httpx.AsyncClient(transport=httpx.ASGITransport(app=app))
        api_client = LetterApiClient("http://testserver", http_client=http_client)
        workspace = LetterWorkspace(session, api_client)
        workspace.select_template("resignation-letter")

        try:
            assert await workspace.generate() is True
        finally:
            await http_client.aclose()

        assert session.active_content == "<p>Dear Hiring Manager,</p>"
        assert session.history[0].type == "resignation-letter"
        assert len(provider.calls) == 1


# ---------------------------------------------------------------------------
# SECTION WORKSPACE
# ---------------------------------------------------------------------------

@pytest.fixture
def section_client():
    return GatedSectionClient()


@pytest.fixture
def sections(storage, section_client, exporter):
    workspace = SectionWorkspace(storage, section_client, exporter=exporter)
    workspace.select_template("cover-letter")
    return workspace


class TestSectionWorkspace:

    @pytest.mark.asyncio
    async def test_generate_appends_section(self, sections, section_client):
        task = asyncio.create_task(sections.generate("Salutation"))
        await settle()
        assert sections.generating == {"Salutation"}

        section_client.release("Salutation")
        section = await task

        assert section.title == "Salutation"
        assert sections.sections == [section]
        assert sections.generating == set()
        assert section_client.calls == [("cover-letter", "Salutation", "Cover Letter")]

    @pytest.mark.asyncio
    async def test_concurrent_sections(self, sections, section_client):
        first = asyncio.create_task(sections.generate("Salutation"))
        second = asyncio.create_task(sections.generate("Closing"))
        await settle()
        assert sections.generating == {"Salutation", "Closing"}

        section_client.release("Closing")
        await second
        section_client.release("Salutation")
        await first

        assert [s.title for s in sections.sections] == ["Closing", "Salutation"]
        assert sections.generating == set()

    @pytest.mark.asyncio
    async def test_same_title_cannot_run_twice(self, sections, section_client):
        first = asyncio.create_task(sections.generate("Salutation"))
        await settle()

        assert await sections.generate("Salutation") is None

        section_client.release("Salutation")
        await first
        assert len(section_client.calls) == 1

    @pytest.mark.asyncio
    async def test_result_dropped_after_template_change(self, sections, section_client):
        task = asyncio.create_task(sections.generate("Salutation"))
        await settle()

        sections.select_template("resignation-letter")
        section_client.release("Salutation")

        assert await task is None
        assert sections.sections == []
        assert sections.generating == set()

    @pytest.mark.asyncio
    async def test_regenerate_in_place(self, sections, section_client):
        section_client.release("Salutation")
        original = await sections.generate("Salutation")
        section_client.hold("Salutation")

        task = asyncio.create_task(sections.regenerate(original.id))
        await settle()
        assert sections.sections[0].is_generating is True

        section_client.release("Salutation")
        updated = await task

        assert updated.id == original.id
        assert updated.is_generating is False
        assert updated.content != original.content
        assert len(sections.sections) == 1

    @pytest.mark.asyncio
    async def test_error_clears_generating(self, sections, section_client):
        task = asyncio.create_task(sections.generate("Salutation"))
        await settle()

        section_client.release("Salutation", error=LetterApiError("Network error: boom"))

        assert await task is None
        assert sections.error == "Network error: boom"
        assert sections.generating == set()

    @pytest.mark.asyncio
    async def test_no_template_selected(self, storage, section_client):
        workspace = SectionWorkspace(storage, section_client)

        assert await workspace.generate("Salutation") is None
        assert section_client.calls == []

    @pytest.mark.asyncio
    async def test_edit_delete_and_persist(self, sections, section_client, storage):
        section_client.release("Salutation")
        section_client.release("Closing")
        salutation = await sections.generate("Salutation")
        closing = await sections.generate("Closing")

        sections.update_content(salutation.id, "<p>Hello team,</p>")
        sections.delete(closing.id)

        reloaded = SectionWorkspace(storage, section_client)
        assert reloaded.selected_template_id == "cover-letter"
        assert [s.content for s in reloaded.sections] == ["<p>Hello team,</p>"]

        reloaded.delete_all()
        assert storage.load(SECTION_CONTENTS_KEY) is None
        assert storage.load(SELECTED_TEMPLATE_KEY) is None

    def test_hydrate_clears_stale_generating_flags(self, storage, section_client):
        storage.save(SELECTED_TEMPLATE_KEY, "cover-letter")
        storage.save(SECTION_CONTENTS_KEY, [{
            "id": "1", "title": "Salutation", "content": "<p>x</p>",
            "timestamp": "2025-01-31T10:00:00+00:00", "isGenerating": True,
        }])

        workspace = SectionWorkspace(storage, section_client)

        assert workspace.sections[0].is_generating is False

    @pytest.mark.asyncio
    async def test_export_sections(self, sections, section_client, rasterizer):
        assert await sections.export_pdf() is None

        section_client.release("Salutation")
        await sections.generate("Salutation")
        document = await sections.export_pdf()

        assert document.filename.startswith("cover-letter-")
        assert "Salutation" in rasterizer.documents[0]
