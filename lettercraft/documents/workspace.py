"""
Letter Workspace - the generate / edit / export loop around a DocumentSession.

Only one full-letter generation may be in flight per workspace; a second
call while one is pending is ignored. Failures are stored in `error` for
display next to the form and are never retried.
"""

import logging
from typing import Optional

from lettercraft.client import LetterApiClient, LetterApiError
from lettercraft.documents.session import DocumentSession
from lettercraft.export.pdf import PdfDocument, PdfExporter, PdfExportError
from lettercraft.templates.catalog import TemplateCatalog, get_catalog
from lettercraft.templates.prompt_builder import build_variable_map

logger = logging.getLogger("lettercraft.documents.workspace")


class LetterWorkspace:

    def __init__(
        self,
        session: DocumentSession,
        client: LetterApiClient,
        catalog: Optional[TemplateCatalog] = None,
        exporter: Optional[PdfExporter] = None,
    ):
        self.session = session
        self.client = client
        self.catalog = catalog or get_catalog()
        self._exporter = exporter

        self.prompt: str = ""
        self.selected_template_id: Optional[str] = None
        self.is_generating: bool = False
        self.error: Optional[str] = None

    # -----------------------------------------------------------------------
    # FORM
    # -----------------------------------------------------------------------

    def select_template(self, template_id: str) -> None:
        """Load a template body into the prompt box."""
        template = self.catalog.get(template_id)
        if template is None:
            raise KeyError(f"Unknown template: {template_id}")
        self.prompt = template.prompt
        self.selected_template_id = template.id
        self.error = None

    def set_prompt(self, text: str) -> None:
        """Free-text edit; detaches from any selected template."""
        self.prompt = text
        self.selected_template_id = None
        self.error = None

    # -----------------------------------------------------------------------
    # GENERATION
    # -----------------------------------------------------------------------

    async def generate(self) -> bool:
        """
        Request a letter and record it in the session.

        Returns True when a new letter was stored.
        """
        if not self.prompt.strip() or self.is_generating:
            return False

        self.is_generating = True
        self.error = None
        try:
            template = (
                self.catalog.get(self.selected_template_id)
                if self.selected_template_id
                else None
            )
            if self.selected_template_id:
                body = {
                    "type": self.selected_template_id,
                    "variables": build_variable_map(template.prompt if template else ""),
                }
            else:
                body = {"type": "custom", "customPrompt": self.prompt}

            data = await self.client.generate_letter(body)

            title = template.title if template else "Custom Prompt"
            self.session.record_generation(
                letter_type=data.get("type") or "custom",
                length=data.get("length") or "unknown",
                content=data["content"],
                title=title,
            )
            return True
        except LetterApiError as e:
            self.error = str(e) or "An error occurred while generating the letter"
            return False
        finally:
            self.is_generating = False

    # -----------------------------------------------------------------------
    # EXPORT
    # -----------------------------------------------------------------------

    async def export_pdf(self) -> Optional[PdfDocument]:
        """Export the editor content; None if empty or on failure."""
        if not self.session.active_content:
            return None
        if self._exporter is None:
            self._exporter = PdfExporter()
        try:
            return await self._exporter.export(self.session.active_content)
        except PdfExportError as e:
            self.error = str(e)
            return None
