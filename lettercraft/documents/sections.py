"""
Section Workspace - build a letter one section at a time.

Several sections can be generating at once; their titles are tracked in
`generating` and a title already in flight cannot be requested again.
Requests cannot be cancelled. If the section was deleted or the template
changed while a request was pending, the late result is dropped.
"""

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Set

from lettercraft.client import LetterApiClient, LetterApiError
from lettercraft.documents.storage import (
    SECTION_CONTENTS_KEY,
    SELECTED_TEMPLATE_KEY,
    SafeStorage,
    StoragePort,
)
from lettercraft.export.pdf import PdfDocument, PdfExporter, PdfExportError
from lettercraft.templates.catalog import TemplateCatalog, get_catalog

logger = logging.getLogger("lettercraft.documents.sections")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class SectionContent:
    id: str
    title: str
    content: str
    timestamp: str
    is_generating: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "timestamp": self.timestamp,
            "isGenerating": self.is_generating,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SectionContent":
        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            content=str(data["content"]),
            timestamp=str(data["timestamp"]),
            is_generating=bool(data.get("isGenerating", False)),
        )


class SectionWorkspace:

    def __init__(
        self,
        storage: StoragePort,
        client: LetterApiClient,
        catalog: Optional[TemplateCatalog] = None,
        exporter: Optional[PdfExporter] = None,
    ):
        self._storage = SafeStorage(storage)
        self.client = client
        self.catalog = catalog or get_catalog()
        self._exporter = exporter

        self.sections: List[SectionContent] = []
        self.selected_template_id: Optional[str] = None
        self.generating: Set[str] = set()
        self.error: Optional[str] = None

        self._hydrate()

    # -----------------------------------------------------------------------
    # TEMPLATE
    # -----------------------------------------------------------------------

    def select_template(self, template_id: str) -> None:
        """Switch letter type; existing sections are discarded."""
        self.selected_template_id = template_id
        self.error = None
        self._set_sections([])
        self._storage.save(SELECTED_TEMPLATE_KEY, template_id)

    # -----------------------------------------------------------------------
    # GENERATION
    # -----------------------------------------------------------------------

    async def generate(self, section_title: str) -> Optional[SectionContent]:
        """Draft a new section and append it."""
        return await self._generate(section_title, section_id=None)

    async def regenerate(self, section_id: str) -> Optional[SectionContent]:
        """Redraft an existing section in place."""
        section = self._find(section_id)
        if section is None:
            return None
        return await self._generate(section.title, section_id=section_id)

    async def _generate(
        self,
        section_title: str,
        section_id: Optional[str],
    ) -> Optional[SectionContent]:
        template_id = self.selected_template_id
        if not template_id or section_title in self.generating:
            return None

        self.generating.add(section_title)
        if section_id:
            self._update(section_id, is_generating=True)

        try:
            template = self.catalog.get(template_id)
            data = await self.client.generate_section(
                template_id,
                section_title,
                template.title if template else "Letter",
            )

            if self.selected_template_id != template_id:
                logger.info(f"Dropping section {section_title!r}: template changed")
                return None

            timestamp = _now_iso()
            if section_id:
                return self._update(
                    section_id,
                    content=data["content"],
                    timestamp=timestamp,
                    is_generating=False,
                )

            section = SectionContent(
                id=f"{int(datetime.now().timestamp() * 1000)}-{uuid.uuid4().hex[:9]}",
                title=section_title,
                content=data["content"],
                timestamp=timestamp,
            )
            self._set_sections([*self.sections, section])
            return section

        except LetterApiError as e:
            self.error = str(e) or "An error occurred while generating the section"
            if section_id:
                self._update(section_id, is_generating=False)
            return None
        finally:
            self.generating.discard(section_title)

    # -----------------------------------------------------------------------
    # EDITING
    # -----------------------------------------------------------------------

    def update_content(self, section_id: str, content: str) -> Optional[SectionContent]:
        return self._update(section_id, content=content, timestamp=_now_iso())

    def delete(self, section_id: str) -> None:
        self._set_sections([s for s in self.sections if s.id != section_id])

    def delete_all(self) -> None:
        self.sections = []
        self.selected_template_id = None
        self._storage.remove(SECTION_CONTENTS_KEY)
        self._storage.remove(SELECTED_TEMPLATE_KEY)

    # -----------------------------------------------------------------------
    # EXPORT
    # -----------------------------------------------------------------------

    async def export_pdf(self) -> Optional[PdfDocument]:
        """All sections under the template title; None if empty or on failure."""
        if not self.sections:
            return None
        if self._exporter is None:
            self._exporter = PdfExporter()

        template = self.catalog.get(self.selected_template_id) if self.selected_template_id else None
        title = template.title if template else "Letter"
        try:
            return await self._exporter.export_sections(
                title, [(s.title, s.content) for s in self.sections]
            )
        except PdfExportError as e:
            self.error = str(e)
            return None

    # -----------------------------------------------------------------------
    # PRIVATE METHODS
    # -----------------------------------------------------------------------

    def _find(self, section_id: str) -> Optional[SectionContent]:
        return next((s for s in self.sections if s.id == section_id), None)

    def _update(self, section_id: str, **changes) -> Optional[SectionContent]:
        updated = None
        sections = []
        for section in self.sections:
            if section.id == section_id:
                section = updated = replace(section, **changes)
            sections.append(section)
        if updated is not None:
            self._set_sections(sections)
        return updated

    def _set_sections(self, sections: List[SectionContent]) -> None:
        self.sections = sections
        self._storage.save(SECTION_CONTENTS_KEY, [s.to_dict() for s in sections])

    def _hydrate(self) -> None:
        saved_sections = self._storage.load(SECTION_CONTENTS_KEY)
        saved_template = self._storage.load(SELECTED_TEMPLATE_KEY)

        if saved_sections:
            try:
                # A reload can never resume an in-flight request
                self.sections = [
                    replace(SectionContent.from_dict(s), is_generating=False)
                    for s in saved_sections
                ]
            except (KeyError, TypeError, AttributeError) as e:
                logger.error(f"Error loading {SECTION_CONTENTS_KEY} from storage: {e}")
        if isinstance(saved_template, str) and saved_template:
            self.selected_template_id = saved_template
