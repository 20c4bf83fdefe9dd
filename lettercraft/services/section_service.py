"""
Section Service - per-section drafting behind POST /api/generate-section.

Returns canned HTML keyed by (letter type, section name). No model call is
made; unknown pairs get a generic paragraph naming the section.
"""

import logging
from dataclasses import dataclass

from lettercraft.templates.sections import render_section

logger = logging.getLogger("lettercraft.services.section")


@dataclass
class SectionResult:
    content: str
    section: str
    type: str

    def to_dict(self):
        return {"content": self.content, "section": self.section, "type": self.type}


class SectionService:

    def generate(self, letter_type: str, section: str, template_title: str) -> SectionResult:
        content = render_section(letter_type, section, template_title)
        logger.info(f"Section drafted: type={letter_type} section={section!r}")
        return SectionResult(content=content, section=section, type=letter_type)


section_service = SectionService()
