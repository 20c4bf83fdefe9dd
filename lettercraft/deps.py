"""
Dependencies module - reusable FastAPI dependencies for route handlers.

Routes receive their services through Depends() so tests can swap them
with app.dependency_overrides.
"""

from lettercraft.export.pdf import PdfExporter
from lettercraft.services.letter_service import LetterService, letter_service
from lettercraft.services.section_service import SectionService, section_service
from lettercraft.templates.catalog import TemplateCatalog, get_catalog


def get_letter_service() -> LetterService:
    return letter_service


def get_section_service() -> SectionService:
    return section_service


def get_template_catalog() -> TemplateCatalog:
    return get_catalog()


def get_pdf_exporter() -> PdfExporter:
    # Playwright is imported lazily, so building one per request is cheap
    return PdfExporter()
