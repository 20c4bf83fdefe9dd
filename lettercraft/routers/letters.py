"""
Letters Router - HTTP surface of the letter gateway.

This router only does HTTP handling; prompt construction and the model
call live in LetterService.

Endpoints:
- POST /api/generate-letter   full letter from a template or free text
- POST /api/generate-section  canned HTML for one letter section
- GET  /api/templates         template catalog
- GET  /api/templates/{id}/sections
- POST /api/export-pdf        letter HTML -> PDF download
- GET  /api/stats             AI usage statistics

Errors are returned as {"error": message}; see the handlers in main.py.
"""

import logging
from typing import List
from urllib.parse import quote

from fastapi import APIRouter, Depends, Response

from lettercraft.core.exceptions import GenerationError, InvalidRequestError, LetterError
from lettercraft.deps import (
    get_letter_service,
    get_pdf_exporter,
    get_section_service,
    get_template_catalog,
)
from lettercraft.export.pdf import PdfExporter, PdfExportError
from lettercraft.schemas.letter import (
    AIStatsResponse,
    ErrorResponse,
    ExportPdfRequest,
    GenerateLetterBody,
    GenerateLetterResponse,
    GenerateSectionRequest,
    GenerateSectionResponse,
    TemplateOut,
    TemplateSectionsOut,
)
from lettercraft.services.letter_service import LetterService
from lettercraft.services.section_service import SectionService
from lettercraft.templates.catalog import TemplateCatalog
from lettercraft.templates.prompt_builder import extract_variables
from lettercraft.templates.sections import get_sections


# ---------------------------------------------------------------------------
# LOGGER SETUP
# ---------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# ROUTER SETUP
# ---------------------------------------------------------------------------
router = APIRouter(prefix="/api", tags=["letters"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


# ---------------------------------------------------------------------------
# GENERATION ENDPOINTS
# ---------------------------------------------------------------------------

@router.post(
    "/generate-letter",
    response_model=GenerateLetterResponse,
    responses=ERROR_RESPONSES,
)
async def generate_letter(
    body: GenerateLetterBody,
    service: LetterService = Depends(get_letter_service),
):
    """
    Generate a letter.

    **Request bodies:**
    - `{"type": "custom", "customPrompt": "..."}` - prompt sent verbatim
    - `{"type": "<template id>", "variables": {"Company Name": "Acme"}}`

    Upstream (Gemini) errors keep their status code.
    """
    logger.info(f"Incoming letter request: type={body.type!r}")
    try:
        result = await service.generate(body)
    except LetterError:
        raise
    except Exception as e:
        logger.error(f"Failed to generate letter: {e}", exc_info=True)
        raise GenerationError(str(e))

    return GenerateLetterResponse(**result.to_dict())


@router.post(
    "/generate-section",
    response_model=GenerateSectionResponse,
    responses={500: {"model": ErrorResponse}},
)
async def generate_section(
    request: GenerateSectionRequest,
    service: SectionService = Depends(get_section_service),
):
    """Draft one section of a letter from the canned section table."""
    try:
        result = service.generate(request.type, request.section, request.template_title)
    except Exception as e:
        logger.error(f"Error generating section: {e}", exc_info=True)
        raise GenerationError("Failed to generate section content")

    return GenerateSectionResponse(**result.to_dict())


# ---------------------------------------------------------------------------
# CATALOG ENDPOINTS
# ---------------------------------------------------------------------------

@router.get("/templates", response_model=List[TemplateOut])
async def list_templates(catalog: TemplateCatalog = Depends(get_template_catalog)):
    """All letter templates, with the placeholders each one contains."""
    return [
        TemplateOut(**template.to_dict(), variables=extract_variables(template.prompt))
        for template in catalog
    ]


@router.get(
    "/templates/{template_id}/sections",
    response_model=TemplateSectionsOut,
    responses={404: {"model": ErrorResponse}},
)
async def list_template_sections(template_id: str):
    """Section names used for section-by-section drafting."""
    sections = get_sections(template_id)
    if sections is None:
        raise LetterError(f"No sections defined for {template_id}", status_code=404)
    return TemplateSectionsOut(id=template_id, sections=sections)


# ---------------------------------------------------------------------------
# EXPORT ENDPOINT
# ---------------------------------------------------------------------------

def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII filename and an RFC 5987 UTF-8 copy."""
    fallback = filename.encode("ascii", "ignore").decode().replace('"', "")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


@router.post(
    "/export-pdf",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def export_pdf(
    request: ExportPdfRequest,
    exporter: PdfExporter = Depends(get_pdf_exporter),
):
    """Render letter HTML to an A4 PDF download."""
    if not request.content.strip():
        raise InvalidRequestError("Nothing to export")

    try:
        document = await exporter.export(request.content, title=request.title)
    except PdfExportError as e:
        raise GenerationError(str(e))

    return Response(
        content=document.data,
        media_type=document.media_type,
        headers={"Content-Disposition": content_disposition(document.filename)},
    )


# ---------------------------------------------------------------------------
# STATS ENDPOINT
# ---------------------------------------------------------------------------

@router.get("/stats", response_model=AIStatsResponse)
async def get_ai_stats(service: LetterService = Depends(get_letter_service)):
    """Aggregated AI usage: requests, success rate, tokens, estimated cost."""
    return AIStatsResponse(**service.monitor.get_stats().to_dict())
