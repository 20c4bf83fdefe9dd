"""
Letter schemas - Pydantic models for the letter gateway endpoints.

The generate-letter body arrives loosely typed ({type, variables?,
customPrompt?}) and is narrowed into one of two request variants by
`parse_generate_request` before any business logic sees it.
"""

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from lettercraft.core.exceptions import InvalidRequestError


CUSTOM_TYPE = "custom"


# ---------------------------------------------------------------------------
# REQUEST SCHEMAS (what the client sends)
# ---------------------------------------------------------------------------

class GenerateLetterBody(BaseModel):
    """
    Raw body of POST /api/generate-letter.

    Example request bodies:
    {"type": "custom", "customPrompt": "Write a thank you note to my team"}
    {"type": "cover-letter", "variables": {"Company Name": "Acme"}}
    """
    model_config = ConfigDict(populate_by_name=True)

    type: Optional[str] = None
    variables: Optional[Dict[str, Optional[str]]] = None
    custom_prompt: Optional[str] = Field(default=None, alias="customPrompt")


class CustomPromptRequest(BaseModel):
    """Free-text prompt, sent to the model verbatim."""
    custom_prompt: str


class TemplateRequest(BaseModel):
    """Template id plus placeholder values."""
    template_id: str
    variables: Dict[str, Optional[str]] = Field(default_factory=dict)


GenerateRequest = Union[CustomPromptRequest, TemplateRequest]


def parse_generate_request(body: GenerateLetterBody) -> GenerateRequest:
    """
    Narrow a raw body into a request variant.

    Order matters: a "custom" type with a non-empty customPrompt wins;
    otherwise any type with a variables object is a template request.

    Raises:
        InvalidRequestError: neither shape matches
    """
    if body.type == CUSTOM_TYPE and body.custom_prompt:
        return CustomPromptRequest(custom_prompt=body.custom_prompt)
    if body.type and body.variables is not None:
        return TemplateRequest(template_id=body.type, variables=body.variables)
    raise InvalidRequestError()


class GenerateSectionRequest(BaseModel):
    """
    Body of POST /api/generate-section.

    Example request body:
    {"type": "cover-letter", "section": "Salutation", "templateTitle": "Cover Letter"}

    Missing fields fall back to the generic paragraph instead of failing.
    """
    model_config = ConfigDict(populate_by_name=True)

    type: str = ""
    section: str = ""
    template_title: str = Field(default="Letter", alias="templateTitle")


class ExportPdfRequest(BaseModel):
    """Body of POST /api/export-pdf. `title` only names the file."""
    content: str
    title: Optional[str] = None


# ---------------------------------------------------------------------------
# RESPONSE SCHEMAS (what the server returns)
# ---------------------------------------------------------------------------

class GenerateLetterResponse(BaseModel):
    """
    Example response:
    {"type": "cover-letter", "length": "1 page", "content": "<p>Dear ...</p>"}
    """
    type: str
    length: str = "1 page"
    content: str


class GenerateSectionResponse(BaseModel):
    content: str
    section: str
    type: str


class TemplateOut(BaseModel):
    id: str
    title: str
    length: str
    prompt: str
    variables: List[str] = Field(default_factory=list, description="Placeholder names in order")


class TemplateSectionsOut(BaseModel):
    id: str
    sections: List[str]


class ErrorResponse(BaseModel):
    error: str


class AIStatsResponse(BaseModel):
    """Response schema for /api/stats."""
    total_requests: int
    successful_requests: int
    failed_requests: int
    success_rate: str
    total_tokens: int
    avg_latency_ms: float
    estimated_total_cost: str
    requests_by_letter_type: Dict[str, int]
    failures_by_status: Dict[str, int]
