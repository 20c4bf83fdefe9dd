"""
PDF Exporter - rasterize an HTML fragment and paginate it onto A4 pages.

The fragment is rendered once as a single tall image (headless Chromium
through Playwright), then cut into A4-proportioned slices with Pillow and
written as a multi-page PDF. Text is not selectable in the result; this
mirrors a screenshot-to-PDF export, not a print layout engine.

Usage:
    exporter = PdfExporter()
    document = await exporter.export("<p>Dear Hiring Manager,</p>")
    Path(document.filename).write_bytes(document.data)
"""

import html
import io
import logging
import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence, Tuple

from PIL import Image

from lettercraft.core.config import settings

logger = logging.getLogger("lettercraft.export.pdf")


# A4 portrait in millimetres
A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0
MM_PER_INCH = 25.4

LETTER_STYLE = (
    "padding: {padding}px; font-family: 'Times New Roman', serif; line-height: 1.6; "
    "color: #333; width: {width}px; background-color: white;"
)


class PdfExportError(Exception):
    """Raised when rasterization or PDF assembly fails."""
    pass


@dataclass
class PdfDocument:
    """A finished PDF ready to be downloaded."""
    filename: str
    data: bytes
    page_count: int

    media_type: str = "application/pdf"


# ---------------------------------------------------------------------------
# RASTERIZERS
# ---------------------------------------------------------------------------

class HtmlRasterizer(ABC):
    """Turns an HTML document into one full-height RGB image."""

    @abstractmethod
    async def rasterize(self, html_document: str, width: int, scale: int) -> Image.Image:
        pass


class PlaywrightRasterizer(HtmlRasterizer):
    """
    Full-page screenshot in headless Chromium.

    Requires `playwright install chromium` on the host.
    """

    async def rasterize(self, html_document: str, width: int, scale: int) -> Image.Image:
        from playwright.async_api import async_playwright

        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True)
            try:
                page = await browser.new_page(
                    viewport={"width": width, "height": 600},
                    device_scale_factor=scale,
                )
                await page.set_content(html_document, wait_until="load")
                png = await page.screenshot(full_page=True, type="png")
            finally:
                await browser.close()

        return Image.open(io.BytesIO(png)).convert("RGB")


# ---------------------------------------------------------------------------
# PAGINATION
# ---------------------------------------------------------------------------

def page_height_px(image_width: int) -> int:
    """Height in pixels of one A4 page for an image of this width."""
    return max(1, round(image_width * A4_HEIGHT_MM / A4_WIDTH_MM))


def paginate(image: Image.Image) -> List[Image.Image]:
    """
    Slice a tall image into A4-proportioned pages.

    The last page is padded with white so every page has the same size.
    """
    width, height = image.size
    step = page_height_px(width)
    page_count = max(1, math.ceil(height / step))

    pages = []
    for index in range(page_count):
        top = index * step
        slice_box: Tuple[int, int, int, int] = (0, top, width, min(top + step, height))
        page = Image.new("RGB", (width, step), "white")
        page.paste(image.crop(slice_box), (0, 0))
        pages.append(page)
    return pages


def slugify(title: str) -> str:
    """
    'Cover  Letter' -> 'cover-letter'

    Only [a-z0-9-] survives, so the result is safe in a Content-Disposition
    header. A title with nothing usable becomes 'letter'.
    """
    return re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-") or "letter"


# ---------------------------------------------------------------------------
# EXPORTER
# ---------------------------------------------------------------------------

class PdfExporter:
    """Builds dated PDF downloads from letter HTML."""

    def __init__(
        self,
        rasterizer: Optional[HtmlRasterizer] = None,
        width: int = None,
        scale: int = None,
    ):
        self._rasterizer = rasterizer or PlaywrightRasterizer()
        self._width = width or settings.PDF_RENDER_WIDTH
        self._scale = scale or settings.PDF_RENDER_SCALE

    async def export(
        self,
        content: str,
        today: Optional[date] = None,
        title: Optional[str] = None,
    ) -> PdfDocument:
        """
        Export a single letter as letter-YYYY-MM-DD.pdf.

        A title only changes the file name (<title-slug>-YYYY-MM-DD.pdf).
        """
        today = today or date.today()
        stem = slugify(title) if title else "letter"
        document = self._wrap(content, padding=20)
        return await self._render(document, f"{stem}-{today.isoformat()}.pdf")

    async def export_sections(
        self,
        title: str,
        sections: Sequence[Tuple[str, str]],
        today: Optional[date] = None,
    ) -> PdfDocument:
        """
        Export (section title, section HTML) pairs under one heading.

        The file is named after the letter title, e.g. cover-letter-2025-01-31.pdf.
        """
        today = today or date.today()
        body = [
            '<h1 style="text-align: center; margin-bottom: 30px; color: #333;">'
            f"{html.escape(title)}</h1>"
        ]
        for section_title, section_html in sections:
            body.append(
                '<div style="margin-bottom: 25px;">'
                '<h3 style="margin-bottom: 10px; color: #333; border-bottom: 1px solid #ccc; '
                f'padding-bottom: 5px;">{html.escape(section_title)}</h3>'
                f"{section_html}</div>"
            )
        document = self._wrap("".join(body), padding=40)
        return await self._render(document, f"{slugify(title)}-{today.isoformat()}.pdf")

    # -----------------------------------------------------------------------
    # PRIVATE METHODS
    # -----------------------------------------------------------------------

    def _wrap(self, fragment: str, padding: int) -> str:
        style = LETTER_STYLE.format(padding=padding, width=self._width)
        return (
            "<!DOCTYPE html><html><head><meta charset=\"utf-8\"></head>"
            "<body style=\"margin: 0; background: white;\">"
            f"<div style=\"{style}\">{fragment}</div>"
            "</body></html>"
        )

    async def _render(self, document: str, filename: str) -> PdfDocument:
        try:
            image = await self._rasterizer.rasterize(document, self._width, self._scale)
            pages = paginate(image)

            dpi = image.width / (A4_WIDTH_MM / MM_PER_INCH)
            buffer = io.BytesIO()
            pages[0].save(
                buffer,
                format="PDF",
                save_all=True,
                append_images=pages[1:],
                resolution=dpi,
            )
        except Exception as e:
            logger.error(f"PDF export failed for {filename}: {e}", exc_info=True)
            raise PdfExportError("Failed to export PDF") from e

        logger.info(f"Exported {filename} ({len(pages)} page(s))")
        return PdfDocument(filename=filename, data=buffer.getvalue(), page_count=len(pages))
