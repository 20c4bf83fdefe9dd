"""
Export Module - HTML to PDF export.
"""

from lettercraft.export.pdf import (
    HtmlRasterizer,
    PdfDocument,
    PdfExporter,
    PdfExportError,
    PlaywrightRasterizer,
)

__all__ = [
    "HtmlRasterizer",
    "PdfDocument",
    "PdfExporter",
    "PdfExportError",
    "PlaywrightRasterizer",
]
