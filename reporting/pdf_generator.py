"""
Premium Invoice PDF Generator

Renders an InvoiceDocument to a single-page A4 PDF using one of six
layouts selected by the document's theme:

1. ultra-luxury           - minimal, oversized type
2. microsoft              - corporate, accent bar (also the fallback)
3. amazon                 - dense, boxed sections
4. financial              - serif, double page border
5. creative-agency        - diagonal colour header
6. professional-services  - navy bar, meta box

Library Choice: ReportLab
- Canvas-level drawing gives exact control over coordinates
- Invariant mode makes output byte-identical for identical input
- Standard Type 1 fonts, no font files or browser engine required
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from .exceptions import PDFGenerationError
from .layouts import get_layout_renderer
from .palette import resolve_color_scheme
from .schemas import InvoiceDocument
from .surface import CanvasSurface

logger = logging.getLogger(__name__)

PDF_SUBJECT = "Premium Invoice Document"
PDF_KEYWORDS = "invoice, billing, payment, premium"
PDF_CREATOR = "Premium Invoice Generator Pro"
DEFAULT_AUTHOR = "Premium Invoice System"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


# =============================================================================
# Result Types
# =============================================================================

@dataclass
class InvoicePDFResult:
    """Returned by ``generate_to_file``."""
    path: Path
    size_bytes: int


def pdf_filename(document: InvoiceDocument) -> str:
    """
    Download filename: ``<type>-<invoice number>.pdf``.

    Characters outside ``[A-Za-z0-9._-]`` in the number become ``-``.
    """
    number = _UNSAFE_FILENAME_CHARS.sub("-", document.invoice_number).strip("-") or "draft"
    return f"{document.invoice_type.value}-{number}.pdf"


# =============================================================================
# Generator
# =============================================================================

class PremiumPDFGenerator:
    """
    Renders invoice documents to PDF bytes.

    Usage:
        generator = PremiumPDFGenerator()
        pdf_bytes = generator.generate(document)

    Each call builds a fresh surface, so one generator may be shared across
    threads and requests. Output is deterministic: the same document always
    produces the same bytes.
    """

    OUTPUT_DIR = Path("invoices")

    def __init__(
        self,
        surface_factory: Callable[[], CanvasSurface] = CanvasSurface,
        output_dir: Optional[Union[str, Path]] = None,
    ):
        self.surface_factory = surface_factory
        if output_dir is not None:
            self.OUTPUT_DIR = Path(output_dir)

    def generate(self, document: InvoiceDocument) -> bytes:
        """
        Render ``document`` and return the PDF bytes.

        Raises:
            PDFGenerationError: if anything fails while drawing. No partial
                output is returned.
        """
        try:
            return self._render(document)
        except Exception as e:
            logger.exception(
                "Premium PDF generation failed for invoice %s (theme=%s)",
                document.invoice_number,
                document.theme,
            )
            raise PDFGenerationError() from e

    def generate_to_buffer(self, document: InvoiceDocument) -> bytes:
        """Alias of ``generate`` for streaming callers."""
        return self.generate(document)

    def generate_to_file(
        self,
        document: InvoiceDocument,
        output_dir: Optional[Union[str, Path]] = None,
    ) -> InvoicePDFResult:
        """
        Render ``document`` to ``<output_dir>/<type>-<number>.pdf``.

        ``output_dir`` defaults to ``OUTPUT_DIR``.
        """
        pdf_bytes = self.generate(document)

        directory = Path(output_dir) if output_dir is not None else self.OUTPUT_DIR
        directory.mkdir(parents=True, exist_ok=True)
        output_path = directory / pdf_filename(document)
        output_path.write_bytes(pdf_bytes)

        logger.info("Wrote %s (%d bytes)", output_path, len(pdf_bytes))
        return InvoicePDFResult(path=output_path, size_bytes=len(pdf_bytes))

    def _render(self, document: InvoiceDocument) -> bytes:
        palette = resolve_color_scheme(document.theme, document.custom_colors)
        renderer = get_layout_renderer(document.theme)
        logger.debug(
            "Rendering invoice %s with %s layout",
            document.invoice_number,
            renderer.style.value,
        )

        surface = self.surface_factory()
        surface.set_metadata(
            title=f"Invoice #{document.invoice_number}",
            author=document.company_name or DEFAULT_AUTHOR,
            subject=PDF_SUBJECT,
            keywords=PDF_KEYWORDS,
            creator=PDF_CREATOR,
        )
        surface.fill_page(palette.bg)

        renderer.render(surface, document, palette)
        return surface.to_bytes()


# =============================================================================
# Convenience Function
# =============================================================================

def generate_invoice_pdf(document: Union[InvoiceDocument, dict]) -> bytes:
    """
    Render an invoice to PDF bytes.

    This is the primary entry point for PDF generation. Accepts either an
    InvoiceDocument or the camelCase dict the web app stores.

    Example:
        from reporting import generate_invoice_pdf
        from reporting.schemas import create_sample_invoice

        pdf_bytes = generate_invoice_pdf(create_sample_invoice("financial"))
    """
    if isinstance(document, dict):
        document = InvoiceDocument.from_dict(document)
    return PremiumPDFGenerator().generate(document)
