"""
Reporting module for the SmartInvoice premium PDF engine.

Renders invoice documents to single-page PDFs in one of six layouts.

Usage:
    from reporting import PremiumPDFGenerator, InvoiceDocument

    document = InvoiceDocument.from_dict(invoice_json)
    pdf_bytes = PremiumPDFGenerator().generate(document)

Sample data:
    from reporting import generate_invoice_pdf
    from reporting.schemas import create_sample_invoice, InvoiceType

    pdf_bytes = generate_invoice_pdf(
        create_sample_invoice("creative-agency", InvoiceType.PROFORMA)
    )
"""

from .exceptions import PDFGenerationError
from .layouts import LayoutRenderer, get_layout_renderer
from .palette import ColorScheme, hex_to_rgb, resolve_color_scheme
from .pdf_generator import (
    InvoicePDFResult,
    PremiumPDFGenerator,
    generate_invoice_pdf,
    pdf_filename,
)
from .schemas import (
    CustomColors,
    InvoiceDocument,
    InvoiceType,
    LayoutStyle,
    LineItem,
    create_sample_invoice,
    parse_line_items,
)
from .surface import CanvasSurface
from .totals import InvoiceTotals, apply_totals, compute_totals

__all__ = [
    # Generator
    "PremiumPDFGenerator",
    "InvoicePDFResult",
    "PDFGenerationError",
    "generate_invoice_pdf",
    "pdf_filename",
    # Schemas
    "InvoiceDocument",
    "InvoiceType",
    "LayoutStyle",
    "LineItem",
    "CustomColors",
    "create_sample_invoice",
    "parse_line_items",
    # Totals
    "InvoiceTotals",
    "compute_totals",
    "apply_totals",
    # Rendering
    "CanvasSurface",
    "ColorScheme",
    "LayoutRenderer",
    "get_layout_renderer",
    "hex_to_rgb",
    "resolve_color_scheme",
]
