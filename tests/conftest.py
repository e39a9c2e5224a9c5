"""
Shared fixtures for the invoice PDF tests.

RecordingSurface is the real ReportLab surface with a log of what was
drawn, so assertions run against real font metrics and real output.
"""

from dataclasses import dataclass, replace
from typing import List, Tuple

import pytest

from reporting.palette import RGB
from reporting.pdf_generator import PremiumPDFGenerator
from reporting.schemas import InvoiceDocument, InvoiceType, LineItem
from reporting.surface import CanvasSurface


@dataclass(frozen=True)
class DrawnText:
    text: str
    x: float
    y: float
    align: str
    font_name: str
    font_size: float
    color: RGB


class RecordingSurface(CanvasSurface):
    """CanvasSurface that remembers text, watermarks, links and metadata."""

    def __init__(self, invariant: bool = True):
        super().__init__(invariant=invariant)
        self.texts: List[DrawnText] = []
        self.rotated: List[DrawnText] = []
        self.links: List[Tuple[str, float, float, float, float]] = []
        self.page_fills: List[RGB] = []
        self.metadata: dict = {}

    def _draw_line_of_text(self, line, x, y, align):
        self.texts.append(DrawnText(
            line, x, y, align, self.font_name, self.font_size, self.text_color,
        ))
        super()._draw_line_of_text(line, x, y, align)

    def rotated_text(self, value, cx, cy, angle):
        self.rotated.append(DrawnText(
            value, cx, cy, "center", self.font_name, self.font_size, self.text_color,
        ))
        super().rotated_text(value, cx, cy, angle)

    def link(self, url, x, y, width, height):
        self.links.append((url, x, y, width, height))
        super().link(url, x, y, width, height)

    def fill_page(self, color):
        self.page_fills.append(color)
        super().fill_page(color)

    def set_metadata(self, **kwargs):
        self.metadata = dict(kwargs)
        super().set_metadata(**kwargs)

    # -------------------------------------------------------------------------

    @property
    def strings(self) -> List[str]:
        return [t.text for t in self.texts]

    def find(self, text: str) -> List[DrawnText]:
        return [t for t in self.texts if t.text == text]

    def has_text(self, fragment: str) -> bool:
        return any(fragment in t.text for t in self.texts)

    def starting_with(self, prefix: str) -> List[DrawnText]:
        return [t for t in self.texts if t.text.startswith(prefix)]


# =============================================================================
# Fixtures
# =============================================================================

LAYOUT_THEMES = [
    "ultra-luxury",
    "microsoft",
    "amazon",
    "financial",
    "creative-agency",
    "professional-services",
]


@pytest.fixture
def surface():
    """A fresh recording surface."""
    return RecordingSurface()


@pytest.fixture
def basic_invoice():
    """A plain sales invoice: one item, no discount, no tax."""
    return InvoiceDocument(
        invoice_number="INV-1001",
        invoice_type=InvoiceType.SALES,
        theme="microsoft",
        date="2025-01-15",
        due_date="2025-02-14",
        company_name="Acme Consulting",
        company_address="1 Main Street, Springfield",
        company_email="accounts@acme.example",
        client_name="Jordan Lee",
        client_email="jordan@client.example",
        client_company="Client Co",
        client_currency="$",
        items=[LineItem("Advisory services", 1, 500.0, 500.0)],
        subtotal=500.0,
        amount=500.0,
    )


@pytest.fixture
def render():
    """
    Render a document through the real generator.

    Returns (recording surface, pdf bytes).
    """
    def _render(document: InvoiceDocument, **overrides):
        if overrides:
            document = replace(document, **overrides)
        surfaces = []

        def factory():
            recording = RecordingSurface()
            surfaces.append(recording)
            return recording

        pdf_bytes = PremiumPDFGenerator(surface_factory=factory).generate(document)
        return surfaces[0], pdf_bytes

    return _render
