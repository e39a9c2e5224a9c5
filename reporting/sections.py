"""
Sections shared by every invoice layout.

Each function takes the cursor (mm from the page top) where it should start
drawing and returns the cursor where the next section may begin.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from utils.formatting import format_number

from .palette import ColorScheme, type_color, type_label, watermark_for
from .schemas import InvoiceDocument, InvoiceType, LineItem
from .surface import CanvasSurface


# =============================================================================
# Specialized Details Section
# =============================================================================

SECTION_MARGIN = 20
SECTION_WIDTH = CanvasSurface.PAGE_WIDTH - 2 * SECTION_MARGIN
SECTION_ROW_STEP = 6
SECTION_VALUE_OFFSET = 25


@dataclass(frozen=True)
class SpecializedField:
    label: str
    value: str


def _amount(doc: InvoiceDocument, value: float) -> str:
    return f"{doc.currency}{format_number(value)}" if value else ""


def _period(doc: InvoiceDocument) -> str:
    if not doc.timesheet_period_start:
        return ""
    return f"{doc.timesheet_period_start} to {doc.timesheet_period_end}"


def specialized_fields(doc: InvoiceDocument) -> List[SpecializedField]:
    """
    Populated extension fields for the document's invoice type, in print order.

    Empty strings and zero amounts count as not populated.
    """
    kind = doc.invoice_type

    if kind is InvoiceType.PROFORMA:
        pairs = [
            ("Validity Period", doc.validity_period),
            ("Est. Delivery", doc.estimated_delivery),
        ]
    elif kind in (InvoiceType.INTERIM, InvoiceType.FINAL):
        pairs = [
            ("Project", doc.project_name),
            ("Milestone", doc.milestone_description),
            ("Progress", f"{format_number(doc.percent_complete)}%" if doc.percent_complete else ""),
        ]
    elif kind is InvoiceType.RECURRING:
        pairs = [
            ("Billing Cycle", doc.billing_cycle),
            ("Next Billing", doc.next_billing_date),
        ]
    elif kind is InvoiceType.CREDIT_NOTE:
        pairs = [
            ("Original Inv #", doc.original_invoice_number),
            ("Reason", doc.credit_reason),
        ]
    elif kind is InvoiceType.PAST_DUE:
        pairs = [
            ("Original Due Date", doc.original_due_date),
            ("Late Fee", _amount(doc, doc.late_fee_amount)),
        ]
    elif kind is InvoiceType.COMMERCIAL:
        pairs = [
            ("HS Code", doc.hs_code),
            ("Origin", doc.country_of_origin),
            ("Terms", doc.shipping_terms),
            ("Exp License", doc.export_license_number),
        ]
    elif kind is InvoiceType.TAX:
        pairs = [
            ("Seller Tax ID", doc.seller_tax_id),
            ("Buyer Tax ID", doc.buyer_tax_id),
        ]
    elif kind is InvoiceType.TIMESHEET:
        pairs = [
            ("Consultant", doc.consultant_name),
            ("Period", _period(doc)),
        ]
    elif kind is InvoiceType.RETAINER:
        pairs = [
            ("Retainer Amt", _amount(doc, doc.retainer_amount)),
            ("Terms", doc.retainer_terms),
        ]
    elif kind is InvoiceType.EXPENSE:
        pairs = [
            ("Employee", doc.employee_name),
            ("Employee ID", doc.employee_id),
            ("Reimb. Method", doc.reimbursement_method),
        ]
    else:
        pairs = []

    return [SpecializedField(label, value) for label, value in pairs if value]


def render_specialized_section(
    surface: CanvasSurface,
    doc: InvoiceDocument,
    palette: ColorScheme,
    start_y: float,
) -> float:
    """
    Draw the "<TYPE> DETAILS" block in two columns between rules.

    Sales invoices, and documents with none of their type's fields filled,
    draw nothing and get ``start_y`` back unchanged.
    """
    fields = specialized_fields(doc)
    if doc.invoice_type is InvoiceType.SALES or not fields:
        return start_y

    left = SECTION_MARGIN
    right = SECTION_MARGIN + SECTION_WIDTH
    columns = (left, left + SECTION_WIDTH / 2)

    y = start_y + 5
    surface.set_draw_color(palette.light)
    surface.set_line_width(0.1)
    surface.line(left, y, right, y)
    y += 8

    surface.set_font("Helvetica-Bold", 9)
    surface.set_text_color(type_color(doc.invoice_type))
    surface.text(f"{type_label(doc.invoice_type)} DETAILS", left, y)
    y += 8

    surface.set_font_size(8)
    surface.set_text_color(palette.medium)

    row_y = y
    for index, item in enumerate(fields):
        x = columns[index % 2]
        label = f"{item.label}:"

        surface.set_font("Helvetica-Bold")
        surface.text(label, x, row_y)
        value_x = x + max(SECTION_VALUE_OFFSET, surface.text_width(label) + 2)

        surface.set_font("Helvetica")
        surface.text(item.value, value_x, row_y)

        if index % 2 == 1:
            row_y += SECTION_ROW_STEP

    if len(fields) % 2 == 1:
        row_y += SECTION_ROW_STEP

    y = row_y + 5
    surface.line(left, y, right, y)
    return y + 10


# =============================================================================
# Watermark
# =============================================================================

WATERMARK_FONT_SIZE = 60
WATERMARK_OPACITY = 0.1
WATERMARK_ANGLE = 45


def render_watermark(
    surface: CanvasSurface,
    invoice_type: InvoiceType,
    font_name: str = "Helvetica-Bold",
) -> bool:
    """
    Draw the diagonal cautionary label for proforma, past-due and expense
    documents. Returns whether anything was drawn.
    """
    mark = watermark_for(invoice_type)
    if mark is None:
        return False

    saved = (surface.font_name, surface.font_size, surface.text_color)
    surface.set_font(font_name, WATERMARK_FONT_SIZE)
    surface.set_text_color(mark.color)
    with surface.opacity(WATERMARK_OPACITY):
        surface.rotated_text(
            mark.text,
            surface.PAGE_WIDTH / 2,
            surface.PAGE_HEIGHT / 2,
            WATERMARK_ANGLE,
        )
    surface.set_font(saved[0], saved[1])
    surface.set_text_color(saved[2])
    return True


# =============================================================================
# Item Rows
# =============================================================================

@dataclass(frozen=True)
class RowStyle:
    """
    Row geometry for an items table, in mm.

    A row is ``max(min_height, lines * line_height + padding)`` tall. The
    first description baseline sits ``text_offset`` below the row top and
    further lines follow ``line_height`` apart.
    """
    min_height: float
    line_height: float
    padding: float
    text_offset: float
    font_name: str = "Helvetica"
    font_size: float = 9


@dataclass(frozen=True)
class ItemRow:
    item: LineItem
    top: float
    height: float
    lines: Sequence[str]

    @property
    def bottom(self) -> float:
        return self.top + self.height


def item_row_height(line_count: int, style: RowStyle) -> float:
    return max(style.min_height, line_count * style.line_height + style.padding)


def layout_item_rows(
    surface: CanvasSurface,
    items: Sequence[LineItem],
    top: float,
    description_width: float,
    style: RowStyle,
    description_font: Optional[str] = None,
) -> List[ItemRow]:
    """
    Wrap each description and stack the rows from ``top`` downward.

    Wrapping uses the surface's real font metrics, so the row height always
    matches what is drawn.
    """
    surface.set_font(description_font or style.font_name, style.font_size)
    rows = []
    y = top
    for item in items:
        lines = surface.split_text(item.description, description_width)
        height = item_row_height(len(lines), style)
        rows.append(ItemRow(item=item, top=y, height=height, lines=lines))
        y += height
    return rows


# =============================================================================
# Notes & Payment Link
# =============================================================================

NOTES_MAX_LINES = 3
PAYMENT_BOX_HEIGHT = 25


def render_notes_and_payment_link(
    surface: CanvasSurface,
    doc: InvoiceDocument,
    palette: ColorScheme,
    start_y: float,
    margin: float = 15,
) -> float:
    """
    Draw the notes block (first three wrapped lines) and the "Quick Payment"
    box with its hyperlink. Either part is skipped when its field is empty.
    """
    y = start_y
    width = surface.PAGE_WIDTH - 2 * margin

    if doc.notes:
        surface.set_font("Helvetica-Bold", 10)
        surface.set_text_color(palette.primary)
        surface.text("Notes", margin, y)

        surface.set_font("Helvetica", 8)
        surface.set_text_color(palette.dark)
        lines = surface.split_text(doc.notes, width - 90)[:NOTES_MAX_LINES]
        surface.text(lines, margin, y + 7)
        y += 25

    if doc.payment_link:
        surface.set_fill_color(palette.accent)
        with surface.opacity(0.1):
            surface.rect(margin, y, width, PAYMENT_BOX_HEIGHT, fill=True, stroke=False)
        surface.set_draw_color(palette.accent)
        surface.set_line_width(0.3)
        surface.rect(margin, y, width, PAYMENT_BOX_HEIGHT)

        surface.set_font("Helvetica-Bold", 11)
        surface.set_text_color(palette.primary)
        surface.text("Quick Payment", margin + 5, y + 7)

        link_text = "Pay securely online"
        surface.set_font("Helvetica", 9)
        surface.set_text_color(palette.dark)
        surface.text(link_text, margin + 5, y + 15)
        surface.link(
            doc.payment_link,
            margin + 5,
            y + 15 - surface.line_height,
            surface.text_width(link_text),
            surface.line_height + 1,
        )
        y += PAYMENT_BOX_HEIGHT + 5

    return y
