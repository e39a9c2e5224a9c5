"""
Invoice page layouts.

Six visually distinct layouts share one pipeline (``LayoutRenderer.render``):

    header -> type title -> watermark -> parties -> details section
    -> items table -> totals -> notes / payment link -> footer

Each step receives the vertical cursor (mm from the page top) and returns
the next one. Subclasses supply geometry through class attributes and
override only the steps whose drawing genuinely differs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from utils.formatting import format_date, format_money, format_number

from .palette import RGB, WHITE, ColorScheme, type_color, type_label
from .schemas import InvoiceDocument, LayoutStyle, LineItem, parse_line_items
from .sections import (
    ItemRow,
    RowStyle,
    layout_item_rows,
    render_notes_and_payment_link,
    render_specialized_section,
    render_watermark,
)
from .surface import CanvasSurface
from .totals import totals_lines

LONG_DATE = "%B %d, %Y"
SHORT_DATE = "%b %d, %Y"

DEFAULT_COMPANY = "SmartInvoice"
POWERED_BY = "Powered by SmartInvoice"


@dataclass
class RenderContext:
    """Per-render state handed to every layout step."""
    surface: CanvasSurface
    doc: InvoiceDocument
    palette: ColorScheme
    items: List[LineItem]

    @property
    def currency(self) -> str:
        return self.doc.currency

    @property
    def company_name(self) -> str:
        return self.doc.company_name or DEFAULT_COMPANY

    @property
    def label(self) -> str:
        return type_label(self.doc.invoice_type)

    @property
    def label_color(self) -> RGB:
        return type_color(self.doc.invoice_type)

    def money(self, value: float) -> str:
        return format_money(value, self.currency)


@dataclass(frozen=True)
class TableColumns:
    """Items table columns. qty/rate/amount are right-aligned x positions."""
    description_x: float
    description_width: float
    qty_x: float
    rate_x: float
    amount_x: float


def _present(values: Iterable[str]) -> List[str]:
    return [value for value in values if value]


def _fit(surface: CanvasSurface, text: str, max_width: float, size: float) -> None:
    surface.set_font_size(surface.fit_font_size(text, max_width, size))


# =============================================================================
# Base Pipeline
# =============================================================================

class LayoutRenderer:
    """
    Shared rendering pipeline.

    Usage:
        renderer = get_layout_renderer(document.theme)
        renderer.render(surface, document, palette)
    """

    style: LayoutStyle
    margin: float = 15
    body_font = "Helvetica"
    bold_font = "Helvetica-Bold"
    text_color: RGB = (50, 49, 48)

    row_style = RowStyle(min_height=10, line_height=5, padding=4, text_offset=5)
    columns = TableColumns(20, 95, 125, 155, 190)
    description_font: Optional[str] = None
    currency_in_rows = True

    # Details section placement relative to the parties anchor:
    # drawn -> starts at anchor + lead and continues trail below its end;
    # not drawn -> the table follows at anchor + skip.
    specialized_lead: float = 0
    specialized_skip: float = 0
    specialized_trail: float = 0

    default_terms = "Net 30 days"

    @property
    def right(self) -> float:
        return CanvasSurface.PAGE_WIDTH - self.margin

    def render(self, surface: CanvasSurface, doc: InvoiceDocument, palette: ColorScheme) -> None:
        ctx = RenderContext(
            surface=surface,
            doc=doc,
            palette=palette,
            items=parse_line_items(doc.items),
        )

        y = self.draw_header(ctx)
        y = self.draw_title(ctx, y)
        render_watermark(surface, doc.invoice_type, self.bold_font)
        y = self.draw_parties(ctx, y)
        y = self.draw_specialized(ctx, y)

        rows_top = self.draw_table_header(ctx, y)
        rows = layout_item_rows(
            surface,
            ctx.items,
            rows_top,
            self.columns.description_width,
            self.row_style,
            self.description_font,
        )
        for row in rows:
            self.draw_row(ctx, row)
        y = rows[-1].bottom if rows else rows_top

        y = self.draw_totals(ctx, y)
        y = render_notes_and_payment_link(surface, doc, palette, y, self.margin)
        self.draw_footer(ctx, y)

    # =========================================================================
    # Steps
    # =========================================================================

    def draw_header(self, ctx: RenderContext) -> float:
        raise NotImplementedError

    def draw_title(self, ctx: RenderContext, y: float) -> float:
        raise NotImplementedError

    def draw_parties(self, ctx: RenderContext, y: float) -> float:
        raise NotImplementedError

    def draw_specialized(self, ctx: RenderContext, anchor: float) -> float:
        start = anchor + self.specialized_lead
        end = render_specialized_section(ctx.surface, ctx.doc, ctx.palette, start)
        if end == start:
            return anchor + self.specialized_skip
        return end + self.specialized_trail

    def draw_table_header(self, ctx: RenderContext, y: float) -> float:
        raise NotImplementedError

    def draw_row(self, ctx: RenderContext, row: ItemRow) -> None:
        surface, cols, style = ctx.surface, self.columns, self.row_style
        baseline = row.top + style.text_offset

        self.decorate_row(ctx, row)

        surface.set_font(style.font_name, style.font_size)
        surface.set_text_color(self.text_color)
        surface.text(row.lines, cols.description_x, baseline, leading=style.line_height)
        surface.text(format_number(row.item.quantity), cols.qty_x, baseline, align="right")
        surface.text(self.row_money(ctx, row.item.rate), cols.rate_x, baseline, align="right")
        surface.text(self.row_money(ctx, row.item.amount), cols.amount_x, baseline, align="right")

    def decorate_row(self, ctx: RenderContext, row: ItemRow) -> None:
        """Row borders or separators. None by default."""

    def row_money(self, ctx: RenderContext, value: float) -> str:
        if self.currency_in_rows:
            return ctx.money(value)
        return f"{value:.2f}"

    def draw_totals(self, ctx: RenderContext, y: float) -> float:
        raise NotImplementedError

    def draw_footer(self, ctx: RenderContext, y: float) -> None:
        raise NotImplementedError

    # =========================================================================
    # Helpers
    # =========================================================================

    def terms_text(self, ctx: RenderContext) -> str:
        return ctx.doc.terms or self.default_terms

    def draw_total_lines(
        self,
        ctx: RenderContext,
        y: float,
        label_x: float,
        value_x: float,
        step: float,
        label_align: str = "right",
        label_color: Optional[RGB] = None,
        value_color: Optional[RGB] = None,
        colon: bool = False,
        show_rates: bool = True,
    ) -> float:
        """Subtotal, discount and tax lines. Returns the cursor one step past the last."""
        surface = ctx.surface
        for label, value in totals_lines(ctx.doc, colon=colon, show_rates=show_rates):
            surface.set_text_color(label_color or self.text_color)
            surface.text(label, label_x, y, align=label_align)
            surface.set_text_color(value_color or self.text_color)
            surface.text(value, value_x, y, align="right")
            y += step
        return y

    def draw_powered_by(self, ctx: RenderContext, x: float, y: float,
                        align: str = "right", color: RGB = (150, 150, 150)) -> None:
        if ctx.doc.white_label_mode:
            return
        ctx.surface.set_font(self.body_font, 8)
        ctx.surface.set_text_color(color)
        ctx.surface.text(POWERED_BY, x, y, align=align)

    def draw_stack(self, ctx: RenderContext, values: Iterable[str], x: float,
                   y: float, step: float) -> float:
        """Draw the non-empty values one per line. Returns the last baseline."""
        last = y - step
        for value in _present(values):
            last += step
            ctx.surface.text(value, x, last)
        return max(last, y)


# =============================================================================
# Ultra-Luxury (minimal, oversized type)
# =============================================================================

class UltraLuxuryLayout(LayoutRenderer):
    style = LayoutStyle.ULTRA_LUXURY
    margin = 20
    text_color = (29, 29, 31)
    muted: RGB = (134, 134, 139)
    rule: RGB = (210, 210, 215)

    row_style = RowStyle(min_height=10, line_height=6, padding=0, text_offset=0, font_size=11)
    columns = TableColumns(20, 90, 120, 150, 190)

    specialized_lead = 40
    specialized_skip = 45

    default_terms = "Payment is due within 30 days."

    def _rule(self, surface: CanvasSurface, y: float) -> None:
        surface.set_draw_color(self.rule)
        surface.set_line_width(0.5)
        surface.line(self.margin, y, self.right, y)

    def draw_header(self, ctx):
        surface = ctx.surface
        top = 40

        surface.set_font("Helvetica")
        _fit(surface, ctx.company_name, self.right - self.margin, 48)
        surface.set_text_color(self.text_color)
        surface.text(ctx.company_name, self.margin, top)

        surface.set_font("Helvetica", 10)
        surface.text(_present([ctx.doc.company_address, ctx.doc.company_email]), self.margin, top + 15)
        return top

    def draw_title(self, ctx, y):
        surface = ctx.surface
        title_y = y + 40

        surface.set_font("Helvetica", 24)
        surface.set_text_color(ctx.label_color)
        surface.text(ctx.label, self.margin, title_y)

        surface.set_font_size(11)
        surface.set_text_color(self.muted)
        surface.text(ctx.doc.invoice_number, self.margin, title_y + 8)

        rule_y = title_y + 20
        self._rule(surface, rule_y)
        return rule_y

    def draw_parties(self, ctx, y):
        surface, doc = ctx.surface, ctx.doc
        section_y = y + 15

        surface.set_font("Helvetica-Bold", 10)
        surface.set_text_color(self.muted)
        surface.text("BILL TO", self.margin, section_y)

        surface.set_font("Helvetica", 11)
        surface.set_text_color(self.text_color)
        bottom = self.draw_stack(
            ctx, [doc.client_name, doc.client_company, doc.client_email],
            self.margin, section_y + 8, 6,
        )
        if doc.client_address:
            lines = surface.split_text(doc.client_address, 80)
            surface.text(lines, self.margin, bottom + 6)
            bottom += 6 + (len(lines) - 1) * surface.line_height

        col2 = self.margin + 100
        for offset, heading, value in (
            (0, "INVOICE DATE", doc.date),
            (20, "DUE DATE", doc.due_date),
        ):
            surface.set_font("Helvetica-Bold", 10)
            surface.set_text_color(self.muted)
            surface.text(heading, col2, section_y + offset)
            surface.set_font("Helvetica", 11)
            surface.set_text_color(self.text_color)
            surface.text(format_date(value, LONG_DATE), col2, section_y + offset + 8)

        return max(section_y, bottom - 35)

    def draw_table_header(self, ctx, y):
        surface, cols = ctx.surface, self.columns
        self._rule(surface, y)

        header_y = y + 10
        surface.set_font("Helvetica-Bold", 10)
        surface.set_text_color(self.muted)
        surface.text("DESCRIPTION", cols.description_x, header_y)
        surface.text("QTY", cols.qty_x, header_y, align="right")
        surface.text("RATE", cols.rate_x, header_y, align="right")
        surface.text("AMOUNT", cols.amount_x, header_y, align="right")

        self._rule(surface, header_y + 5)
        return header_y + 15

    def draw_totals(self, ctx, y):
        surface, cols = ctx.surface, self.columns
        rule_y = y + 5
        self._rule(surface, rule_y)

        surface.set_font("Helvetica", 11)
        total_y = self.draw_total_lines(
            ctx, rule_y + 15, cols.rate_x, cols.amount_x, 8, label_color=self.muted,
        )

        total_y += 5
        surface.set_font("Helvetica-Bold", 24)
        surface.set_text_color(self.text_color)
        surface.text("Total", cols.rate_x - 10, total_y, align="right")
        surface.text(ctx.money(ctx.doc.amount), cols.amount_x, total_y, align="right")
        return total_y + 10

    def draw_footer(self, ctx, y):
        surface = ctx.surface
        footer_y = y + 20
        self._rule(surface, footer_y)

        surface.set_font("Helvetica", 10)
        surface.set_text_color(self.muted)
        surface.text(ctx.doc.company_email, self.margin, footer_y + 10)
        surface.set_font_size(9)
        surface.text(self.terms_text(ctx), self.margin, footer_y + 16)

        self.draw_powered_by(ctx, self.right, footer_y + 10, color=(180, 180, 180))


# =============================================================================
# Microsoft (corporate, accent bar)
# =============================================================================

class MicrosoftLayout(LayoutRenderer):
    style = LayoutStyle.MICROSOFT
    margin = 15
    text_color = (50, 49, 48)
    muted: RGB = (96, 94, 92)
    brand: RGB = (0, 120, 212)

    row_style = RowStyle(min_height=10, line_height=5, padding=4, text_offset=5)
    columns = TableColumns(20, 95, 125, 155, 190)

    specialized_lead = 45
    specialized_skip = 50

    def draw_header(self, ctx):
        surface = ctx.surface
        surface.set_fill_color(self.brand)
        surface.rect(self.margin, 20, self.right - self.margin, 5, fill=True, stroke=False)

        top = 40
        surface.set_font("Helvetica-Bold")
        _fit(surface, ctx.company_name, 90, 24)
        surface.set_text_color(self.text_color)
        surface.text(ctx.company_name, self.margin, top)
        return top

    def draw_title(self, ctx, y):
        surface, doc = ctx.surface, ctx.doc

        surface.set_font("Helvetica-Bold")
        _fit(surface, ctx.label, 85, 24)
        surface.set_text_color(ctx.label_color)
        surface.text(ctx.label, self.right, y, align="right")

        surface.set_font("Helvetica-Bold", 10)
        surface.set_text_color(self.muted)
        surface.text(doc.invoice_number, self.right, y + 8, align="right")

        surface.set_font("Helvetica", 9)
        surface.set_text_color(self.text_color)
        surface.text(_present([doc.company_address, doc.company_email]), self.margin, y + 10)

        date_x = self.right - 50
        for offset, label, value in ((20, "Date:", doc.date), (26, "Due:", doc.due_date)):
            surface.text(label, date_x, y + offset)
            surface.text(format_date(value, SHORT_DATE), self.right, y + offset, align="right")
        return y + 40

    def draw_parties(self, ctx, y):
        surface, doc = ctx.surface, ctx.doc
        surface.set_fill_color((243, 242, 241))
        surface.rect(self.margin, y, 80, 40, fill=True, stroke=False)

        surface.set_font("Helvetica-Bold", 9)
        surface.set_text_color(self.muted)
        surface.text("BILL TO", self.margin + 5, y + 8)

        surface.set_font_size(10)
        surface.set_text_color(self.text_color)
        surface.text(doc.client_name, self.margin + 5, y + 16)

        surface.set_font("Helvetica", 9)
        self.draw_stack(ctx, [doc.client_company, doc.client_email], self.margin + 5, y + 22, 5)
        return y

    def draw_table_header(self, ctx, y):
        surface, cols = ctx.surface, self.columns
        table_y = y + 5

        surface.set_draw_color((200, 200, 200))
        surface.set_line_width(0.1)
        surface.rect(self.margin, table_y, self.right - self.margin, 10)

        surface.set_font("Helvetica-Bold", 9)
        surface.set_text_color(self.muted)
        surface.text("DESCRIPTION", cols.description_x, table_y + 7)
        surface.text("QTY", cols.qty_x, table_y + 7, align="right")
        surface.text("UNIT PRICE", cols.rate_x, table_y + 7, align="right")
        surface.text("AMOUNT", cols.amount_x, table_y + 7, align="right")
        return table_y + 10

    def decorate_row(self, ctx, row):
        surface = ctx.surface
        surface.set_draw_color((230, 230, 230))
        surface.set_line_width(0.1)
        surface.line(self.margin, row.top, self.margin, row.bottom)
        surface.line(self.right, row.top, self.right, row.bottom)
        surface.line(self.margin, row.bottom, self.right, row.bottom)

    def draw_totals(self, ctx, y):
        surface, cols = ctx.surface, self.columns
        label_x = cols.rate_x - 20

        surface.set_font("Helvetica", 10)
        total_y = self.draw_total_lines(
            ctx, y + 10, label_x, cols.amount_x, 6, colon=True, show_rates=False,
        )

        total_y += 2
        surface.set_draw_color(self.brand)
        surface.set_line_width(0.5)
        surface.line(cols.amount_x - 30, total_y, cols.amount_x, total_y)
        total_y += 6

        surface.set_font("Helvetica-Bold", 12)
        surface.set_text_color(self.text_color)
        surface.text("Total Due:", label_x, total_y, align="right")
        surface.text(ctx.money(ctx.doc.amount), cols.amount_x, total_y, align="right")
        return total_y + 10

    def draw_footer(self, ctx, y):
        surface = ctx.surface
        footer_y = surface.PAGE_HEIGHT - 20

        surface.set_draw_color((200, 200, 200))
        surface.set_line_width(0.1)
        surface.line(self.margin, footer_y, self.right, footer_y)

        surface.set_font("Helvetica", 9)
        surface.set_text_color(self.muted)
        surface.text(f"Payment Terms: {self.terms_text(ctx)}", self.margin, footer_y + 5)

        self.draw_powered_by(ctx, self.right, footer_y + 5)


# =============================================================================
# Amazon (dense, boxed)
# =============================================================================

class AmazonLayout(LayoutRenderer):
    style = LayoutStyle.AMAZON
    margin = 15
    text_color = (17, 17, 17)
    brand: RGB = (255, 153, 0)
    border: RGB = (221, 221, 221)

    row_style = RowStyle(min_height=8, line_height=4, padding=4, text_offset=4)
    columns = TableColumns(17, 100, 125, 155, 190)

    specialized_lead = 5
    specialized_skip = 10

    def draw_header(self, ctx):
        surface = ctx.surface
        top = 20

        surface.set_font("Helvetica-Bold")
        _fit(surface, ctx.company_name, 75, 22)
        surface.set_text_color(self.text_color)
        surface.text(ctx.company_name, self.margin, top + 8)

        surface.set_draw_color(self.brand)
        surface.set_line_width(0.5)
        surface.line(self.margin + 80, top + 5, self.right, top + 5)
        return top

    def draw_title(self, ctx, y):
        surface, doc = ctx.surface, ctx.doc

        surface.set_font("Helvetica-Bold", 10)
        surface.set_text_color(ctx.label_color)
        surface.text(ctx.label, self.right, y + 3, align="right")

        surface.set_font("Helvetica")
        surface.set_text_color(self.text_color)
        surface.text(doc.invoice_number, self.right, y + 10, align="right")

        surface.set_font_size(9)
        surface.text(", ".join(_present([doc.company_address, doc.company_email])), self.margin, y + 16)
        return y + 30

    def draw_parties(self, ctx, y):
        surface, doc = ctx.surface, ctx.doc
        box_height = 25
        col2 = self.margin + 90

        surface.set_draw_color(self.border)
        surface.set_line_width(0.1)
        surface.rect(self.margin, y, 85, box_height)
        surface.rect(col2, y, 85, box_height)

        surface.set_font("Helvetica-Bold", 9)
        surface.set_text_color(self.text_color)
        surface.text("Bill To:", self.margin + 2, y + 5)
        surface.text("Invoice Details:", col2 + 2, y + 5)

        surface.set_font("Helvetica")
        self.draw_stack(ctx, [doc.client_name, doc.client_email], self.margin + 2, y + 10, 5)
        surface.text(f"Date: {format_date(doc.date, SHORT_DATE)}", col2 + 2, y + 10)
        surface.text(f"Due: {format_date(doc.due_date, SHORT_DATE)}", col2 + 2, y + 15)
        return y + box_height

    def draw_table_header(self, ctx, y):
        surface, cols = ctx.surface, self.columns
        surface.set_fill_color((245, 245, 245))
        surface.set_draw_color(self.border)
        surface.set_line_width(0.1)
        surface.rect(self.margin, y, self.right - self.margin, 8, fill=True, stroke=True)

        surface.set_font("Helvetica-Bold", 9)
        surface.set_text_color(self.text_color)
        surface.text("DESCRIPTION", cols.description_x, y + 5)
        surface.text("QTY", cols.qty_x, y + 5, align="right")
        surface.text("RATE", cols.rate_x, y + 5, align="right")
        surface.text("AMOUNT", cols.amount_x, y + 5, align="right")
        return y + 8

    def decorate_row(self, ctx, row):
        ctx.surface.set_draw_color(self.border)
        ctx.surface.set_line_width(0.1)
        ctx.surface.rect(self.margin, row.top, self.right - self.margin, row.height)

    def draw_totals(self, ctx, y):
        surface = ctx.surface
        width = 60
        box_x = self.right - width
        box_y = y + 5
        value_x = self.right - 2

        surface.set_font("Helvetica", 9)
        line_y = self.draw_total_lines(
            ctx, box_y + 5, box_x + 2, value_x, 5, label_align="left", colon=True,
        )

        rule_y = line_y + 5
        surface.set_draw_color(self.border)
        surface.set_line_width(0.1)
        surface.line(box_x, rule_y, box_x + width, rule_y)

        total_y = rule_y + 5
        surface.set_font("Helvetica-Bold")
        surface.set_text_color(self.text_color)
        surface.text("Total:", box_x + 2, total_y)
        surface.text(ctx.money(ctx.doc.amount), value_x, total_y, align="right")

        box_height = total_y + 5 - box_y
        surface.rect(box_x, box_y, width, box_height)
        return box_y + box_height + 10

    def draw_footer(self, ctx, y):
        surface, doc = ctx.surface, ctx.doc
        footer_y = surface.PAGE_HEIGHT - 20

        surface.set_font("Helvetica", 9)
        surface.set_text_color(self.text_color)
        surface.text(f"Payment Instructions: {self.terms_text(ctx)}", self.margin, footer_y)
        if doc.company_email:
            surface.text(f"Questions: {doc.company_email}", self.margin, footer_y + 5)

        self.draw_powered_by(ctx, self.right, footer_y)


# =============================================================================
# Financial (formal, serif, double border)
# =============================================================================

class FinancialLayout(LayoutRenderer):
    style = LayoutStyle.FINANCIAL
    margin = 20
    body_font = "Times-Roman"
    bold_font = "Times-Bold"
    text_color = (0, 0, 0)

    row_style = RowStyle(
        min_height=8, line_height=4, padding=4, text_offset=5, font_name="Times-Roman",
    )
    columns = TableColumns(25, 95, 125, 150, 180)

    specialized_lead = 25
    specialized_skip = 30

    def draw_header(self, ctx):
        surface, doc = ctx.surface, ctx.doc
        width, height = surface.PAGE_WIDTH, surface.PAGE_HEIGHT
        center = width / 2

        surface.set_draw_color((0, 0, 0))
        surface.set_line_width(0.5)
        surface.rect(10, 10, width - 20, height - 20)
        surface.set_line_width(0.2)
        surface.rect(12, 12, width - 24, height - 24)

        top = 30
        surface.set_font("Times-Bold")
        _fit(surface, ctx.company_name, width - 40, 28)
        surface.set_text_color(self.text_color)
        surface.text(ctx.company_name, center, top, align="center")

        surface.set_font("Times-Roman", 10)
        address = " • ".join(_present([doc.company_address, doc.company_email]))
        surface.text(address, center, top + 8, align="center")

        surface.set_line_width(0.5)
        surface.line(30, top + 15, width - 30, top + 15)
        return top

    def draw_title(self, ctx, y):
        surface = ctx.surface
        center = surface.PAGE_WIDTH / 2

        surface.set_font("Times-Bold", 18)
        surface.set_text_color(ctx.label_color)
        surface.text(ctx.label, center, y + 30, align="center")

        surface.set_font("Times-Roman", 12)
        surface.set_text_color(self.text_color)
        surface.text(ctx.doc.invoice_number, center, y + 36, align="center")
        return y + 50

    def draw_parties(self, ctx, y):
        surface, doc = ctx.surface, ctx.doc
        col1 = 25
        col2 = surface.PAGE_WIDTH / 2 + 10

        surface.set_font("Times-Bold", 10)
        surface.set_text_color(self.text_color)
        surface.text("BILLED TO:", col1, y)
        surface.text("INVOICE INFORMATION:", col2, y)

        surface.set_font("Times-Roman")
        self.draw_stack(ctx, [doc.client_name, doc.client_email, doc.client_company], col1, y + 6, 5)
        surface.text(f"Date: {format_date(doc.date, SHORT_DATE)}", col2, y + 6)
        surface.text(f"Due: {format_date(doc.due_date, SHORT_DATE)}", col2, y + 11)
        return y

    def draw_table_header(self, ctx, y):
        surface, cols = ctx.surface, self.columns
        table_y = y + 5

        surface.set_fill_color((0, 0, 0))
        surface.rect(20, table_y, surface.PAGE_WIDTH - 40, 8, fill=True, stroke=False)

        surface.set_font("Times-Bold", 9)
        surface.set_text_color(WHITE)
        surface.text("DESCRIPTION", cols.description_x, table_y + 5)
        surface.text("QTY", cols.qty_x, table_y + 5, align="right")
        surface.text("RATE", cols.rate_x, table_y + 5, align="right")
        surface.text("AMOUNT", cols.amount_x, table_y + 5, align="right")
        return table_y + 8

    def decorate_row(self, ctx, row):
        surface = ctx.surface
        right = surface.PAGE_WIDTH - 20
        surface.set_draw_color((0, 0, 0))
        surface.set_line_width(0.1)
        surface.line(20, row.top, 20, row.bottom)
        surface.line(right, row.top, right, row.bottom)
        surface.line(20, row.bottom, right, row.bottom)

    def draw_totals(self, ctx, y):
        surface = ctx.surface
        width = 70
        box_x = surface.PAGE_WIDTH - 20 - width
        box_y = y + 10
        value_x = surface.PAGE_WIDTH - 25

        surface.set_font("Times-Roman", 9)
        rule_y = self.draw_total_lines(
            ctx, box_y + 6, box_x + 5, value_x, 6, label_align="left",
        )

        surface.set_draw_color((0, 0, 0))
        surface.set_line_width(0.1)
        surface.line(box_x, rule_y, box_x + width, rule_y)

        total_y = rule_y + 6
        surface.set_font("Times-Bold")
        surface.set_text_color(self.text_color)
        surface.text("TOTAL", box_x + 5, total_y)
        surface.text(ctx.money(ctx.doc.amount), value_x, total_y, align="right")

        box_height = total_y + 6 - box_y
        surface.rect(box_x, box_y, width, box_height)
        return box_y + box_height + 10

    def draw_footer(self, ctx, y):
        surface = ctx.surface
        center = surface.PAGE_WIDTH / 2
        footer_y = surface.PAGE_HEIGHT - 30

        surface.set_font("Times-Roman", 9)
        surface.set_text_color((100, 100, 100))
        surface.text(f"Payment Terms: {self.terms_text(ctx)}", center, footer_y - 6, align="center")

        self.draw_powered_by(ctx, center, footer_y, align="center")


# =============================================================================
# Creative Agency (diagonal colour header)
# =============================================================================

class CreativeAgencyLayout(LayoutRenderer):
    style = LayoutStyle.CREATIVE_AGENCY
    margin = 20
    text_color = (0, 0, 0)
    soft: RGB = (80, 80, 80)

    row_style = RowStyle(
        min_height=10, line_height=5, padding=8, text_offset=0, font_size=10,
    )
    columns = TableColumns(20, 75, 110, 150, 190)
    description_font = "Helvetica-Bold"
    currency_in_rows = False

    specialized_trail = 20

    def draw_header(self, ctx):
        surface, doc, palette = ctx.surface, ctx.doc, ctx.palette
        width = surface.PAGE_WIDTH

        surface.set_fill_color(palette.primary)
        surface.triangle([(width, 0), (width, 120), (width * 0.4, 0)])
        surface.set_fill_color(palette.accent)
        with surface.opacity(0.8):
            surface.triangle([(width, 0), (width, 60), (width * 0.7, 0)])

        top = 30
        surface.set_font("Helvetica-Bold")
        _fit(surface, ctx.company_name, 100, 24)
        surface.set_text_color(self.text_color)
        surface.text(ctx.company_name, self.margin, top)

        surface.set_font("Helvetica", 8)
        surface.set_text_color((110, 110, 110))
        meta = "  |  ".join(_present([doc.company_address, doc.company_email, doc.company_website]))
        surface.text(meta.upper(), self.margin, top + 8)
        return top + 8

    def draw_title(self, ctx, y):
        surface = ctx.surface
        surface.set_font("Helvetica-Bold")
        _fit(surface, ctx.label, 110, 42)
        surface.set_text_color(WHITE)
        surface.text(ctx.label, self.right, 35, align="right")
        return y

    def draw_parties(self, ctx, y):
        surface, doc, palette = ctx.surface, ctx.doc, ctx.palette
        section_y = y + 40
        meta_x = surface.PAGE_WIDTH * 0.6

        surface.set_font("Helvetica-Bold", 8)
        surface.set_text_color(palette.primary)
        surface.text("PREPARED FOR", self.margin, section_y)

        surface.set_font_size(14)
        surface.set_text_color(self.text_color)
        surface.text(doc.client_name, self.margin, section_y + 8)

        surface.set_font("Helvetica", 9)
        surface.set_text_color(self.soft)
        bottom = self.draw_stack(ctx, [doc.client_company, doc.client_email], self.margin, section_y + 14, 5)
        if doc.client_address:
            lines = surface.split_text(doc.client_address, 80)
            surface.text(lines, self.margin, bottom + 5)
            bottom += 5 + (len(lines) - 1) * surface.line_height

        meta_rows = [
            ("NUMBER", doc.invoice_number, self.text_color),
            ("DATE", format_date(doc.date, SHORT_DATE), self.text_color),
            ("DUE", format_date(doc.due_date, SHORT_DATE), self.text_color),
            ("TYPE", ctx.label, ctx.label_color),
        ]
        for index, (label, value, color) in enumerate(meta_rows):
            row_y = section_y + index * 12
            surface.set_font("Helvetica-Bold", 8)
            surface.set_text_color(palette.primary)
            surface.text(label, meta_x, row_y)

            surface.set_font("Helvetica-Bold")
            _fit(surface, value, self.right - meta_x - 30, 10)
            surface.set_text_color(color)
            surface.text(value, meta_x + 30, row_y)

        return max(section_y + 60, bottom + 10)

    def draw_table_header(self, ctx, y):
        surface, cols = ctx.surface, self.columns
        surface.set_draw_color((230, 230, 230))
        surface.set_line_width(0.5)
        surface.line(self.margin, y + 2, self.right, y + 2)

        surface.set_font("Helvetica-Bold", 8)
        surface.set_text_color((150, 150, 150))
        surface.text("ITEM DESCRIPTION", cols.description_x, y)
        surface.text("QTY", cols.qty_x, y, align="right")
        surface.text("RATE", cols.rate_x, y, align="right")
        surface.text("AMOUNT", cols.amount_x, y, align="right")
        return y + 15

    def draw_row(self, ctx, row):
        surface, cols, style = ctx.surface, self.columns, self.row_style
        y = row.top

        surface.set_font("Helvetica-Bold", style.font_size)
        surface.set_text_color(self.text_color)
        surface.text(row.lines, cols.description_x, y, leading=style.line_height)

        surface.set_font("Helvetica")
        surface.set_text_color(self.soft)
        surface.text(format_number(row.item.quantity), cols.qty_x, y, align="right")
        surface.text(self.row_money(ctx, row.item.rate), cols.rate_x, y, align="right")

        surface.set_font("Helvetica-Bold")
        surface.set_text_color(self.text_color)
        surface.text(self.row_money(ctx, row.item.amount), cols.amount_x, y, align="right")

        surface.set_draw_color((245, 245, 245))
        surface.set_line_width(0.2)
        surface.line(self.margin, row.bottom - 5, self.right, row.bottom - 5)

    def draw_totals(self, ctx, y):
        surface = ctx.surface
        summary_y = y + 10

        surface.set_font("Helvetica", 9)
        line_y = self.draw_total_lines(
            ctx, summary_y, self.right - 60, self.right, 8, label_color=(100, 100, 100),
        )

        total_y = line_y - 8 + 25
        surface.set_font("Helvetica-Bold", 10)
        surface.set_text_color(self.soft)
        surface.text("TOTAL DUE", self.right, total_y - 12, align="right")

        surface.set_font_size(28)
        surface.set_text_color(ctx.palette.primary)
        surface.text(ctx.money(ctx.doc.amount), self.right, total_y, align="right")
        return total_y + 10

    def draw_footer(self, ctx, y):
        surface = ctx.surface
        footer_y = surface.PAGE_HEIGHT - 20

        surface.set_font("Helvetica", 8)
        surface.set_text_color((100, 100, 100))
        surface.text(f"Payment terms: {self.terms_text(ctx)}", self.margin, footer_y - 6)

        surface.set_font("Helvetica-Bold", 8)
        surface.set_text_color(ctx.palette.primary)
        surface.text("DESIGNED FOR SUCCESS", self.margin, footer_y)

        self.draw_powered_by(ctx, self.right, footer_y)


# =============================================================================
# Professional Services (navy bar, meta box)
# =============================================================================

class ProfessionalServicesLayout(LayoutRenderer):
    style = LayoutStyle.PROFESSIONAL_SERVICES
    margin = 20
    text_color = (0, 0, 0)

    row_style = RowStyle(
        min_height=8, line_height=5, padding=4, text_offset=0, font_size=10,
    )
    columns = TableColumns(25, 100, 140, 160, 185)
    currency_in_rows = False

    default_terms = "Payment is due within 30 days."

    def draw_header(self, ctx):
        surface, palette = ctx.surface, ctx.palette
        width = surface.PAGE_WIDTH

        surface.set_fill_color(palette.primary)
        surface.rect(0, 0, width, 18, fill=True, stroke=False)
        surface.set_fill_color(palette.accent)
        surface.rect(0, 18, width, 1, fill=True, stroke=False)

        top = 40
        surface.set_font("Times-Bold")
        _fit(surface, ctx.company_name, 95, 24)
        surface.set_text_color(self.text_color)
        surface.text(ctx.company_name, self.margin, top)

        surface.set_font("Helvetica", 9)
        surface.set_text_color((80, 80, 80))
        if ctx.doc.company_address:
            surface.text(ctx.doc.company_address, self.margin, top + 8)
        return top + 8

    def draw_title(self, ctx, y):
        surface, doc = ctx.surface, ctx.doc
        box_w, box_h = 70, 35
        box_x = self.right - box_w
        box_y = 25

        surface.set_fill_color((248, 248, 250))
        surface.set_draw_color((230, 230, 230))
        surface.set_line_width(0.2)
        surface.rect(box_x, box_y, box_w, box_h, fill=True, stroke=True)

        surface.set_font("Helvetica-Bold")
        _fit(surface, ctx.label, box_w - 15, 14)
        surface.set_text_color(ctx.label_color)
        surface.text(ctx.label, box_x + 10, box_y + 12)

        surface.set_font_size(10)
        surface.set_text_color(self.text_color)
        surface.text(f"# {doc.invoice_number}", box_x + 10, box_y + 22)

        surface.set_font("Helvetica", 8)
        surface.set_text_color((100, 100, 100))
        surface.text(format_date(doc.date, LONG_DATE), box_x + 10, box_y + 29)
        return y + 40

    def draw_parties(self, ctx, y):
        surface, doc, palette = ctx.surface, ctx.doc, ctx.palette

        surface.set_font("Helvetica-Bold", 8)
        surface.set_text_color(palette.primary)
        surface.text("PREPARED FOR", self.margin, y)

        surface.set_font_size(12)
        surface.set_text_color(self.text_color)
        surface.text(doc.client_name, self.margin, y + 8)

        surface.set_font("Helvetica", 9)
        surface.set_text_color((80, 80, 80))
        self.draw_stack(ctx, [doc.client_company, doc.client_email], self.margin, y + 14, 5)

        col_x = surface.PAGE_WIDTH * 0.6
        surface.set_draw_color((230, 230, 230))
        surface.set_line_width(0.5)
        surface.line(col_x, y, col_x, y + 30)

        surface.set_font("Helvetica-Bold", 8)
        surface.set_text_color((100, 100, 100))
        surface.text("AMOUNT DUE", col_x + 15, y + 5)

        amount = ctx.money(doc.amount)
        surface.set_font("Times-Bold")
        _fit(surface, amount, self.right - col_x - 15, 20)
        surface.set_text_color(palette.primary)
        surface.text(amount, col_x + 15, y + 15)

        due = format_date(doc.due_date, SHORT_DATE)
        if due:
            surface.set_font("Helvetica-Bold", 8)
            surface.set_text_color(palette.secondary)
            surface.text(f"DUE: {due}", col_x + 15, y + 24)

        return y + 45

    def draw_table_header(self, ctx, y):
        surface, cols = ctx.surface, self.columns
        table_y = y + 10

        surface.set_fill_color(ctx.palette.primary)
        surface.rect(self.margin, table_y, self.right - self.margin, 8, fill=True, stroke=False)

        surface.set_font("Helvetica-Bold", 9)
        surface.set_text_color(WHITE)
        surface.text("SERVICE DESCRIPTION", cols.description_x, table_y + 6)
        surface.text("QTY", cols.qty_x, table_y + 6, align="right")
        surface.text("RATE", cols.rate_x, table_y + 6, align="right")
        surface.text("TOTAL", cols.amount_x, table_y + 6, align="right")
        return table_y + 15

    def decorate_row(self, ctx, row):
        ctx.surface.set_draw_color((240, 240, 240))
        ctx.surface.set_line_width(0.2)
        ctx.surface.line(self.margin, row.bottom - 2, self.right, row.bottom - 2)

    def draw_totals(self, ctx, y):
        surface, cols = ctx.surface, self.columns

        surface.set_font("Helvetica-Bold", 10)
        total_y = self.draw_total_lines(ctx, y + 10, cols.qty_x, cols.amount_x, 6, colon=True)

        surface.set_fill_color(ctx.palette.primary)
        surface.rect(self.right - 60, total_y - 4, 60, 8, fill=True, stroke=False)
        surface.set_text_color(WHITE)
        surface.text("TOTAL DUE:", self.right - 35, total_y + 2, align="right")
        surface.text(ctx.money(ctx.doc.amount), cols.amount_x, total_y + 2, align="right")
        return total_y + 12

    def draw_footer(self, ctx, y):
        surface = ctx.surface
        surface.set_font("Helvetica", 8)
        surface.set_text_color((100, 100, 100))
        surface.text("PAYMENT TERMS:", self.margin, y + 8)
        surface.text(self.terms_text(ctx), self.margin, y + 13)

        self.draw_powered_by(ctx, self.right, y + 13)


# =============================================================================
# Registry
# =============================================================================

LAYOUTS: Dict[LayoutStyle, type] = {
    LayoutStyle.ULTRA_LUXURY: UltraLuxuryLayout,
    LayoutStyle.MICROSOFT: MicrosoftLayout,
    LayoutStyle.AMAZON: AmazonLayout,
    LayoutStyle.FINANCIAL: FinancialLayout,
    LayoutStyle.CREATIVE_AGENCY: CreativeAgencyLayout,
    LayoutStyle.PROFESSIONAL_SERVICES: ProfessionalServicesLayout,
}


def get_layout_renderer(theme: Optional[str]) -> LayoutRenderer:
    """Renderer for a theme id. Unknown themes use the Microsoft layout."""
    return LAYOUTS[LayoutStyle.for_theme(theme)]()
