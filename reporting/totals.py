"""
Invoice totals.

Mirrors the calculation the invoice editor performs before saving: the
discount applies to the subtotal and tax applies to the discounted amount.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, List, Tuple

from utils.formatting import format_money, format_percent

from .schemas import InvoiceDocument, LineItem


@dataclass(frozen=True)
class InvoiceTotals:
    """Monetary rollup of an invoice."""
    subtotal: float
    discount_amount: float
    tax_amount: float
    total: float

    def to_dict(self) -> dict:
        return {
            "subtotal": self.subtotal,
            "discountAmount": self.discount_amount,
            "taxAmount": self.tax_amount,
            "total": self.total,
        }


def compute_totals(
    items: Iterable[LineItem],
    tax_rate: float = 0.0,
    discount_rate: float = 0.0,
) -> InvoiceTotals:
    """
    Derive totals from line items and percentage rates.

    subtotal = sum of item amounts
    discount = subtotal * discount_rate / 100
    tax      = (subtotal - discount) * tax_rate / 100
    total    = subtotal - discount + tax
    """
    subtotal = sum(item.amount for item in items)
    discount = subtotal * discount_rate / 100
    tax = (subtotal - discount) * tax_rate / 100
    return InvoiceTotals(
        subtotal=subtotal,
        discount_amount=discount,
        tax_amount=tax,
        total=subtotal - discount + tax,
    )


def apply_totals(document: InvoiceDocument, totals: InvoiceTotals) -> InvoiceDocument:
    """Return a copy of ``document`` carrying ``totals``."""
    return replace(
        document,
        subtotal=totals.subtotal,
        discount_amount=totals.discount_amount,
        tax_amount=totals.tax_amount,
        amount=totals.total,
    )


def totals_lines(
    document: InvoiceDocument,
    colon: bool = False,
    show_rates: bool = True,
) -> List[Tuple[str, str]]:
    """
    Label/value pairs printed above the grand total.

    Subtotal always; discount only when positive (shown as a negative
    amount); tax only when positive.
    """
    suffix = ":" if colon else ""
    symbol = document.currency

    lines = [(f"Subtotal{suffix}", format_money(document.subtotal, symbol))]

    if document.discount_amount > 0:
        label = "Discount"
        if show_rates:
            label += f" ({format_percent(document.discount_rate)})"
        lines.append((label + suffix, "-" + format_money(document.discount_amount, symbol)))

    if document.tax_amount > 0:
        label = "Tax"
        if show_rates:
            label += f" ({format_percent(document.tax_rate)})"
        lines.append((label + suffix, format_money(document.tax_amount, symbol)))

    return lines
