"""
Canonical schemas for invoice PDF generation.

These schemas define the exact structure the layout renderers read when
producing an invoice document. The web application posts camelCase JSON;
``InvoiceDocument.from_dict`` is the single place that JSON is turned into
typed values, so renderers never deal with missing keys or string numbers.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional

from utils.formatting import to_float

logger = logging.getLogger(__name__)


class InvoiceType(Enum):
    """
    Business classification of an invoice.

    Drives the title label, the title colour, the watermark and which
    extension fields appear in the details section.
    """
    SALES = "sales"
    PROFORMA = "proforma"
    INTERIM = "interim"
    FINAL = "final"
    RECURRING = "recurring"
    CREDIT_NOTE = "credit-note"
    PAST_DUE = "past-due"
    COMMERCIAL = "commercial"
    TAX = "tax"
    TIMESHEET = "timesheet"
    RETAINER = "retainer"
    EXPENSE = "expense"

    @classmethod
    def parse(cls, value: Any) -> "InvoiceType":
        """Coerce a raw value to an InvoiceType. Unknown or empty -> SALES."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.SALES


class LayoutStyle(Enum):
    """The six page layouts. Any other theme id renders as MICROSOFT."""
    ULTRA_LUXURY = "ultra-luxury"
    MICROSOFT = "microsoft"
    AMAZON = "amazon"
    FINANCIAL = "financial"
    CREATIVE_AGENCY = "creative-agency"
    PROFESSIONAL_SERVICES = "professional-services"

    @classmethod
    def for_theme(cls, theme: Optional[str]) -> "LayoutStyle":
        try:
            return cls(theme or "")
        except ValueError:
            return cls.MICROSOFT


@dataclass(frozen=True)
class LineItem:
    """A single billable row. ``amount`` is trusted as supplied."""
    description: str = ""
    quantity: float = 0.0
    rate: float = 0.0
    amount: float = 0.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LineItem":
        description = data.get("description")
        return cls(
            description="" if description is None else str(description),
            quantity=to_float(data.get("quantity")),
            rate=to_float(data.get("rate")),
            amount=to_float(data.get("amount")),
        )

    def to_dict(self) -> dict:
        return {
            "description": self.description,
            "quantity": self.quantity,
            "rate": self.rate,
            "amount": self.amount,
        }


@dataclass(frozen=True)
class CustomColors:
    """User-chosen hex colours. When present they replace the theme palette."""
    primary: str = ""
    secondary: str = ""
    accent: str = ""
    background: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Optional["CustomColors"]:
        if not isinstance(data, dict) or not data:
            return None
        return cls(
            primary=str(data.get("primary") or ""),
            secondary=str(data.get("secondary") or ""),
            accent=str(data.get("accent") or ""),
            background=str(data.get("background") or ""),
        )


# =============================================================================
# Invoice Document
# =============================================================================

_NUMERIC_FIELDS = frozenset({
    "subtotal",
    "tax_rate",
    "tax_amount",
    "discount_rate",
    "discount_amount",
    "amount",
    "percent_complete",
    "late_fee_amount",
    "retainer_amount",
})

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


def _snake_case(key: str) -> str:
    return _CAMEL_BOUNDARY.sub(r"\1_\2", key).lower()


@dataclass(frozen=True)
class InvoiceDocument:
    """
    One invoice, as handed to the PDF generator.

    Immutable for the duration of a render. Text fields default to empty
    strings and numbers to zero, so layouts can print them unconditionally.
    ``items`` keeps whatever the caller supplied (a list of dicts/LineItems
    or a legacy JSON string); it is parsed once per render by
    ``parse_line_items``.

    ``company_logo``, ``company_gst`` and ``client_gst`` are carried for
    callers but no layout draws them.
    """
    # Identity
    invoice_number: str = ""
    invoice_type: InvoiceType = InvoiceType.SALES
    theme: str = "professional"

    # Dates (ISO strings, possibly empty or invalid)
    date: str = ""
    due_date: str = ""

    # Issuer
    company_name: str = ""
    company_address: str = ""
    company_email: str = ""
    company_phone: str = ""
    company_website: str = ""
    company_logo: str = ""
    company_gst: str = ""

    # Client
    client_name: str = ""
    client_email: str = ""
    client_company: str = ""
    client_address: str = ""
    client_gst: str = ""
    client_currency: str = "$"

    items: Any = field(default_factory=list)

    # Monetary rollup
    subtotal: float = 0.0
    tax_rate: float = 0.0
    tax_amount: float = 0.0
    discount_rate: float = 0.0
    discount_amount: float = 0.0
    amount: float = 0.0

    # Presentation
    notes: str = ""
    terms: str = ""
    payment_link: str = ""
    white_label_mode: bool = False
    custom_colors: Optional[CustomColors] = None

    # Proforma
    validity_period: str = ""
    estimated_delivery: str = ""
    # Interim / final
    project_name: str = ""
    milestone_description: str = ""
    percent_complete: float = 0.0
    # Recurring
    billing_cycle: str = ""
    next_billing_date: str = ""
    # Credit note
    original_invoice_number: str = ""
    credit_reason: str = ""
    # Past due
    original_due_date: str = ""
    late_fee_amount: float = 0.0
    # Commercial
    hs_code: str = ""
    country_of_origin: str = ""
    shipping_terms: str = ""
    export_license_number: str = ""
    # Tax
    seller_tax_id: str = ""
    buyer_tax_id: str = ""
    # Timesheet
    consultant_name: str = ""
    timesheet_period_start: str = ""
    timesheet_period_end: str = ""
    # Retainer
    retainer_amount: float = 0.0
    retainer_terms: str = ""
    # Expense
    employee_name: str = ""
    employee_id: str = ""
    reimbursement_method: str = ""

    @property
    def currency(self) -> str:
        """Currency symbol used for every printed amount."""
        return self.client_currency or "$"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InvoiceDocument":
        """
        Build a document from request JSON.

        Accepts camelCase (``invoiceNumber``) or snake_case keys and ignores
        anything it does not know. Never raises on bad values: numbers that
        cannot be parsed become 0 and an unknown invoice type becomes sales.
        """
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}

        for key, value in data.items():
            name = _snake_case(str(key))
            if name not in known:
                continue

            if name == "invoice_type":
                kwargs[name] = InvoiceType.parse(value)
            elif name == "custom_colors":
                kwargs[name] = CustomColors.from_dict(value)
            elif name == "items":
                kwargs[name] = value if value is not None else []
            elif name == "white_label_mode":
                kwargs[name] = bool(value)
            elif name in _NUMERIC_FIELDS:
                kwargs[name] = to_float(value)
            elif name in ("theme", "client_currency"):
                if value:
                    kwargs[name] = str(value)
            else:
                kwargs[name] = "" if value is None else str(value)

        return cls(**kwargs)


def parse_line_items(raw: Any) -> List[LineItem]:
    """
    Normalise the ``items`` payload into LineItems.

    Older records store items as a JSON string. A string that does not
    parse, or parses to something other than a list, yields no rows.
    """
    if raw is None:
        return []

    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            logger.warning("Could not parse invoice items JSON: %s", e)
            return []

    if not isinstance(raw, (list, tuple)):
        logger.warning("Ignoring invoice items of type %s", type(raw).__name__)
        return []

    items = []
    for entry in raw:
        if isinstance(entry, LineItem):
            items.append(entry)
        elif isinstance(entry, dict):
            items.append(LineItem.from_dict(entry))
    return items


# =============================================================================
# Sample Data
# =============================================================================

def create_sample_invoice(
    theme: str = "microsoft",
    invoice_type: InvoiceType = InvoiceType.SALES,
) -> InvoiceDocument:
    """
    Create a sample invoice for CLI previews and tests.

    Every extension field is filled, so the details section shows content
    whichever invoice type is chosen.
    """
    from .totals import compute_totals

    items = [
        LineItem("Brand strategy workshop", 1, 1200.0, 1200.0),
        LineItem(
            "Website redesign: information architecture, wireframes and "
            "high-fidelity mockups for twelve page templates",
            1,
            4800.0,
            4800.0,
        ),
        LineItem("Content migration (hours)", 16, 85.0, 1360.0),
    ]
    totals = compute_totals(items, tax_rate=10.0, discount_rate=5.0)

    return InvoiceDocument(
        invoice_number="INV-2025-0042",
        invoice_type=invoice_type,
        theme=theme,
        date="2025-03-01",
        due_date="2025-03-31",
        company_name="Northwind Studio",
        company_address="18 Harbour Street, Bristol BS1 4RN",
        company_email="billing@northwind.studio",
        company_phone="+44 117 496 0123",
        company_website="northwind.studio",
        client_name="Dana Whitfield",
        client_email="dana@contoso.example",
        client_company="Contoso Ltd",
        client_address="200 Market Square, Leeds LS1 6AF",
        client_currency="$",
        items=items,
        subtotal=totals.subtotal,
        tax_rate=10.0,
        tax_amount=totals.tax_amount,
        discount_rate=5.0,
        discount_amount=totals.discount_amount,
        amount=totals.total,
        notes="Thank you for your business. Please quote the invoice number with your payment.",
        terms="Net 30 days",
        payment_link="https://pay.northwind.studio/INV-2025-0042",
        validity_period="30 days",
        estimated_delivery="2025-04-15",
        project_name="Contoso Rebrand",
        milestone_description="Phase 2: Design",
        percent_complete=60,
        billing_cycle="Monthly",
        next_billing_date="2025-04-01",
        original_invoice_number="INV-2025-0031",
        credit_reason="Duplicate charge",
        original_due_date="2025-02-01",
        late_fee_amount=75,
        hs_code="4911.10",
        country_of_origin="United Kingdom",
        shipping_terms="FOB",
        export_license_number="EXP-99812",
        seller_tax_id="GB123456789",
        buyer_tax_id="GB987654321",
        consultant_name="Sam Patel",
        timesheet_period_start="2025-03-01",
        timesheet_period_end="2025-03-15",
        retainer_amount=2500,
        retainer_terms="Quarterly, in advance",
        employee_name="Alex Morgan",
        employee_id="EMP-0042",
        reimbursement_method="Bank transfer",
    )
