"""
Tests for the invoice-type details section.

Tests covering:
1. Which fields each invoice type shows
2. Empty values are dropped
3. Cursor arithmetic and two-column placement
4. Sales and empty documents draw nothing
"""

from dataclasses import replace

import pytest

from reporting.palette import THEME_PALETTES, type_color
from reporting.schemas import InvoiceDocument, InvoiceType, create_sample_invoice
from reporting.sections import render_specialized_section, specialized_fields

PALETTE = THEME_PALETTES["professional"]


def _labels(doc):
    return [f.label for f in specialized_fields(doc)]


# =============================================================================
# Test: Field Selection
# =============================================================================


class TestSpecializedFields:
    """Per-type field lists, filtered to populated values."""

    @pytest.mark.parametrize(
        "invoice_type,labels",
        [
            (InvoiceType.PROFORMA, ["Validity Period", "Est. Delivery"]),
            (InvoiceType.INTERIM, ["Project", "Milestone", "Progress"]),
            (InvoiceType.FINAL, ["Project", "Milestone", "Progress"]),
            (InvoiceType.RECURRING, ["Billing Cycle", "Next Billing"]),
            (InvoiceType.CREDIT_NOTE, ["Original Inv #", "Reason"]),
            (InvoiceType.PAST_DUE, ["Original Due Date", "Late Fee"]),
            (InvoiceType.COMMERCIAL, ["HS Code", "Origin", "Terms", "Exp License"]),
            (InvoiceType.TAX, ["Seller Tax ID", "Buyer Tax ID"]),
            (InvoiceType.TIMESHEET, ["Consultant", "Period"]),
            (InvoiceType.RETAINER, ["Retainer Amt", "Terms"]),
            (InvoiceType.EXPENSE, ["Employee", "Employee ID", "Reimb. Method"]),
        ],
    )
    def test_fully_populated_document(self, invoice_type, labels):
        doc = create_sample_invoice(invoice_type=invoice_type)
        assert _labels(doc) == labels

    def test_sales_has_no_fields(self):
        assert specialized_fields(create_sample_invoice()) == []

    def test_empty_values_are_dropped(self):
        doc = replace(
            create_sample_invoice(invoice_type=InvoiceType.COMMERCIAL),
            country_of_origin="",
            export_license_number="",
        )
        assert _labels(doc) == ["HS Code", "Terms"]

    def test_zero_amounts_are_not_populated(self):
        doc = replace(
            create_sample_invoice(invoice_type=InvoiceType.PAST_DUE),
            late_fee_amount=0,
        )
        assert _labels(doc) == ["Original Due Date"]

    def test_derived_values(self):
        past_due = create_sample_invoice(invoice_type=InvoiceType.PAST_DUE)
        interim = create_sample_invoice(invoice_type=InvoiceType.INTERIM)
        timesheet = create_sample_invoice(invoice_type=InvoiceType.TIMESHEET)
        retainer = create_sample_invoice(invoice_type=InvoiceType.RETAINER)

        assert specialized_fields(past_due)[1].value == "$75"
        assert specialized_fields(interim)[2].value == "60%"
        assert specialized_fields(timesheet)[1].value == "2025-03-01 to 2025-03-15"
        assert specialized_fields(retainer)[0].value == "$2500"

    def test_period_needs_a_start(self):
        doc = replace(
            create_sample_invoice(invoice_type=InvoiceType.TIMESHEET),
            timesheet_period_start="",
        )
        assert _labels(doc) == ["Consultant"]

    def test_amounts_use_document_currency(self):
        doc = replace(
            create_sample_invoice(invoice_type=InvoiceType.PAST_DUE),
            client_currency="€",
        )
        assert specialized_fields(doc)[1].value == "€75"


# =============================================================================
# Test: Rendering
# =============================================================================


class TestRenderSpecializedSection:
    """Geometry of the drawn section."""

    def test_two_fields_advance_cursor(self, surface):
        doc = create_sample_invoice(invoice_type=InvoiceType.PROFORMA)
        assert render_specialized_section(surface, doc, PALETTE, 100) == 142

    def test_three_fields_add_a_row(self, surface):
        doc = create_sample_invoice(invoice_type=InvoiceType.EXPENSE)
        assert render_specialized_section(surface, doc, PALETTE, 100) == 148

    def test_four_fields_fill_two_rows(self, surface):
        doc = create_sample_invoice(invoice_type=InvoiceType.COMMERCIAL)
        assert render_specialized_section(surface, doc, PALETTE, 100) == 148

    def test_heading_uses_type_label_and_color(self, surface):
        doc = create_sample_invoice(invoice_type=InvoiceType.CREDIT_NOTE)
        render_specialized_section(surface, doc, PALETTE, 50)

        (heading,) = surface.find("CREDIT NOTE DETAILS")
        assert heading.x == 20
        assert heading.y == 63
        assert heading.font_name == "Helvetica-Bold"
        assert heading.font_size == 9
        assert heading.color == type_color(InvoiceType.CREDIT_NOTE)

    def test_two_column_placement(self, surface):
        doc = create_sample_invoice(invoice_type=InvoiceType.EXPENSE)
        render_specialized_section(surface, doc, PALETTE, 100)

        employee = surface.find("Employee:")[0]
        employee_id = surface.find("Employee ID:")[0]
        method = surface.find("Reimb. Method:")[0]

        assert (employee.x, employee.y) == (20, 121)
        assert (employee_id.x, employee_id.y) == (105, 121)
        assert (method.x, method.y) == (20, 127)
        assert employee.color == PALETTE.medium
        assert employee.font_size == 8

    def test_short_label_value_offset(self, surface):
        doc = create_sample_invoice(invoice_type=InvoiceType.INTERIM)
        render_specialized_section(surface, doc, PALETTE, 0)

        (value,) = surface.find("Contoso Rebrand")
        assert value.x == pytest.approx(45)
        assert value.font_name == "Helvetica"

    def test_long_label_pushes_value_right(self, surface):
        doc = create_sample_invoice(invoice_type=InvoiceType.PAST_DUE)
        render_specialized_section(surface, doc, PALETTE, 0)

        label_width = surface.text_width("Original Due Date:", "Helvetica-Bold", 8)
        (value,) = surface.find("2025-02-01")
        assert label_width + 2 > 25
        assert value.x == pytest.approx(20 + label_width + 2)

    def test_sales_draws_nothing(self, surface):
        doc = create_sample_invoice()
        assert render_specialized_section(surface, doc, PALETTE, 77) == 77
        assert surface.texts == []

    def test_unpopulated_type_draws_nothing(self, surface):
        doc = InvoiceDocument(invoice_type=InvoiceType.RECURRING)
        assert render_specialized_section(surface, doc, PALETTE, 77) == 77
        assert surface.texts == []
