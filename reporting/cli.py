#!/usr/bin/env python3
"""
CLI for generating invoice PDFs.

Usage:
    python -m reporting.cli sample [--theme THEME | --all-themes] [--type TYPE]
    python -m reporting.cli generate <invoice_json>

Examples:
    # Preview every layout for a proforma invoice
    python -m reporting.cli sample --all-themes --type proforma

    # Render a stored invoice record
    python -m reporting.cli generate invoices/INV-0042.json
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

from utils.config import Config

from .exceptions import PDFGenerationError
from .pdf_generator import PremiumPDFGenerator
from .schemas import (
    InvoiceDocument,
    InvoiceType,
    LayoutStyle,
    create_sample_invoice,
    parse_line_items,
)
from .totals import apply_totals, compute_totals


def parse_invoice_from_json(data: dict) -> InvoiceDocument:
    """
    Parse a stored invoice record into an InvoiceDocument.

    Records saved before totals were persisted carry only rates; their
    totals are derived from the items.

    Raises:
        ValueError: if ``data`` is not a JSON object.
    """
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object")

    document = InvoiceDocument.from_dict(data)
    if "subtotal" not in data:
        totals = compute_totals(
            parse_line_items(document.items),
            tax_rate=document.tax_rate,
            discount_rate=document.discount_rate,
        )
        document = apply_totals(document, totals)
    return document


def cmd_sample(args):
    """Generate sample invoices for previewing layouts."""
    generator = PremiumPDFGenerator(output_dir=args.output_dir)
    invoice_type = InvoiceType.parse(args.type)
    themes = [style.value for style in LayoutStyle] if args.all_themes else [args.theme]

    print(f"Generating sample {invoice_type.value} invoice(s)...")

    for theme in themes:
        # One file per theme, so the theme goes into the invoice number
        document = create_sample_invoice(theme=theme, invoice_type=invoice_type)
        document = replace(document, invoice_number=f"{document.invoice_number}-{theme}")
        try:
            result = generator.generate_to_file(document)
        except PDFGenerationError as e:
            print(f"Error: {theme}: {e}", file=sys.stderr)
            return 1
        print(f"Invoice generated: {result.path}")

    return 0


def cmd_generate(args):
    """Generate an invoice PDF from a JSON record."""
    input_path = Path(args.invoice_file)

    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    print(f"Loading invoice from: {input_path}")

    try:
        with open(input_path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON: {e}", file=sys.stderr)
        return 1

    try:
        document = parse_invoice_from_json(data)
    except ValueError as e:
        print(f"Error: Invalid invoice data: {e}", file=sys.stderr)
        return 1

    print(f"Generating {document.invoice_type.value} invoice {document.invoice_number}")

    generator = PremiumPDFGenerator(output_dir=args.output_dir)
    try:
        result = generator.generate_to_file(document)
    except PDFGenerationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Invoice generated: {result.path}")
    return 0


def build_parser(config: Config) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="SmartInvoice - Premium Invoice PDF Generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
    python -m reporting.cli sample --theme financial --type past-due
    python -m reporting.cli generate invoices/INV-0042.json

Output:
    Invoices are saved to: {config.output_dir}/<type>-<invoice_number>.pdf
        """,
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Sample command
    sample_parser = subparsers.add_parser(
        "sample",
        help="Generate a sample invoice with mock data",
    )
    themes = sample_parser.add_mutually_exclusive_group()
    themes.add_argument(
        "--theme",
        default=LayoutStyle.MICROSOFT.value,
        help="Layout or colour theme id (default: microsoft)",
    )
    themes.add_argument(
        "--all-themes",
        action="store_true",
        help="Generate one sample per layout",
    )
    sample_parser.add_argument(
        "--type",
        default=InvoiceType.SALES.value,
        choices=[t.value for t in InvoiceType],
        help="Invoice type (default: sales)",
    )
    sample_parser.add_argument("--output-dir", default=config.output_dir)
    sample_parser.set_defaults(func=cmd_sample)

    # Generate command
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate an invoice from a JSON record",
    )
    gen_parser.add_argument(
        "invoice_file",
        help="Path to JSON invoice file",
    )
    gen_parser.add_argument("--output-dir", default=config.output_dir)
    gen_parser.set_defaults(func=cmd_generate)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    config = Config.load()
    logging.basicConfig(level=config.log_level)

    parser = build_parser(config)
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
