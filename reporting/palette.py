"""
Colour palettes and invoice-type lookup tables.

All colours are 0-255 RGB triples. The surface converts them to ReportLab
colours at draw time.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Final, Optional, Tuple

from .schemas import CustomColors, InvoiceType

RGB = Tuple[int, int, int]

BLACK: Final[RGB] = (0, 0, 0)
WHITE: Final[RGB] = (255, 255, 255)


# =============================================================================
# Colour Scheme
# =============================================================================

@dataclass(frozen=True)
class ColorScheme:
    """
    Eight named colour roles, resolved once per render.

    primary/secondary/accent carry the brand; dark/medium/light are text and
    rule neutrals; bg fills the page.
    """
    primary: RGB
    secondary: RGB
    accent: RGB
    dark: RGB
    medium: RGB
    light: RGB
    bg: RGB
    white: RGB = WHITE


DEFAULT_THEME: Final = "professional"

THEME_PALETTES: Final[Dict[str, ColorScheme]] = {
    "professional": ColorScheme(
        primary=(13, 60, 97),
        secondary=(14, 165, 233),
        accent=(16, 185, 129),
        dark=(15, 23, 42),
        medium=(71, 85, 105),
        light=(148, 163, 184),
        bg=(248, 250, 252),
    ),
    "creative-agency": ColorScheme(
        primary=(236, 0, 140),
        secondary=(0, 0, 0),
        accent=(245, 245, 245),
        dark=(0, 0, 0),
        medium=(100, 100, 100),
        light=(230, 230, 230),
        bg=(255, 255, 255),
    ),
    "professional-services": ColorScheme(
        primary=(0, 33, 71),
        secondary=(134, 142, 150),
        accent=(248, 249, 250),
        dark=(33, 37, 41),
        medium=(108, 117, 125),
        light=(222, 226, 230),
        bg=(255, 255, 255),
    ),
    "modern": ColorScheme(
        primary=(79, 70, 229),
        secondary=(139, 92, 246),
        accent=(236, 72, 153),
        dark=(17, 24, 39),
        medium=(75, 85, 99),
        light=(156, 163, 175),
        bg=(249, 250, 251),
    ),
    "luxury": ColorScheme(
        primary=(113, 63, 18),
        secondary=(217, 119, 6),
        accent=(245, 158, 11),
        dark=(20, 83, 45),
        medium=(52, 73, 94),
        light=(127, 140, 141),
        bg=(254, 252, 232),
    ),
    "minimal": ColorScheme(
        primary=(31, 41, 55),
        secondary=(75, 85, 99),
        accent=(99, 102, 241),
        dark=(17, 24, 39),
        medium=(107, 114, 128),
        light=(156, 163, 175),
        bg=(255, 255, 255),
    ),
    "elegant-black-gold": ColorScheme(
        primary=(0, 0, 0),
        secondary=(212, 175, 55),
        accent=(255, 215, 0),
        dark=(20, 20, 20),
        medium=(64, 64, 64),
        light=(128, 128, 128),
        bg=(15, 15, 15),
    ),
    "minimal-white-silver": ColorScheme(
        primary=(64, 64, 64),
        secondary=(192, 192, 192),
        accent=(128, 128, 128),
        dark=(32, 32, 32),
        medium=(96, 96, 96),
        light=(160, 160, 160),
        bg=(255, 255, 255),
    ),
    "ivory-serif-classic": ColorScheme(
        primary=(139, 69, 19),
        secondary=(160, 82, 45),
        accent=(205, 133, 63),
        dark=(101, 67, 33),
        medium=(139, 115, 85),
        light=(188, 170, 164),
        bg=(255, 255, 240),
    ),
    "modern-rose-gold": ColorScheme(
        primary=(188, 143, 143),
        secondary=(255, 182, 193),
        accent=(255, 192, 203),
        dark=(139, 69, 19),
        medium=(205, 133, 63),
        light=(255, 218, 185),
        bg=(255, 255, 255),
    ),
    "ultra-luxury": ColorScheme(
        primary=(0, 0, 0),
        secondary=(50, 50, 50),
        accent=(100, 100, 100),
        dark=(0, 0, 0),
        medium=(80, 80, 80),
        light=(230, 230, 230),
        bg=(255, 255, 255),
    ),
}

# Neutrals paired with user-supplied brand colours
CUSTOM_DARK: Final[RGB] = (15, 23, 42)
CUSTOM_MEDIUM: Final[RGB] = (71, 85, 105)
CUSTOM_LIGHT: Final[RGB] = (148, 163, 184)

_HEX_PATTERN = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def hex_to_rgb(value: Optional[str]) -> RGB:
    """Parse ``#RRGGBB`` or ``RRGGBB``. Anything else is black."""
    match = _HEX_PATTERN.match(value or "")
    if not match:
        return BLACK
    return tuple(int(part, 16) for part in match.groups())  # type: ignore[return-value]


def resolve_color_scheme(
    theme: Optional[str] = DEFAULT_THEME,
    custom_colors: Optional[CustomColors] = None,
) -> ColorScheme:
    """
    Resolve the palette for a render.

    Custom colours win over the theme. Unknown themes (including the
    layout-only ids such as ``microsoft``) use the professional palette.
    """
    if custom_colors is not None:
        return ColorScheme(
            primary=hex_to_rgb(custom_colors.primary),
            secondary=hex_to_rgb(custom_colors.secondary),
            accent=hex_to_rgb(custom_colors.accent),
            dark=CUSTOM_DARK,
            medium=CUSTOM_MEDIUM,
            light=CUSTOM_LIGHT,
            bg=hex_to_rgb(custom_colors.background),
        )
    return THEME_PALETTES.get(theme or DEFAULT_THEME, THEME_PALETTES[DEFAULT_THEME])


# =============================================================================
# Invoice Type Tables
# =============================================================================

INVOICE_TYPE_LABELS: Final[Dict[InvoiceType, str]] = {
    InvoiceType.SALES: "INVOICE",
    InvoiceType.PROFORMA: "PROFORMA INVOICE",
    InvoiceType.INTERIM: "INTERIM INVOICE",
    InvoiceType.FINAL: "FINAL INVOICE",
    InvoiceType.RECURRING: "RECURRING INVOICE",
    InvoiceType.CREDIT_NOTE: "CREDIT NOTE",
    InvoiceType.PAST_DUE: "PAST DUE INVOICE",
    InvoiceType.COMMERCIAL: "COMMERCIAL INVOICE",
    InvoiceType.TAX: "TAX INVOICE",
    InvoiceType.TIMESHEET: "TIMESHEET INVOICE",
    InvoiceType.RETAINER: "RETAINER INVOICE",
    InvoiceType.EXPENSE: "EXPENSE REPORT",
}

INVOICE_TYPE_COLORS: Final[Dict[InvoiceType, RGB]] = {
    InvoiceType.SALES: (0, 0, 0),
    InvoiceType.PROFORMA: (147, 51, 234),
    InvoiceType.INTERIM: (249, 115, 22),
    InvoiceType.FINAL: (34, 197, 94),
    InvoiceType.RECURRING: (6, 182, 212),
    InvoiceType.CREDIT_NOTE: (239, 68, 68),
    InvoiceType.PAST_DUE: (234, 179, 8),
    InvoiceType.COMMERCIAL: (59, 130, 246),
    InvoiceType.TAX: (16, 185, 129),
    InvoiceType.TIMESHEET: (168, 85, 247),
    InvoiceType.RETAINER: (14, 165, 233),
    InvoiceType.EXPENSE: (251, 146, 60),
}


@dataclass(frozen=True)
class Watermark:
    text: str
    color: RGB


WATERMARKS: Final[Dict[InvoiceType, Watermark]] = {
    InvoiceType.PROFORMA: Watermark("NOT FOR PAYMENT", (147, 51, 234)),
    InvoiceType.PAST_DUE: Watermark("PAYMENT OVERDUE", (239, 68, 68)),
    InvoiceType.EXPENSE: Watermark("REIMBURSEMENT REQUEST", (251, 146, 60)),
}


def type_label(invoice_type: InvoiceType) -> str:
    return INVOICE_TYPE_LABELS[invoice_type]


def type_color(invoice_type: InvoiceType) -> RGB:
    return INVOICE_TYPE_COLORS[invoice_type]


def watermark_for(invoice_type: InvoiceType) -> Optional[Watermark]:
    """The cautionary watermark for a type, or None."""
    return WATERMARKS.get(invoice_type)
