"""
Formatting utilities.
"""

from datetime import date, datetime
from typing import Any, Optional


def to_float(value: Any, default: float = 0.0) -> float:
    """
    Coerce a loosely-typed JSON value to float.

    None, empty strings, booleans and anything non-numeric give ``default``.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def format_number(value: float) -> str:
    """
    Format a number without a trailing ``.0`` for whole values.

    Used for quantities and rates printed as-is (``2``, ``12.5``).
    """
    number = to_float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def format_money(amount: float, symbol: str = "$") -> str:
    """
    Format an amount with two decimals behind a currency symbol.

    Args:
        amount: The amount in major units.
        symbol: Currency symbol prefix (default ``$``).

    Returns:
        Formatted string, e.g. ``$1200.00``.
    """
    return f"{symbol}{to_float(amount):.2f}"


def format_percent(value: float) -> str:
    """Format a rate for a label, e.g. ``10%`` or ``7.5%``."""
    return f"{format_number(value)}%"


def parse_date(value: Optional[str]) -> Optional[date]:
    """Parse an ISO date or datetime string. Returns None when invalid."""
    if not value:
        return None
    text = str(value).strip()
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def format_date(value: Optional[str], pattern: str = "%b %d, %Y") -> str:
    """
    Format an ISO date string for display.

    Missing or unparseable dates render as an empty string rather than
    raising, so a bad date never aborts a render.
    """
    parsed = parse_date(value)
    if parsed is None:
        return ""
    return parsed.strftime(pattern)
