"""
Utility modules for the invoice engine.
"""

from .formatting import format_date, format_money, format_number, format_percent, to_float
from .config import Config

__all__ = [
    "format_date",
    "format_money",
    "format_number",
    "format_percent",
    "to_float",
    "Config",
]
