"""
Coercion of raw field input into safe numeric values.

Anything the user types ends up as a valid number: invalid or negative
amounts become 0 and invalid quantities become 1. Nothing here raises.
"""
import math
from typing import Any

from .models import TaxMode

# Arabic-Indic and Eastern Arabic-Indic digits, plus the Arabic decimal separator
_DIGIT_TABLE = str.maketrans(
    "٠١٢٣٤٥٦٧٨٩۰۱۲۳۴۵۶۷۸۹٫",
    "01234567890123456789.",
)


def to_number(value: Any) -> float:
    """Parse value as a float, or return NaN when it is not a number."""
    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            # ints beyond the float range
            return math.nan

    text = str(value).strip().translate(_DIGIT_TABLE)
    if not text:
        return math.nan
    # A lone comma is a decimal separator ("1,5"); otherwise commas group thousands
    if text.count(",") == 1 and "." not in text:
        text = text.replace(",", ".")
    else:
        text = text.replace(",", "")
    try:
        return float(text)
    except (OverflowError, ValueError):
        return math.nan


def parse_amount(value: Any) -> float:
    """Non-negative finite amount; anything else becomes 0.0."""
    number = to_number(value)
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def parse_quantity(value: Any) -> int:
    """Whole quantity of at least 1; anything else becomes 1."""
    number = to_number(value)
    if not math.isfinite(number):
        return 1
    return max(1, int(number))


def parse_tax_mode(value: Any) -> TaxMode:
    """Tax mode tag; unknown values fall back to percentage."""
    if isinstance(value, TaxMode):
        return value
    try:
        return TaxMode(str(value).strip().lower())
    except ValueError:
        return TaxMode.PERCENTAGE
