"""
Bulk entry - turn pasted text into line items.

One item per line, comma separated:
    weight[, quantity[, price_per_gram[, tax_mode, tax_value[, provider_fee]]]]
Missing trailing fields take the defaults. Lines starting with '#' are ignored.
"""
import math
from dataclasses import dataclass, field

from ..engine.inputs import to_number, parse_amount, parse_quantity, parse_tax_mode
from ..engine.models import LineItem, make_tax


@dataclass
class RejectedLine:
    line_number: int
    text: str
    reason: str


@dataclass
class BulkParseResult:
    items: list[LineItem] = field(default_factory=list)
    rejected: list[RejectedLine] = field(default_factory=list)


def _split(line: str) -> list[str]:
    # Tabs come through when pasting from a spreadsheet
    if '\t' in line:
        return [part.strip() for part in line.split('\t')]
    return [part.strip() for part in line.split(',')]


def parse_line(line: str, default_price_per_gram: float) -> LineItem:
    """
    Parse a single entry line.

    Raises:
        ValueError: if the weight is missing, negative or not a number,
            or the line's totals would overflow
    """
    parts = _split(line)
    weight = to_number(parts[0])
    if not (math.isfinite(weight) and weight >= 0):
        raise ValueError(f"Weight must be a non-negative number, got '{parts[0]}'")

    quantity = parse_quantity(parts[1]) if len(parts) > 1 and parts[1] else 1
    price = parse_amount(parts[2]) if len(parts) > 2 and parts[2] else default_price_per_gram
    mode = parse_tax_mode(parts[3]) if len(parts) > 3 else parse_tax_mode(None)
    tax_value = parse_amount(parts[4]) if len(parts) > 4 else 0.0
    provider_fee = parse_amount(parts[5]) if len(parts) > 5 else 0.0

    return LineItem(
        weight=weight,
        quantity=quantity,
        price_per_gram=price,
        tax=make_tax(mode, tax_value),
        provider_fee=provider_fee,
    )


def parse_bulk_text(text: str, default_price_per_gram: float) -> BulkParseResult:
    """Parse pasted lines, collecting bad lines instead of failing on them."""
    result = BulkParseResult()
    for number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith('#'):
            continue
        try:
            result.items.append(parse_line(line, default_price_per_gram))
        except ValueError as e:
            result.rejected.append(RejectedLine(line_number=number, text=line, reason=str(e)))
    return result
