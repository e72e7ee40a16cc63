"""
Data models for the pricing engine.

Uses frozen dataclasses so every edit produces a new object; totals are
always derived from the current items, never stored on them.
"""
import math
import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Union


class TaxMode(str, Enum):
    """How a line item's tax value is interpreted."""
    PERCENTAGE = "percentage"
    FIXED = "fixed"


@dataclass(frozen=True)
class PercentageTax:
    """Tax as percentage points of the gold value, applied per gram."""
    rate: float = 0.0

    def __post_init__(self):
        if not math.isfinite(self.rate) or self.rate < 0:
            raise ValueError(f"Tax rate must be a non-negative number, got {self.rate}")

    @property
    def mode(self) -> TaxMode:
        return TaxMode.PERCENTAGE

    @property
    def value(self) -> float:
        return self.rate


@dataclass(frozen=True)
class FixedTax:
    """Tax as a fixed currency amount per gram."""
    amount_per_gram: float = 0.0

    def __post_init__(self):
        if not math.isfinite(self.amount_per_gram) or self.amount_per_gram < 0:
            raise ValueError(f"Tax amount must be a non-negative number, got {self.amount_per_gram}")

    @property
    def mode(self) -> TaxMode:
        return TaxMode.FIXED

    @property
    def value(self) -> float:
        return self.amount_per_gram


Tax = Union[PercentageTax, FixedTax]


def make_tax(mode: TaxMode, value: float = 0.0) -> Tax:
    """Build the tax variant for a mode tag."""
    if TaxMode(mode) is TaxMode.FIXED:
        return FixedTax(amount_per_gram=value)
    return PercentageTax(rate=value)


def new_item_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class LineItem:
    """One batch of gold: weight per unit, how many units, and its price terms."""
    id: str = field(default_factory=new_item_id)
    weight: float = 0.0
    quantity: int = 1
    price_per_gram: float = 0.0
    tax: Tax = field(default_factory=PercentageTax)
    provider_fee: float = 0.0

    def __post_init__(self):
        if not self.id:
            raise ValueError("LineItem id must not be empty")
        for name in ('weight', 'price_per_gram', 'provider_fee'):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{name} must be a non-negative number, got {value}")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError(f"quantity must be an integer, got {self.quantity!r}")
        if self.quantity < 1:
            raise ValueError(f"quantity must be at least 1, got {self.quantity}")
        if not isinstance(self.tax, (PercentageTax, FixedTax)):
            raise ValueError(f"tax must be PercentageTax or FixedTax, got {self.tax!r}")

        from .pricing_engine import compute_item_total
        try:
            totals = compute_item_total(self)
        except OverflowError:
            totals = None
        if totals is None or not totals.is_finite:
            raise ValueError(
                f"Line item totals overflow: weight={self.weight}, quantity={self.quantity}, "
                f"price_per_gram={self.price_per_gram}"
            )

    @property
    def tax_mode(self) -> TaxMode:
        return self.tax.mode

    @property
    def tax_value(self) -> float:
        return self.tax.value

    def with_tax_mode(self, mode: TaxMode) -> 'LineItem':
        """Re-tag the tax, keeping the number the user typed."""
        return replace(self, tax=make_tax(mode, self.tax.value))

    def with_tax_value(self, value: float) -> 'LineItem':
        return replace(self, tax=make_tax(self.tax.mode, value))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "weight": self.weight,
            "quantity": self.quantity,
            "price_per_gram": self.price_per_gram,
            "tax_mode": self.tax_mode.value,
            "tax_value": self.tax_value,
            "provider_fee": self.provider_fee,
        }


@dataclass(frozen=True)
class Totals:
    """Subtotal, tax, provider fee and their sum, for one item or a whole collection."""
    subtotal: float = 0.0
    tax: float = 0.0
    provider_fee: float = 0.0
    total: float = 0.0

    @classmethod
    def zero(cls) -> 'Totals':
        return cls()

    @property
    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.subtotal, self.tax, self.provider_fee, self.total))

    def to_dict(self) -> dict:
        return {
            "subtotal": self.subtotal,
            "tax": self.tax,
            "provider_fee": self.provider_fee,
            "total": self.total,
        }


@dataclass
class TraceStep:
    """A single step in an item's price calculation trace."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass
class ItemBreakdown:
    """An item together with its computed totals and calculation trace."""
    item: LineItem
    weight_total: float
    totals: Totals
    trace: list[TraceStep] = field(default_factory=list)

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the trace for this item."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"→ {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"→ {t.step}: {t.description}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return {
            "item": self.item.to_dict(),
            "weight_total": self.weight_total,
            "totals": self.totals.to_dict(),
        }


@dataclass
class Result:
    """Complete result of a calculation over a collection of line items."""
    lines: list[ItemBreakdown]
    totals: Totals

    @property
    def item_count(self) -> int:
        return len(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def to_dict(self) -> dict:
        return {
            "item_count": self.item_count,
            "lines": [line.to_dict() for line in self.lines],
            "totals": self.totals.to_dict(),
        }
