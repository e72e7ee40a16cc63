"""
Pricing Engine - line item and grand total computation for gold purchases.

Tax is charged per gram of gold:
- percentage mode: weight_total × (rate / 100) × price_per_gram
- fixed mode:      weight_total × amount_per_gram

The provider fee is a flat amount added once per item. All functions are
pure; callers recompute on every change instead of caching totals.
"""
import math
from typing import Iterable

from .models import FixedTax, ItemBreakdown, LineItem, PercentageTax, Result, Totals


def weight_total(item: LineItem) -> float:
    """Total grams in the item (weight per unit × quantity)."""
    return item.weight * item.quantity


def compute_tax(item: LineItem) -> float:
    """Tax for one item, charged on its total weight."""
    grams = weight_total(item)
    tax = item.tax
    if isinstance(tax, FixedTax):
        return grams * tax.amount_per_gram
    if isinstance(tax, PercentageTax):
        return grams * (tax.rate / 100) * item.price_per_gram
    raise TypeError(f"Unknown tax variant: {tax!r}")


def compute_item_total(item: LineItem) -> Totals:
    """Subtotal, tax, provider fee and total for a single line item."""
    subtotal = weight_total(item) * item.price_per_gram
    tax = compute_tax(item)
    return Totals(
        subtotal=subtotal,
        tax=tax,
        provider_fee=item.provider_fee,
        total=subtotal + tax + item.provider_fee,
    )


def compute_grand_total(items: Iterable[LineItem]) -> Totals:
    """
    Sum item totals across a collection.

    Components are summed with math.fsum, which is exactly rounded, so the
    result does not depend on item order. An empty collection is all zeros.
    """
    item_totals = [compute_item_total(item) for item in items]
    if not item_totals:
        return Totals.zero()

    subtotal = math.fsum(t.subtotal for t in item_totals)
    tax = math.fsum(t.tax for t in item_totals)
    provider_fee = math.fsum(t.provider_fee for t in item_totals)
    return Totals(
        subtotal=subtotal,
        tax=tax,
        provider_fee=provider_fee,
        total=subtotal + tax + provider_fee,
    )


def breakdown_item(item: LineItem, currency: str = "$") -> ItemBreakdown:
    """Compute an item's totals and record how each figure was reached."""
    grams = weight_total(item)
    totals = compute_item_total(item)
    line = ItemBreakdown(item=item, weight_total=grams, totals=totals)

    line.add_trace("Weight", f"{item.weight:g} g × {item.quantity}", f"{grams:g} g")
    line.add_trace(
        "Subtotal",
        f"{grams:g} g × {currency}{item.price_per_gram:,.2f}/g",
        f"{currency}{totals.subtotal:,.2f}",
    )
    if isinstance(item.tax, FixedTax):
        line.add_trace(
            "Tax",
            f"{grams:g} g × {currency}{item.tax.amount_per_gram:,.2f}/g",
            f"{currency}{totals.tax:,.2f}",
        )
    else:
        line.add_trace(
            "Tax",
            f"{grams:g} g × {item.tax.rate:g}% × {currency}{item.price_per_gram:,.2f}/g",
            f"{currency}{totals.tax:,.2f}",
        )
    if item.provider_fee:
        line.add_trace("Provider Fee", "Flat fee, once per item", f"{currency}{item.provider_fee:,.2f}")
    line.add_trace("Total", "Subtotal + Tax + Provider Fee", f"{currency}{totals.total:,.2f}")
    return line


class PricingEngine:
    """
    Stateless facade over the pricing functions.

    Resolution per item:
    1. weight_total = weight × quantity
    2. subtotal = weight_total × price_per_gram
    3. tax per the item's tax mode, on weight_total
    4. total = subtotal + tax + provider_fee
    Grand totals are the exactly-rounded sums of the item components.
    """

    def __init__(self, currency: str = "$"):
        self.currency = currency

    def calculate_item(self, item: LineItem) -> Totals:
        return compute_item_total(item)

    def calculate(self, items: Iterable[LineItem]) -> Result:
        """
        Calculate per-item breakdowns and grand totals.

        Args:
            items: Line items in display order

        Returns:
            Result with one ItemBreakdown per item and the grand Totals
        """
        items = list(items)
        lines = [breakdown_item(item, self.currency) for item in items]
        return Result(lines=lines, totals=compute_grand_total(items))
