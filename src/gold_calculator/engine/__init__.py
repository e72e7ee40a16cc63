"""Engine subpackage - core pricing logic and line item models."""
from .pricing_engine import PricingEngine, compute_item_total, compute_grand_total
from .models import LineItem, TaxMode, PercentageTax, FixedTax, Totals, Result

__all__ = [
    'PricingEngine', 'compute_item_total', 'compute_grand_total',
    'LineItem', 'TaxMode', 'PercentageTax', 'FixedTax', 'Totals', 'Result',
]
