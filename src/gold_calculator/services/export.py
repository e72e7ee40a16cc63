"""
Export a calculation result as a table for display or CSV download.
"""
import pandas as pd

from ..engine.models import Result

EXPORT_COLUMNS = [
    'Item', 'Weight (g)', 'Quantity', 'Total Weight (g)', 'Price/g',
    'Tax Type', 'Tax Value', 'Subtotal', 'Tax', 'Provider Fee', 'Total',
]


def result_to_frame(result: Result) -> pd.DataFrame:
    """One row per line item, in display order."""
    rows = []
    for index, line in enumerate(result.lines, start=1):
        item = line.item
        rows.append({
            'Item': index,
            'Weight (g)': item.weight,
            'Quantity': item.quantity,
            'Total Weight (g)': line.weight_total,
            'Price/g': item.price_per_gram,
            'Tax Type': item.tax_mode.value,
            'Tax Value': item.tax_value,
            'Subtotal': round(line.totals.subtotal, 2),
            'Tax': round(line.totals.tax, 2),
            'Provider Fee': round(line.totals.provider_fee, 2),
            'Total': round(line.totals.total, 2),
        })
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def totals_row(result: Result) -> dict:
    return {
        'Subtotal': round(result.totals.subtotal, 2),
        'Tax': round(result.totals.tax, 2),
        'Provider Fee': round(result.totals.provider_fee, 2),
        'Total': round(result.totals.total, 2),
    }


def result_to_csv(result: Result, include_totals: bool = True) -> str:
    """CSV text of the breakdown, with a closing grand-total row."""
    df = result_to_frame(result)
    if include_totals and not df.empty:
        grand = {col: None for col in EXPORT_COLUMNS}
        grand.update(totals_row(result))
        grand['Item'] = 'TOTAL'
        df = pd.concat([df, pd.DataFrame([grand], columns=EXPORT_COLUMNS)], ignore_index=True)
    return df.to_csv(index=False)
