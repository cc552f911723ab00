from __future__ import annotations
from typing import Iterable

from quotecraft.models import ProductLineItem

INCHES_PER_FOOT = 12

def feet(whole_feet: float, inches: float) -> float:
    return float(whole_feet) + float(inches) / INCHES_PER_FOOT

def line_area(item: ProductLineItem) -> float:
    """Square footage of one line item."""
    return feet(item.length_feet, item.length_inches) * feet(item.width_feet, item.width_inches)

def line_total(item: ProductLineItem) -> float:
    return line_area(item) * float(item.price)

def compute_total(items: Iterable[ProductLineItem]) -> float:
    # unrounded; display rounding happens in price_quote / the UI
    return sum((line_total(it) for it in items), 0.0)

def sales_tax(subtotal: float, rate_percent: float, tax_exempt: bool = False) -> float:
    if tax_exempt:
        return 0.0
    return subtotal * float(rate_percent) / 100.0

def price_quote(items: Iterable[ProductLineItem], rate_percent: float = 0.0, tax_exempt: bool = False) -> dict:
    sub = compute_total(items)
    tax = sales_tax(sub, rate_percent, tax_exempt)
    return {"subtotal": round(sub, 2), "tax": round(tax, 2), "total": round(sub + tax, 2)}
