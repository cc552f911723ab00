import pytest

from quotecraft.models import ProductLineItem
from quotecraft.pricing import compute_total, line_area, line_total, price_quote, sales_tax


def item(lf, li, wf, wi, price, desc="Glass"):
    return ProductLineItem(product_description=desc, length_feet=lf, length_inches=li,
                           width_feet=wf, width_inches=wi, price=price)


def test_empty_list_is_zero():
    assert compute_total([]) == 0


def test_feet_and_inches_to_area():
    assert line_area(item(3, 0, 2, 6, 1)) == pytest.approx(7.5)
    assert line_area(item(0, 6, 0, 6, 1)) == pytest.approx(0.25)


def test_single_item_total():
    assert compute_total([item(3, 0, 2, 6, 4.0)]) == pytest.approx(30.0)


def test_total_matches_sum_formula():
    items = [item(3, 4, 2, 1, 12.5), item(1, 11, 5, 0, 7.25), item(0, 0, 9, 9, 3.0)]
    expected = sum(
        (it.length_feet + it.length_inches / 12) * (it.width_feet + it.width_inches / 12) * it.price
        for it in items
    )
    assert compute_total(items) == pytest.approx(expected)
    assert compute_total(items) == pytest.approx(sum(line_total(it) for it in items))


def test_total_is_not_rounded():
    total = compute_total([item(1, 1, 1, 1, 1.0)])
    assert total == pytest.approx((13 / 12) ** 2)
    assert total != round(total, 2)


def test_sales_tax_and_exempt():
    assert sales_tax(100.0, 8.25) == pytest.approx(8.25)
    assert sales_tax(100.0, 8.25, tax_exempt=True) == 0.0


def test_price_quote_rounds_for_display():
    priced = price_quote([item(3, 0, 2, 6, 4.0)], 10.0)
    assert priced == {"subtotal": 30.0, "tax": 3.0, "total": 33.0}
    assert price_quote([item(1, 1, 1, 1, 1.0)], 0.0)["subtotal"] == 1.17
    assert price_quote([], 8.25) == {"subtotal": 0.0, "tax": 0.0, "total": 0.0}
