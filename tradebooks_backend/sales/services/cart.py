# sales/services/cart.py

"""
======================================================
PATH: sales/services/cart.py
======================================================
CART HELPERS (STATELESS)

A cart is a plain list of lines held by the client:

    [{"product_id": "...", "quantity": 2, "unit_price": Decimal("10.00")}]

- set_cart_quantity() returns a NEW list (input is not mutated)
- quantity <= 0 removes the line
- preview_cart() totals are advisory; create_sale re-derives everything
"""

from __future__ import annotations

from accounting.services.totals import DocumentTotals, compute_document_totals


def set_cart_quantity(lines, product_id, quantity, *, unit_price=None) -> list[dict]:
    key = str(product_id)
    quantity = int(quantity)

    updated: list[dict] = []
    found = False
    for line in lines or []:
        if str(line.get("product_id")) != key:
            updated.append(dict(line))
            continue

        found = True
        if quantity <= 0:
            continue
        new_line = dict(line, quantity=quantity)
        if unit_price is not None:
            new_line["unit_price"] = unit_price
        updated.append(new_line)

    if not found and quantity > 0:
        updated.append({"product_id": product_id, "quantity": quantity, "unit_price": unit_price})

    return updated


def preview_cart(lines, vat_rate, discount_percent=0, tax_inclusive: bool = False) -> DocumentTotals:
    return compute_document_totals(
        lines or [],
        vat_rate=vat_rate,
        discount_percent=discount_percent,
        tax_inclusive=tax_inclusive,
    )
