# sales/tests/test_cart.py

from decimal import Decimal

from django.test import SimpleTestCase

from sales.services.cart import preview_cart, set_cart_quantity


class CartHelperTests(SimpleTestCase):
    def setUp(self):
        self.lines = [
            {"product_id": "a", "quantity": 1, "unit_price": Decimal("100.00")},
            {"product_id": "b", "quantity": 2, "unit_price": Decimal("50.00")},
        ]

    def test_update_existing_line(self):
        updated = set_cart_quantity(self.lines, "a", 3)
        self.assertEqual(updated[0]["quantity"], 3)
        # input untouched
        self.assertEqual(self.lines[0]["quantity"], 1)

    def test_zero_or_negative_quantity_removes_line(self):
        self.assertEqual([l["product_id"] for l in set_cart_quantity(self.lines, "a", 0)], ["b"])
        self.assertEqual([l["product_id"] for l in set_cart_quantity(self.lines, "b", -1)], ["a"])

    def test_new_product_is_appended(self):
        updated = set_cart_quantity(self.lines, "c", 1, unit_price=Decimal("5.00"))
        self.assertEqual(updated[-1], {"product_id": "c", "quantity": 1, "unit_price": Decimal("5.00")})

    def test_preview_totals(self):
        totals = preview_cart(self.lines, Decimal("5"))

        self.assertEqual(totals.subtotal, Decimal("200.00"))
        self.assertEqual(totals.vat_amount, Decimal("10.00"))
        self.assertEqual(totals.total, Decimal("210.00"))

    def test_preview_empty_cart(self):
        totals = preview_cart([], Decimal("5"))
        self.assertEqual(totals.total, Decimal("0"))
