# products/tests/test_products.py

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase

from companies.tests.factories import make_company
from products.models import Category, Product
from products.tests.factories import make_product


class ProductModelTests(TestCase):
    """
    Product model tests.

    GUARANTEES:
    - SKU is normalised and unique per company
    - Pricing is sane
    - Category must belong to the same company
    """

    def setUp(self):
        self.company = make_company()

    def test_sku_is_uppercased(self):
        product = make_product(self.company, sku="  lap-001 ")
        self.assertEqual(product.sku, "LAP-001")

    def test_sku_unique_per_company(self):
        make_product(self.company, sku="LAP-001")
        with self.assertRaises(ValidationError):
            make_product(self.company, sku="LAP-001", name="Laptop Duplicate")

    def test_same_sku_allowed_in_another_company(self):
        other = make_company("Other Co")
        make_product(self.company, sku="LAP-001")
        product = make_product(other, sku="LAP-001")
        self.assertEqual(product.company, other)

    def test_negative_price_rejected(self):
        with self.assertRaises(ValidationError):
            make_product(self.company, selling_price=Decimal("-1.00"))

    def test_category_from_other_company_rejected(self):
        other = make_company("Other Co")
        category = Category.objects.create(company=other, name="Electronics")
        with self.assertRaises(ValidationError):
            Product.objects.create(
                company=self.company,
                category=category,
                sku="DESK-001",
                name="Office Desk",
                selling_price=Decimal("800.00"),
            )

    def test_string_representation(self):
        product = make_product(self.company)
        self.assertIn("Laptop", str(product))
        self.assertIn("LAP-001", str(product))
