# sales/tests/test_api.py

from decimal import Decimal

from django.test import TestCase
from rest_framework.test import APIClient

from accounting.models import JournalEntry
from accounting.services.chart_seed import seed_standard_chart
from companies.tests.factories import make_company, make_series, make_user
from products.tests.factories import make_product, make_warehouse, set_stock
from sales.models import Customer, Sale


class SalesApiTests(TestCase):
    def setUp(self):
        self.company = make_company()
        make_series(self.company, "SI", next_number=1001)
        seed_standard_chart(self.company)

        self.user = make_user(
            company=self.company,
            perms=("sales.add_sale", "sales.add_customer"),
        )
        self.warehouse = make_warehouse(self.company)
        self.laptop = make_product(self.company)
        set_stock(self.laptop, self.warehouse, 5)
        self.customer = Customer.objects.create(company=self.company, name="XYZ Trading")

        self.client = APIClient()
        self.client.force_authenticate(self.user)

    def _payload(self, **overrides):
        payload = {
            "customer_id": self.customer.pk,
            "warehouse_id": self.warehouse.pk,
            "items": [{"product_id": str(self.laptop.pk), "quantity": 1}],
            "paid_amount": "3675.00",
        }
        payload.update(overrides)
        return payload

    def test_create_sale(self):
        res = self.client.post("/api/sales/sales/", self._payload(), format="json")

        self.assertEqual(res.status_code, 201, res.data)
        self.assertTrue(res.data["invoice_number"].endswith("-001001"))
        self.assertEqual(Decimal(res.data["total_amount"]), Decimal("3675.00"))
        self.assertEqual(res.data["payment_status"], "PAID")
        self.assertEqual(len(res.data["items"]), 1)
        self.assertTrue(
            JournalEntry.objects.filter(reference_number=res.data["journal_reference"]).exists()
        )

    def test_client_totals_are_ignored(self):
        res = self.client.post(
            "/api/sales/sales/",
            self._payload(total_amount="1.00", output_vat="0.00"),
            format="json",
        )
        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(Decimal(res.data["output_vat"]), Decimal("175.00"))

    def test_insufficient_stock_returns_error_envelope(self):
        res = self.client.post(
            "/api/sales/sales/",
            self._payload(items=[{"product_id": str(self.laptop.pk), "quantity": 6}], paid_amount="0"),
            format="json",
        )

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "INSUFFICIENT_STOCK")
        self.assertFalse(Sale.objects.exists())

    def test_missing_series_is_not_found(self):
        other = make_company("No Series Co")
        user = make_user("other_user", company=other, perms=("sales.add_sale",))
        warehouse = make_warehouse(other)
        product = make_product(other, sku="X-1")
        set_stock(product, warehouse, 1)

        client = APIClient()
        client.force_authenticate(user)
        res = client.post(
            "/api/sales/sales/",
            {
                "warehouse_id": warehouse.pk,
                "items": [{"product_id": str(product.pk), "quantity": 1}],
            },
            format="json",
        )
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["error"]["code"], "NOT_FOUND")

    def test_unknown_product_rejected(self):
        foreign = make_product(make_company("Other Co"), sku="FOREIGN-1")
        res = self.client.post(
            "/api/sales/sales/",
            self._payload(items=[{"product_id": str(foreign.pk), "quantity": 1}]),
            format="json",
        )
        self.assertEqual(res.status_code, 400)

    def test_create_requires_permission(self):
        viewer = make_user("viewer", company=self.company)
        client = APIClient()
        client.force_authenticate(viewer)

        res = client.post("/api/sales/sales/", self._payload(), format="json")
        self.assertEqual(res.status_code, 403)

    def test_list_filter_and_detail(self):
        created = self.client.post("/api/sales/sales/", self._payload(), format="json")
        self.assertEqual(created.status_code, 201, created.data)

        listed = self.client.get("/api/sales/sales/", {"status": "finalized", "customer_id": self.customer.pk})
        self.assertEqual(listed.status_code, 200)
        self.assertEqual(len(listed.data), 1)

        cancelled = self.client.get("/api/sales/sales/", {"status": "CANCELLED"})
        self.assertEqual(cancelled.data, [])

        detail = self.client.get(f"/api/sales/sales/{created.data['id']}/")
        self.assertEqual(detail.status_code, 200)
        self.assertEqual(detail.data["invoice_number"], created.data["invoice_number"])

    def test_cart_preview_uses_company_vat_rate(self):
        res = self.client.post(
            "/api/sales/cart/preview/",
            {
                "items": [
                    {"product_id": str(self.laptop.pk), "quantity": 2},
                    {"product_id": str(self.laptop.pk), "quantity": 0},
                ],
                "discount_percent": "150",
            },
            format="json",
        )

        self.assertEqual(res.status_code, 200, res.data)
        self.assertEqual(Decimal(res.data["subtotal"]), Decimal("7000.00"))
        self.assertEqual(Decimal(res.data["discount_percent"]), Decimal("100.00"))
        self.assertEqual(Decimal(res.data["total"]), Decimal("0.00"))

    def test_customers_endpoint(self):
        res = self.client.post("/api/sales/customers/", {"name": "ABC Corporation"}, format="json")
        self.assertEqual(res.status_code, 201, res.data)

        listed = self.client.get("/api/sales/customers/")
        self.assertEqual([c["name"] for c in listed.data], ["ABC Corporation", "XYZ Trading"])
