# products/tests/test_api.py

from decimal import Decimal

from django.test import TestCase
from rest_framework.test import APIClient

from companies.tests.factories import make_company, make_user
from products.models import Product, Stock
from products.tests.factories import make_product, make_warehouse, set_stock


class InventoryApiTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.other = make_company("Other Co")
        self.user = make_user(
            company=self.company,
            perms=("products.add_product", "products.change_stock"),
        )
        self.warehouse = make_warehouse(self.company)
        self.product = make_product(self.company)
        set_stock(self.product, self.warehouse, 4)

        make_product(self.other, sku="FOREIGN-1", name="Foreign item")

        self.client = APIClient()
        self.client.force_authenticate(self.user)

    def test_product_list_is_company_scoped(self):
        res = self.client.get("/api/products/products/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual([p["sku"] for p in res.data], ["LAP-001"])
        self.assertEqual(res.data[0]["total_stock"], 4)

    def test_create_product(self):
        res = self.client.post(
            "/api/products/products/",
            {
                "sku": "desk-001",
                "name": "Office Desk",
                "selling_price": "800.00",
                "cost_price": "500.00",
                "reorder_level": 3,
            },
            format="json",
        )

        self.assertEqual(res.status_code, 201, res.data)
        product = Product.objects.get(pk=res.data["id"])
        self.assertEqual(product.company, self.company)
        self.assertEqual(product.sku, "DESK-001")

    def test_duplicate_sku_rejected(self):
        res = self.client.post(
            "/api/products/products/",
            {"sku": "LAP-001", "name": "Laptop again", "selling_price": "1.00"},
            format="json",
        )
        self.assertEqual(res.status_code, 400)

    def test_create_product_requires_permission(self):
        viewer = make_user("viewer", company=self.company)
        client = APIClient()
        client.force_authenticate(viewer)

        res = client.post(
            "/api/products/products/",
            {"sku": "X-1", "name": "X", "selling_price": "1.00"},
            format="json",
        )
        self.assertEqual(res.status_code, 403)

    def test_adjust_stock_endpoint(self):
        res = self.client.post(
            "/api/products/stock/adjust/",
            {
                "product_id": str(self.product.pk),
                "warehouse_id": self.warehouse.pk,
                "quantity_delta": -1,
                "reason": "Damaged in transit",
            },
            format="json",
        )

        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["movement_type"], "ADJUSTMENT")
        self.assertEqual(
            Stock.objects.get(product=self.product, warehouse=self.warehouse).quantity, 3
        )

    def test_adjust_below_zero_returns_domain_error(self):
        res = self.client.post(
            "/api/products/stock/adjust/",
            {
                "product_id": str(self.product.pk),
                "warehouse_id": self.warehouse.pk,
                "quantity_delta": -10,
                "reason": "Shrinkage",
            },
            format="json",
        )

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "INSUFFICIENT_STOCK")

    def test_low_stock_and_inventory_report(self):
        low = self.client.get("/api/products/stock/low/")
        self.assertEqual(low.status_code, 200)
        self.assertEqual(low.data[0]["status"], "WARNING")
        self.assertEqual(low.data[0]["total_quantity"], 4)
        self.assertNotIn("warehouse_id", low.data[0])

        report = self.client.get("/api/products/reports/inventory/")
        self.assertEqual(report.status_code, 200)
        self.assertEqual(report.data[0]["status"], "REORDER")
        self.assertEqual(Decimal(report.data[0]["stock_value"]), Decimal("10000.00"))

    def test_stock_levels_for_one_product(self):
        backup = make_warehouse(self.company, name="Backup Store")
        set_stock(self.product, backup, 6)
        other = make_product(self.company, sku="DESK-001", name="Office Desk")
        set_stock(other, self.warehouse, 9)

        res = self.client.get("/api/products/stock/", {"product_id": str(self.product.pk)})

        self.assertEqual(res.status_code, 200)
        self.assertEqual(
            [(row["warehouse_name"], row["quantity"]) for row in res.data],
            [("Backup Store", 6), ("Main Warehouse", 4)],
        )

    def test_stock_levels_for_foreign_product_not_found(self):
        foreign = Product.objects.get(sku="FOREIGN-1")

        res = self.client.get("/api/products/stock/", {"product_id": str(foreign.pk)})
        self.assertEqual(res.status_code, 404)

    def test_movement_history_requires_product_id(self):
        res = self.client.get("/api/products/stock/movements/")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "VALIDATION_ERROR")
