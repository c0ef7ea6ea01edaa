# purchases/tests/test_purchases.py

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from accounting.models import Account, JournalEntry
from accounting.services.chart_seed import seed_standard_chart
from accounting.services.exceptions import MissingAccountError
from companies.models import InvoiceSeries
from companies.tests.factories import make_company, make_context, make_series, make_user
from products.models import Stock, StockMovement
from products.tests.factories import make_product, make_warehouse
from purchases.models import Purchase, Vendor
from purchases.services.purchase_service import create_purchase


class PurchaseServiceTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.user = make_user(company=self.company)
        self.ctx = make_context(self.company, self.user)
        self.series = make_series(self.company, "PO", next_number=1001)
        seed_standard_chart(self.company)

        self.warehouse = make_warehouse(self.company)
        self.desk = make_product(
            self.company,
            sku="DESK-001",
            name="Office Desk",
            selling_price=Decimal("800.00"),
            cost_price=Decimal("500.00"),
            reorder_level=3,
        )
        self.vendor = Vendor.objects.create(company=self.company, name="Global Supplies")

    def _buy(self, quantity=4, **kwargs):
        return create_purchase(
            context=self.ctx,
            vendor=self.vendor,
            warehouse=self.warehouse,
            items=[{"product": self.desk, "quantity": quantity}],
            **kwargs,
        )

    def _balance(self, code):
        return Account.objects.get(company=self.company, code=code).current_balance

    def test_purchase_posts_entry_and_receives_stock(self):
        purchase = self._buy()

        self.assertEqual(purchase.po_number, f"PO-{timezone.localdate().year}-001001")
        self.assertEqual(purchase.subtotal, Decimal("2000.00"))
        self.assertEqual(purchase.input_vat, Decimal("100.00"))
        self.assertEqual(purchase.total_amount, Decimal("2100.00"))

        entry = JournalEntry.objects.get(company=self.company)
        self.assertEqual(entry.reference_number, f"JE-PURCHASE-{purchase.po_number}")
        self.assertEqual(entry.entry_type, JournalEntry.EntryType.PURCHASE)

        self.assertEqual(self._balance("1020"), Decimal("2000.00"))
        self.assertEqual(self._balance("2200"), Decimal("100.00"))
        self.assertEqual(self._balance("2000"), Decimal("2100.00"))

        stock = Stock.objects.get(product=self.desk, warehouse=self.warehouse)
        self.assertEqual(stock.quantity, 4)
        movement = StockMovement.objects.get(product=self.desk)
        self.assertEqual(movement.movement_type, StockMovement.MovementType.IN)
        self.assertEqual(movement.reference, purchase.po_number)

    def test_unit_cost_override(self):
        purchase = create_purchase(
            context=self.ctx,
            vendor=self.vendor,
            warehouse=self.warehouse,
            items=[{"product": self.desk, "quantity": 2, "unit_cost": Decimal("450.00")}],
        )
        self.assertEqual(purchase.subtotal, Decimal("900.00"))
        self.assertEqual(purchase.items.get().unit_cost, Decimal("450.00"))

    def test_missing_account_rolls_back(self):
        Account.objects.filter(company=self.company, code="2200").delete()

        with self.assertRaises(MissingAccountError):
            self._buy()

        self.assertFalse(Purchase.objects.exists())
        self.assertFalse(Stock.objects.exists())
        self.assertEqual(InvoiceSeries.objects.get(pk=self.series.pk).next_number, 1001)

    def test_vendor_from_other_company_rejected(self):
        other = make_company("Other Co")
        foreign_vendor = Vendor.objects.create(company=other, name="Foreign Supplies")

        with self.assertRaises(ValidationError):
            create_purchase(
                context=self.ctx,
                vendor=foreign_vendor,
                warehouse=self.warehouse,
                items=[{"product": self.desk, "quantity": 1}],
            )

    def test_inactive_product_rejected(self):
        self.desk.is_active = False
        self.desk.save()

        with self.assertRaises(ValidationError):
            self._buy()

        self.assertFalse(Purchase.objects.exists())
        self.assertFalse(Stock.objects.exists())
        self.assertEqual(InvoiceSeries.objects.get(pk=self.series.pk).next_number, 1001)

    def test_purchase_status_cannot_be_changed(self):
        purchase = self._buy()
        purchase.status = Purchase.Status.CANCELLED
        with self.assertRaises(ValidationError):
            purchase.save()

        self.assertEqual(Purchase.objects.get(pk=purchase.pk).status, Purchase.Status.FINALIZED)
        self.assertEqual(Stock.objects.get(product=self.desk).quantity, 4)


class PurchaseApiTests(TestCase):
    def setUp(self):
        self.company = make_company()
        make_series(self.company, "PO")
        seed_standard_chart(self.company)
        self.user = make_user(company=self.company, perms=("purchases.add_purchase",))
        self.warehouse = make_warehouse(self.company)
        self.desk = make_product(self.company, sku="DESK-001", cost_price=Decimal("500.00"))
        self.vendor = Vendor.objects.create(company=self.company, name="Global Supplies")

        self.client = APIClient()
        self.client.force_authenticate(self.user)

    def test_create_list_and_detail(self):
        res = self.client.post(
            "/api/purchases/purchases/",
            {
                "vendor_id": self.vendor.pk,
                "warehouse_id": self.warehouse.pk,
                "items": [{"product_id": str(self.desk.pk), "quantity": 2}],
            },
            format="json",
        )
        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(Decimal(res.data["total_amount"]), Decimal("1050.00"))
        self.assertEqual(len(res.data["items"]), 1)

        listed = self.client.get("/api/purchases/purchases/", {"vendor_id": self.vendor.pk})
        self.assertEqual(len(listed.data), 1)

        detail = self.client.get(f"/api/purchases/purchases/{res.data['id']}/")
        self.assertEqual(detail.status_code, 200)
        self.assertEqual(detail.data["po_number"], res.data["po_number"])

    def test_vendor_create_requires_permission(self):
        res = self.client.post("/api/purchases/vendors/", {"name": "New Vendor"}, format="json")
        self.assertEqual(res.status_code, 403)
