# products/tests/test_inventory.py

from datetime import timedelta
from decimal import Decimal
from unittest import mock

from django.core.exceptions import ValidationError
from django.db import IntegrityError
from django.db.models.query import QuerySet
from django.test import SimpleTestCase, TestCase
from django.utils import timezone

from backend.exceptions import NotFoundError
from companies.tests.factories import make_company, make_user
from products.models import Stock, StockMovement
from products.services import inventory
from products.services.inventory import (
    InsufficientStockError,
    adjust_stock,
    get_available_stock,
    get_inventory_report,
    get_low_stock_items,
    get_stock_movement_history,
    increase_stock_on_purchase,
    reduce_stock_on_sale,
    reorder_status,
)
from products.tests.factories import make_product, make_warehouse, set_stock


class ReorderStatusTests(SimpleTestCase):
    def test_critical_at_half_of_reorder_level(self):
        self.assertEqual(reorder_status(5, 10), inventory.CRITICAL)

    def test_warning_just_above_half(self):
        self.assertEqual(reorder_status(6, 10), inventory.WARNING)

    def test_warning_at_reorder_level(self):
        self.assertEqual(reorder_status(10, 10), inventory.WARNING)

    def test_ok_above_reorder_level(self):
        self.assertEqual(reorder_status(11, 10), inventory.OK)

    def test_odd_level_uses_exact_half(self):
        # 2.5 is the CRITICAL threshold for level 5
        self.assertEqual(reorder_status(2, 5), inventory.CRITICAL)
        self.assertEqual(reorder_status(3, 5), inventory.WARNING)

    def test_zero_level_zero_quantity_is_critical(self):
        self.assertEqual(reorder_status(0, 0), inventory.CRITICAL)
        self.assertEqual(reorder_status(1, 0), inventory.OK)


class InventoryMutationTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.user = make_user(company=self.company)
        self.warehouse = make_warehouse(self.company)
        self.product = make_product(self.company)

    def _stock(self):
        return Stock.objects.get(product=self.product, warehouse=self.warehouse).quantity

    def test_reduce_stock_decrements_and_logs_movement(self):
        set_stock(self.product, self.warehouse, 10)

        movement = reduce_stock_on_sale(
            product=self.product,
            warehouse=self.warehouse,
            quantity=4,
            reference="SI-2024-000001",
            user=self.user,
        )

        self.assertEqual(self._stock(), 6)
        self.assertEqual(movement.movement_type, StockMovement.MovementType.OUT)
        self.assertEqual(movement.quantity, -4)
        self.assertEqual(movement.reference, "SI-2024-000001")
        self.assertEqual(movement.performed_by, self.user)

    def test_reduce_stock_below_zero_rejected(self):
        set_stock(self.product, self.warehouse, 3)

        with self.assertRaises(InsufficientStockError) as ctx:
            reduce_stock_on_sale(product=self.product, warehouse=self.warehouse, quantity=4)

        self.assertEqual(ctx.exception.details["available"], 3)
        self.assertEqual(self._stock(), 3)
        self.assertFalse(StockMovement.objects.exists())

    def test_reduce_stock_without_row_is_not_found(self):
        with self.assertRaises(NotFoundError):
            reduce_stock_on_sale(product=self.product, warehouse=self.warehouse, quantity=1)

    def test_reduce_stock_requires_positive_quantity(self):
        set_stock(self.product, self.warehouse, 3)
        with self.assertRaises(ValidationError):
            reduce_stock_on_sale(product=self.product, warehouse=self.warehouse, quantity=0)

    def test_increase_stock_creates_row_when_missing(self):
        movement = increase_stock_on_purchase(
            product=self.product,
            warehouse=self.warehouse,
            quantity=7,
            reference="PO-2024-000001",
        )

        self.assertEqual(self._stock(), 7)
        self.assertEqual(movement.movement_type, StockMovement.MovementType.IN)
        self.assertEqual(movement.quantity, 7)

    def test_increase_stock_uses_row_created_concurrently(self):
        set_stock(self.product, self.warehouse, 5)

        with mock.patch.object(QuerySet, "get_or_create", side_effect=IntegrityError):
            increase_stock_on_purchase(product=self.product, warehouse=self.warehouse, quantity=2)

        self.assertEqual(self._stock(), 7)
        self.assertEqual(Stock.objects.filter(product=self.product).count(), 1)

    def test_adjust_stock_uses_row_created_concurrently(self):
        set_stock(self.product, self.warehouse, 5)

        with mock.patch.object(QuerySet, "get_or_create", side_effect=IntegrityError):
            adjust_stock(
                product=self.product,
                warehouse=self.warehouse,
                quantity_delta=-5,
                reason="Damaged",
            )

        self.assertEqual(self._stock(), 0)

    def test_cross_company_warehouse_rejected(self):
        other = make_company("Other Co")
        foreign_warehouse = make_warehouse(other)

        with self.assertRaises(ValidationError):
            increase_stock_on_purchase(
                product=self.product, warehouse=foreign_warehouse, quantity=1
            )

    def test_adjust_stock_both_directions(self):
        set_stock(self.product, self.warehouse, 5)

        adjust_stock(
            product=self.product,
            warehouse=self.warehouse,
            quantity_delta=3,
            reason="Stock count correction",
            user=self.user,
        )
        movement = adjust_stock(
            product=self.product,
            warehouse=self.warehouse,
            quantity_delta=-2,
            reason="Damaged",
            user=self.user,
        )

        self.assertEqual(self._stock(), 6)
        self.assertEqual(movement.movement_type, StockMovement.MovementType.ADJUSTMENT)
        self.assertEqual(movement.quantity, -2)
        self.assertEqual(movement.notes, "Damaged")

    def test_adjust_stock_requires_reason(self):
        set_stock(self.product, self.warehouse, 5)
        with self.assertRaises(ValidationError):
            adjust_stock(
                product=self.product,
                warehouse=self.warehouse,
                quantity_delta=1,
                reason="   ",
            )

    def test_adjust_stock_rejects_zero_delta(self):
        with self.assertRaises(ValidationError):
            adjust_stock(
                product=self.product,
                warehouse=self.warehouse,
                quantity_delta=0,
                reason="Count",
            )

    def test_adjust_stock_cannot_go_negative(self):
        set_stock(self.product, self.warehouse, 2)
        with self.assertRaises(InsufficientStockError):
            adjust_stock(
                product=self.product,
                warehouse=self.warehouse,
                quantity_delta=-3,
                reason="Shrinkage",
            )
        self.assertEqual(self._stock(), 2)

    def test_movements_are_immutable(self):
        movement = increase_stock_on_purchase(
            product=self.product, warehouse=self.warehouse, quantity=1
        )
        movement.notes = "edited"
        with self.assertRaises(ValidationError):
            movement.save()
        with self.assertRaises(ValidationError):
            movement.delete()


class InventoryReadTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.main = make_warehouse(self.company)
        self.backup = make_warehouse(self.company, name="Backup Store")
        self.laptop = make_product(self.company, reorder_level=5)
        self.desk = make_product(
            self.company,
            sku="DESK-001",
            name="Office Desk",
            selling_price=Decimal("800.00"),
            cost_price=Decimal("500.00"),
            reorder_level=3,
        )
        set_stock(self.laptop, self.main, 8)
        set_stock(self.laptop, self.backup, 2)
        set_stock(self.desk, self.main, 3)

    def test_available_stock_sums_warehouses(self):
        self.assertEqual(get_available_stock(self.laptop), 10)
        self.assertEqual(get_available_stock(self.laptop, self.backup), 2)

    def test_low_stock_items_skip_ok_rows(self):
        # laptop: 8 + 2 across warehouses is above its reorder level
        items = get_low_stock_items(self.company)
        statuses = {i["sku"]: i["status"] for i in items}

        self.assertEqual(statuses, {"DESK-001": inventory.WARNING})
        self.assertEqual(items[0]["total_quantity"], 3)
        self.assertEqual(items[0]["reorder_level"], 3)

    def test_low_stock_items_aggregate_per_product(self):
        make_product(self.company, sku="NOSTOCK", name="Never Stocked", reorder_level=10)
        split = make_product(self.company, sku="SPLIT", name="Split Stock", reorder_level=10)
        set_stock(split, self.main, 100)
        set_stock(split, self.backup, 1)

        items = {i["sku"]: i for i in get_low_stock_items(self.company)}

        self.assertEqual(items["NOSTOCK"]["status"], inventory.CRITICAL)
        self.assertEqual(items["NOSTOCK"]["total_quantity"], 0)
        self.assertNotIn("SPLIT", items)

    def test_low_stock_items_ignore_inactive_products(self):
        self.desk.is_active = False
        self.desk.save()

        self.assertEqual(get_low_stock_items(self.company), [])

    def test_inventory_report_values_stock_at_cost(self):
        rows = {r["sku"]: r for r in get_inventory_report(self.company)}

        self.assertEqual(rows["LAP-001"]["total_quantity"], 10)
        self.assertEqual(rows["LAP-001"]["stock_value"], Decimal("25000.00"))
        self.assertEqual(rows["LAP-001"]["status"], inventory.OK)
        self.assertEqual(rows["DESK-001"]["stock_value"], Decimal("1500.00"))
        self.assertEqual(rows["DESK-001"]["status"], inventory.REORDER)

    def test_movement_history_is_newest_first_and_date_filtered(self):
        first = increase_stock_on_purchase(product=self.laptop, warehouse=self.main, quantity=1)
        second = reduce_stock_on_sale(product=self.laptop, warehouse=self.main, quantity=1)

        history = list(get_stock_movement_history(self.laptop))
        self.assertEqual([m.pk for m in history], [second.pk, first.pk])

        tomorrow = timezone.localdate() + timedelta(days=1)
        self.assertEqual(list(get_stock_movement_history(self.laptop, start_date=tomorrow)), [])
