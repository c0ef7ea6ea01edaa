# products/services/inventory.py

"""
======================================================
PATH: products/services/inventory.py
======================================================
INVENTORY CORE SERVICES

Purpose:
- The ONLY code that changes Stock.quantity.
- Every change appends an immutable StockMovement in the same transaction.
- Read helpers for stock levels, low-stock alerts, history and valuation.

Rules:
- Quantities are integer units.
- Stock rows are row-locked (select_for_update) before any change.
- Stock never goes below zero: InsufficientStockError instead.

Reorder status (pure):
    CRITICAL  quantity <= reorder_level * 0.5
    WARNING   quantity <= reorder_level
    OK        otherwise
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import F, Sum

from backend.exceptions import DomainError, NotFoundError
from products.models import Product, Stock, StockMovement, Warehouse

logger = logging.getLogger(__name__)

CRITICAL = "CRITICAL"
WARNING = "WARNING"
OK = "OK"

REORDER = "REORDER"

HALF = Decimal("0.5")


class InsufficientStockError(DomainError):
    """Not enough stock for this operation."""

    code = "INSUFFICIENT_STOCK"


def _to_int(value, *, field_name="quantity") -> int:
    if value is None or value == "":
        raise ValidationError({field_name: f"{field_name} is required"})
    if isinstance(value, bool):
        raise ValidationError({field_name: f"{field_name} must be an integer"})
    if isinstance(value, (Decimal, float)) and value != int(value):
        raise ValidationError({field_name: f"{field_name} must be a whole number"})
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError({field_name: f"{field_name} must be an integer"})


def _to_positive_int(value, *, field_name="quantity") -> int:
    qty = _to_int(value, field_name=field_name)
    if qty <= 0:
        raise ValidationError({field_name: f"{field_name} must be greater than zero"})
    return qty


def _check_same_company(product: Product, warehouse: Warehouse) -> None:
    if product.company_id != warehouse.company_id:
        raise ValidationError("Product and warehouse belong to different companies")


def _user_or_none(user):
    return user if getattr(user, "pk", None) else None


# ------------------------------------------------------------
# REORDER STATUS (PURE)
# ------------------------------------------------------------


def reorder_status(quantity, reorder_level) -> str:
    qty = Decimal(str(quantity or 0))
    level = Decimal(str(reorder_level or 0))

    if qty <= level * HALF:
        return CRITICAL
    if qty <= level:
        return WARNING
    return OK


# ------------------------------------------------------------
# MUTATIONS
# ------------------------------------------------------------


@transaction.atomic
def reduce_stock_on_sale(
    *,
    product: Product,
    warehouse: Warehouse,
    quantity,
    reference: str = "",
    user=None,
) -> StockMovement:
    qty = _to_positive_int(quantity)
    _check_same_company(product, warehouse)

    stock = (
        Stock.objects.select_for_update()
        .filter(product=product, warehouse=warehouse)
        .first()
    )
    if stock is None:
        raise NotFoundError(
            f"No stock record for {product.sku} in {warehouse.name}",
            details={"product_id": str(product.pk), "warehouse_id": warehouse.pk},
        )

    if stock.quantity < qty:
        raise InsufficientStockError(
            f"Insufficient stock for {product.sku}: available {stock.quantity}, requested {qty}",
            details={
                "product_id": str(product.pk),
                "available": stock.quantity,
                "requested": qty,
            },
        )

    Stock.objects.filter(pk=stock.pk).update(quantity=F("quantity") - qty)

    return StockMovement.objects.create(
        product=product,
        warehouse=warehouse,
        movement_type=StockMovement.MovementType.OUT,
        quantity=-qty,
        reference=str(reference or ""),
        performed_by=_user_or_none(user),
    )


def _lock_stock_row(product: Product, warehouse: Warehouse) -> Stock:
    """Row-locked Stock for (product, warehouse), created at zero when missing."""
    try:
        with transaction.atomic():
            stock, _ = Stock.objects.select_for_update().get_or_create(
                product=product,
                warehouse=warehouse,
                defaults={"quantity": 0},
            )
    except IntegrityError:
        # another transaction inserted the row first
        stock = Stock.objects.select_for_update().get(product=product, warehouse=warehouse)
    return stock


@transaction.atomic
def increase_stock_on_purchase(
    *,
    product: Product,
    warehouse: Warehouse,
    quantity,
    reference: str = "",
    user=None,
) -> StockMovement:
    qty = _to_positive_int(quantity)
    _check_same_company(product, warehouse)

    stock = _lock_stock_row(product, warehouse)
    Stock.objects.filter(pk=stock.pk).update(quantity=F("quantity") + qty)

    return StockMovement.objects.create(
        product=product,
        warehouse=warehouse,
        movement_type=StockMovement.MovementType.IN,
        quantity=qty,
        reference=str(reference or ""),
        performed_by=_user_or_none(user),
    )


@transaction.atomic
def adjust_stock(
    *,
    product: Product,
    warehouse: Warehouse,
    quantity_delta,
    reason: str,
    user=None,
) -> StockMovement:
    """
    quantity_delta:
      +N -> adds to stock
      -N -> removes from stock (never below zero)
    """
    delta = _to_int(quantity_delta, field_name="quantity_delta")
    if delta == 0:
        raise ValidationError({"quantity_delta": "quantity_delta cannot be 0"})

    reason = (reason or "").strip()
    if not reason:
        raise ValidationError({"reason": "An adjustment reason is required"})

    _check_same_company(product, warehouse)

    stock = _lock_stock_row(product, warehouse)

    if stock.quantity + delta < 0:
        raise InsufficientStockError(
            f"Cannot reduce stock below zero. Available: {stock.quantity}, requested: {abs(delta)}",
            details={
                "product_id": str(product.pk),
                "available": stock.quantity,
                "requested": abs(delta),
            },
        )

    Stock.objects.filter(pk=stock.pk).update(quantity=F("quantity") + delta)

    movement = StockMovement.objects.create(
        product=product,
        warehouse=warehouse,
        movement_type=StockMovement.MovementType.ADJUSTMENT,
        quantity=delta,
        notes=reason,
        performed_by=_user_or_none(user),
    )

    logger.info(
        "Stock adjusted sku=%s warehouse=%s delta=%+d reason=%s",
        product.sku,
        warehouse.pk,
        delta,
        reason,
    )
    return movement


# ------------------------------------------------------------
# READS
# ------------------------------------------------------------


def get_stock_by_product(product: Product):
    return (
        Stock.objects.filter(product=product)
        .select_related("product", "warehouse")
        .order_by("warehouse__name")
    )


def get_available_stock(product: Product, warehouse: Warehouse | None = None) -> int:
    qs = Stock.objects.filter(product=product)
    if warehouse is not None:
        qs = qs.filter(warehouse=warehouse)
    return qs.aggregate(total=Sum("quantity")).get("total") or 0


def get_low_stock_items(company) -> list[dict]:
    """
    Active products whose total stock across warehouses is CRITICAL or
    WARNING. Products with no stock rows count as zero.
    """
    products = (
        Product.objects.filter(company=company, is_active=True)
        .annotate(total=Sum("stock_levels__quantity"))
        .order_by("name")
    )

    items = []
    for product in products:
        total = product.total or 0
        status = reorder_status(total, product.reorder_level)
        if status == OK:
            continue
        items.append(
            {
                "product_id": product.pk,
                "sku": product.sku,
                "name": product.name,
                "total_quantity": total,
                "reorder_level": product.reorder_level,
                "status": status,
            }
        )
    return items


def get_stock_movement_history(
    product: Product,
    start_date: date | None = None,
    end_date: date | None = None,
):
    qs = StockMovement.objects.filter(product=product).select_related(
        "warehouse", "performed_by"
    )
    if start_date is not None:
        qs = qs.filter(created_at__date__gte=start_date)
    if end_date is not None:
        qs = qs.filter(created_at__date__lte=end_date)
    return qs.order_by("-created_at")


def get_inventory_report(company) -> list[dict]:
    """Per product: total quantity, stock value at cost, REORDER/OK."""
    products = (
        Product.objects.filter(company=company, is_active=True)
        .annotate(total_quantity=Sum("stock_levels__quantity"))
        .order_by("name")
    )

    report = []
    for product in products:
        qty = product.total_quantity or 0
        report.append(
            {
                "product_id": product.pk,
                "sku": product.sku,
                "name": product.name,
                "total_quantity": qty,
                "reorder_level": product.reorder_level,
                "cost_price": product.cost_price,
                "stock_value": Decimal(qty) * product.cost_price,
                "status": REORDER if qty <= product.reorder_level else OK,
            }
        )
    return report


def get_company_products(company, product_ids) -> dict:
    """{str(id): Product} for the requested ids; unknown ids -> ValidationError."""
    wanted = {str(pid) for pid in product_ids}
    found = {
        str(p.pk): p
        for p in Product.objects.filter(company=company, pk__in=wanted)
    }
    missing = sorted(wanted - set(found))
    if missing:
        raise ValidationError({"items": f"Unknown product(s): {', '.join(missing)}"})
    return found
