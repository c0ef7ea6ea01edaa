# products/models/stock.py

"""
LIVE STOCK LEVEL

One row per (product, warehouse). quantity is the live value; it is
never recomputed from movement history.

Rules:
- quantity >= 0 (DB check)
- quantity is service-managed only (products.services.inventory),
  and every change appends a StockMovement
"""

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from .product import Product
from .warehouse import Warehouse


class Stock(models.Model):
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="stock_levels")
    warehouse = models.ForeignKey(Warehouse, on_delete=models.CASCADE, related_name="stock_levels")

    quantity = models.IntegerField(default=0)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["product__name", "warehouse__name"]
        constraints = [
            models.UniqueConstraint(fields=["product", "warehouse"], name="uniq_stock_product_warehouse"),
            models.CheckConstraint(condition=Q(quantity__gte=0), name="chk_stock_quantity_non_negative"),
        ]

    def __str__(self):
        return f"{self.product} @ {self.warehouse}: {self.quantity}"

    def clean(self):
        if self.quantity is None or self.quantity < 0:
            raise ValidationError({"quantity": "Stock quantity cannot be negative"})
        if (
            self.product_id
            and self.warehouse_id
            and self.product.company_id != self.warehouse.company_id
        ):
            raise ValidationError("Product and warehouse belong to different companies")
