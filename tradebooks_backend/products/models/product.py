# products/models/product.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q, Sum

from companies.models import Company

from .category import Category


class Product(models.Model):
    """
    Represents a sellable / purchasable product of one company.

    STOCK MODEL (IMPORTANT):
    - Product itself does NOT store stock
    - Stock lives in Stock rows, one per (product, warehouse)
    - Total stock = sum of Stock.quantity across warehouses

    PRICING:
    - selling_price is the default sale unit price
    - cost_price is the default purchase unit cost and the inventory valuation basis
    - reorder_level drives CRITICAL / WARNING / OK status
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        related_name="products",
    )

    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )

    sku = models.CharField(max_length=64, db_index=True)
    name = models.CharField(max_length=255, db_index=True)
    barcode = models.CharField(max_length=64, blank=True, default="")
    unit = models.CharField(max_length=20, default="pcs")

    selling_price = models.DecimalField(max_digits=12, decimal_places=2)
    cost_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    reorder_level = models.PositiveIntegerField(default=0)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(fields=["company", "sku"], name="uniq_product_company_sku"),
            models.CheckConstraint(condition=Q(selling_price__gte=0), name="chk_product_selling_price"),
            models.CheckConstraint(condition=Q(cost_price__gte=0), name="chk_product_cost_price"),
        ]

    def __str__(self):
        return f"{self.name} ({self.sku})"

    def clean(self):
        self.sku = (self.sku or "").strip().upper()
        self.name = (self.name or "").strip()

        if not self.sku:
            raise ValidationError({"sku": "SKU is required"})
        if not self.name:
            raise ValidationError({"name": "Product name is required"})

        if self.selling_price is None or Decimal(self.selling_price) < 0:
            raise ValidationError({"selling_price": "Selling price cannot be negative"})
        if self.cost_price is None or Decimal(self.cost_price) < 0:
            raise ValidationError({"cost_price": "Cost price cannot be negative"})

        if self.category_id and self.category.company_id != self.company_id:
            raise ValidationError({"category": "Category belongs to another company"})

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

    @property
    def total_stock(self) -> int:
        return self.stock_levels.aggregate(total=Sum("quantity")).get("total") or 0
