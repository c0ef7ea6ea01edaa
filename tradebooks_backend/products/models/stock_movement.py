# products/models/stock_movement.py

"""
INVENTORY AUDIT LOG

Immutable record of every stock quantity change.

GUARANTEES:
- Append-only (no updates, no deletes)
- quantity is a signed, non-zero delta:
    IN          -> positive
    OUT         -> negative
    ADJUSTMENT  -> either sign, notes carry the reason
- reference points at the originating document (sale / purchase id)
"""

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from .product import Product
from .warehouse import Warehouse


class StockMovement(models.Model):
    class MovementType(models.TextChoices):
        IN = "IN", "Stock In"
        OUT = "OUT", "Stock Out"
        ADJUSTMENT = "ADJUSTMENT", "Adjustment"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="stock_movements")
    warehouse = models.ForeignKey(Warehouse, on_delete=models.CASCADE, related_name="stock_movements")

    movement_type = models.CharField(max_length=10, choices=MovementType.choices)
    quantity = models.IntegerField(help_text="Signed delta applied to Stock.quantity")

    reference = models.CharField(max_length=100, blank=True, default="")
    notes = models.TextField(blank=True, default="")

    performed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="stock_movements",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["product", "created_at"], name="mv_product_created_idx"),
            models.Index(fields=["reference"], name="mv_reference_idx"),
        ]
        constraints = [
            models.CheckConstraint(condition=~Q(quantity=0), name="chk_movement_quantity_non_zero"),
            models.CheckConstraint(
                condition=~Q(movement_type="IN") | Q(quantity__gt=0),
                name="chk_movement_in_positive",
            ),
            models.CheckConstraint(
                condition=~Q(movement_type="OUT") | Q(quantity__lt=0),
                name="chk_movement_out_negative",
            ),
        ]

    def __str__(self):
        return f"{self.movement_type} {self.quantity:+d} {self.product.sku}"

    def clean(self):
        if self.quantity is None or self.quantity == 0:
            raise ValidationError({"quantity": "quantity must be non-zero"})
        if self.movement_type == self.MovementType.IN and self.quantity < 0:
            raise ValidationError({"quantity": "IN movements must be positive"})
        if self.movement_type == self.MovementType.OUT and self.quantity > 0:
            raise ValidationError({"quantity": "OUT movements must be negative"})
        if self.movement_type == self.MovementType.ADJUSTMENT and not (self.notes or "").strip():
            raise ValidationError({"notes": "Adjustments require a reason"})

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("StockMovement records are immutable")
        self.full_clean(validate_constraints=False)
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("StockMovement records are immutable and cannot be deleted")
