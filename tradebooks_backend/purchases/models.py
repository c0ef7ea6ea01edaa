# purchases/models.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q
from django.utils import timezone

from companies.models import Company
from products.models import Product, Warehouse

User = settings.AUTH_USER_MODEL


class Vendor(models.Model):
    """
    Vendor (supplier) master, one company.
    """

    company = models.ForeignKey(Company, on_delete=models.CASCADE, related_name="vendors")

    name = models.CharField(max_length=200)
    email = models.EmailField(blank=True, default="")
    phone = models.CharField(max_length=30, blank=True, default="")
    address = models.TextField(blank=True, default="")
    city = models.CharField(max_length=100, blank=True, default="")
    trn = models.CharField(max_length=30, blank=True, default="", help_text="Tax registration number")

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["company", "name"], name="vendor_company_name_idx"),
        ]

    def __str__(self):
        return self.name

    def clean(self):
        self.name = (self.name or "").strip()
        if not self.name:
            raise ValidationError({"name": "Vendor name is required"})

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)


class Purchase(models.Model):
    """
    Purchase order header (goods received on creation).

    Created ONLY via purchases.services.purchase_service.create_purchase:
    - PO number from the company series
    - totals derived server-side (company VAT rate = input VAT)
    - posts JE-PURCHASE-<po> and increases stock in the same transaction

    Status and financial fields are immutable (no void workflow).
    """

    class Status(models.TextChoices):
        FINALIZED = "FINALIZED", "Finalized"
        CANCELLED = "CANCELLED", "Cancelled"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    company = models.ForeignKey(Company, on_delete=models.PROTECT, related_name="purchases")

    po_number = models.CharField(max_length=64, help_text="System-generated PO number (PREFIX-YYYY-NNNNNN)")
    po_date = models.DateField(default=timezone.localdate)

    vendor = models.ForeignKey(Vendor, on_delete=models.PROTECT, related_name="purchases")
    warehouse = models.ForeignKey(Warehouse, on_delete=models.PROTECT, related_name="purchases")

    subtotal = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    discount_percent = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0.00"))
    discount_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    tax_inclusive = models.BooleanField(default=False)
    vat_rate = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0.00"))
    input_vat = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    total_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))

    status = models.CharField(max_length=20, choices=Status.choices, default=Status.FINALIZED)

    notes = models.TextField(blank=True, default="")

    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="purchases",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-po_date", "-created_at"]
        indexes = [
            models.Index(fields=["company", "po_date"], name="purchase_company_date_idx"),
            models.Index(fields=["status"], name="purchase_status_idx"),
        ]
        constraints = [
            models.UniqueConstraint(fields=["company", "po_number"], name="uniq_purchase_company_po"),
            models.CheckConstraint(condition=Q(total_amount__gte=0), name="chk_purchase_total_non_negative"),
        ]

    _IMMUTABLE_FIELDS = (
        "company_id",
        "po_number",
        "po_date",
        "vendor_id",
        "warehouse_id",
        "subtotal",
        "discount_percent",
        "discount_amount",
        "tax_inclusive",
        "vat_rate",
        "input_vat",
        "total_amount",
        "status",
    )

    def save(self, *args, **kwargs):
        if not self._state.adding:
            previous = Purchase.objects.filter(pk=self.pk).first()
            if previous is not None:
                for field in self._IMMUTABLE_FIELDS:
                    if getattr(self, field) != getattr(previous, field):
                        raise ValidationError(
                            f"Purchase is immutable. Field '{field}' cannot be changed."
                        )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Purchases are immutable and cannot be deleted")

    def __str__(self):
        return f"{self.po_number} | {self.total_amount}"


class PurchaseItem(models.Model):
    purchase = models.ForeignKey(Purchase, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name="purchase_items")

    quantity = models.PositiveIntegerField()
    unit_cost = models.DecimalField(max_digits=12, decimal_places=2)
    tax_rate = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0.00"))
    tax_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    line_total = models.DecimalField(max_digits=14, decimal_places=2)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(condition=Q(quantity__gt=0), name="chk_purchase_item_qty_positive"),
            models.CheckConstraint(condition=Q(unit_cost__gte=0), name="chk_purchase_item_cost"),
        ]

    def __str__(self):
        return f"{self.product} x {self.quantity}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("PurchaseItem records are immutable")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("PurchaseItem records are immutable and cannot be deleted")
