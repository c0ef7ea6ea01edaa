# sales/models/sale.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import F, Q
from django.utils import timezone

from companies.models import Company
from products.models import Warehouse

from .customer import Customer

User = settings.AUTH_USER_MODEL


class Sale(models.Model):
    """
    Represents a finalized sales invoice.

    GUARANTEES:
    - Immutable financial record once created
    - Created ONLY via sales.services.sale_service.create_sale
      (numbering, totals, journal posting and stock in one transaction)
    - Safe for accounting, VAT reporting and audits

    There is no void workflow: status and financial fields are fixed at
    creation.
    """

    class Status(models.TextChoices):
        FINALIZED = "FINALIZED", "Finalized"
        CANCELLED = "CANCELLED", "Cancelled"

    class PaymentStatus(models.TextChoices):
        UNPAID = "UNPAID", "Unpaid"
        PARTIAL = "PARTIAL", "Partially paid"
        PAID = "PAID", "Paid"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    company = models.ForeignKey(Company, on_delete=models.PROTECT, related_name="sales")

    invoice_number = models.CharField(
        max_length=64,
        help_text="System-generated invoice number (PREFIX-YYYY-NNNNNN)",
    )
    invoice_date = models.DateField(default=timezone.localdate)

    customer = models.ForeignKey(
        Customer,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="sales",
        help_text="Empty for walk-in cash sales",
    )
    warehouse = models.ForeignKey(Warehouse, on_delete=models.PROTECT, related_name="sales")

    subtotal = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    discount_percent = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0.00"))
    discount_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    tax_inclusive = models.BooleanField(default=False)
    vat_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Company VAT rate applied at creation",
    )
    output_vat = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    total_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    paid_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))

    status = models.CharField(max_length=20, choices=Status.choices, default=Status.FINALIZED)
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.UNPAID,
    )

    notes = models.TextField(blank=True, default="")

    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="sales",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-invoice_date", "-created_at"]
        indexes = [
            models.Index(fields=["company", "invoice_date"], name="sale_company_date_idx"),
            models.Index(fields=["status"], name="sale_status_idx"),
        ]
        constraints = [
            models.UniqueConstraint(fields=["company", "invoice_number"], name="uniq_sale_company_invoice"),
            models.CheckConstraint(condition=Q(paid_amount__gte=0), name="chk_sale_paid_non_negative"),
            models.CheckConstraint(
                condition=Q(paid_amount__lte=F("total_amount")),
                name="chk_sale_paid_lte_total",
            ),
        ]

    _IMMUTABLE_FIELDS = (
        "company_id",
        "invoice_number",
        "invoice_date",
        "customer_id",
        "warehouse_id",
        "subtotal",
        "discount_percent",
        "discount_amount",
        "tax_inclusive",
        "vat_rate",
        "output_vat",
        "total_amount",
        "paid_amount",
        "status",
    )

    @classmethod
    def payment_status_for(cls, total, paid) -> str:
        if paid >= total:
            return cls.PaymentStatus.PAID
        if paid > 0:
            return cls.PaymentStatus.PARTIAL
        return cls.PaymentStatus.UNPAID

    def _validate_immutable(self, previous: "Sale"):
        for field in self._IMMUTABLE_FIELDS:
            if getattr(self, field) != getattr(previous, field):
                raise ValidationError(f"Sale is immutable. Field '{field}' cannot be changed.")

    def save(self, *args, **kwargs):
        if not self._state.adding:
            previous = Sale.objects.filter(pk=self.pk).first()
            if previous is not None:
                self._validate_immutable(previous)
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Sales are immutable and cannot be deleted")

    def __str__(self):
        return f"{self.invoice_number} | {self.total_amount}"
