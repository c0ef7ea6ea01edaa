# companies/models/company.py

"""
======================================================
PATH: companies/models/company.py
======================================================
COMPANY (TENANT)

Every business record (accounts, products, stock, sales, purchases)
belongs to exactly one Company.

VAT:
- vat_rate is a percent (5.00 == 5%)
- when vat_enabled is False the effective rate is 0 and
  documents carry no output/input VAT
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q


def default_vat_rate() -> Decimal:
    return Decimal(str(getattr(settings, "DEFAULT_VAT_RATE", "5.00")))


def default_currency() -> str:
    return getattr(settings, "DEFAULT_CURRENCY", "AED")


class Company(models.Model):
    name = models.CharField(max_length=200)
    trn = models.CharField(
        max_length=30,
        blank=True,
        default="",
        help_text="Tax registration number",
    )
    currency = models.CharField(max_length=3, default=default_currency)

    vat_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=default_vat_rate,
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("100"))],
    )
    vat_enabled = models.BooleanField(default=True)

    address = models.TextField(blank=True, default="")
    phone = models.CharField(max_length=30, blank=True, default="")
    email = models.EmailField(blank=True, default="")

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        verbose_name = "Company"
        verbose_name_plural = "Companies"
        constraints = [
            models.CheckConstraint(
                condition=~Q(name=""),
                name="chk_company_name_not_blank",
            ),
            models.CheckConstraint(
                condition=Q(vat_rate__gte=0) & Q(vat_rate__lte=100),
                name="chk_company_vat_rate_range",
            ),
        ]

    def __str__(self):
        return self.name

    @property
    def effective_vat_rate(self) -> Decimal:
        if not self.vat_enabled:
            return Decimal("0")
        return Decimal(str(self.vat_rate or "0"))

    def clean(self):
        self.name = (self.name or "").strip()
        self.currency = (self.currency or "").strip().upper()

        if not self.name:
            raise ValidationError({"name": "Company name is required"})
        if len(self.currency) != 3:
            raise ValidationError({"currency": "Currency must be a 3-letter ISO code"})

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)
