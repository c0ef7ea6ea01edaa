# companies/models/invoice_series.py

"""
======================================================
PATH: companies/models/invoice_series.py
======================================================
INVOICE SERIES

Per-company document counter (SI for sales invoices, PO for purchase orders).

Rules:
- (company, prefix) is unique
- next_number >= 1
- next_number is ONLY advanced by companies.services.numbering
  (row lock + F() increment inside the document transaction)
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from companies.models.company import Company


class InvoiceSeries(models.Model):
    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        related_name="invoice_series",
    )
    prefix = models.CharField(max_length=10)
    description = models.CharField(max_length=100, blank=True, default="")
    next_number = models.PositiveIntegerField(default=1)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["company", "prefix"]
        verbose_name = "Invoice Series"
        verbose_name_plural = "Invoice Series"
        constraints = [
            models.UniqueConstraint(
                fields=["company", "prefix"],
                name="uniq_series_company_prefix",
            ),
            models.CheckConstraint(
                condition=Q(next_number__gte=1),
                name="chk_series_next_number_positive",
            ),
        ]

    def __str__(self):
        return f"{self.prefix} (next {self.next_number})"

    def clean(self):
        self.prefix = (self.prefix or "").strip().upper()
        if not self.prefix:
            raise ValidationError({"prefix": "Series prefix is required"})
        if "-" in self.prefix:
            raise ValidationError({"prefix": "Series prefix cannot contain '-'"})
        if self.next_number is None or self.next_number < 1:
            raise ValidationError({"next_number": "next_number must be >= 1"})

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)
