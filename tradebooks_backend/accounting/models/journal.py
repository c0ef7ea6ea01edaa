# accounting/models/journal.py

"""
======================================================
PATH: accounting/models/journal.py
======================================================
JOURNAL ENTRY MODEL

Represents a single accounting transaction (journal header).

Guarantees:
- Immutable once created (no updates, no deletes)
- reference_number is unique per company (JE-SALE-<invoice>, JE-PURCHASE-<po>)
- total_debit == total_credit (DB check constraint + engine check)
- entry_date is the accounting effective date (used by every report)
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import F, Q
from django.utils import timezone

from companies.models import Company


class JournalEntry(models.Model):
    class EntryType(models.TextChoices):
        SALE = "SALE", "Sale"
        PURCHASE = "PURCHASE", "Purchase"
        MANUAL = "MANUAL", "Manual"
        ADJUSTMENT = "ADJUSTMENT", "Adjustment"

    company = models.ForeignKey(
        Company,
        on_delete=models.PROTECT,
        related_name="journal_entries",
    )

    reference_number = models.CharField(max_length=100)

    entry_date = models.DateField(
        default=timezone.localdate,
        help_text="Accounting effective date",
    )

    entry_type = models.CharField(max_length=20, choices=EntryType.choices)

    description = models.TextField(help_text="Narrative description of the journal entry")

    total_debit = models.DecimalField(max_digits=16, decimal_places=2, default=Decimal("0.00"))
    total_credit = models.DecimalField(max_digits=16, decimal_places=2, default=Decimal("0.00"))

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="journal_entries",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-entry_date", "-created_at"]
        indexes = [
            models.Index(fields=["company", "entry_date"], name="je_company_date_idx"),
            models.Index(fields=["entry_type"], name="je_entry_type_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["company", "reference_number"],
                name="uniq_journal_company_reference",
            ),
            models.CheckConstraint(
                condition=Q(total_debit=F("total_credit")),
                name="chk_journal_balanced",
            ),
        ]
        verbose_name = "Journal Entry"
        verbose_name_plural = "Journal Entries"

    def __str__(self):
        return f"{self.reference_number} ({self.entry_date})"

    def clean(self):
        self.reference_number = (self.reference_number or "").strip()
        if not self.reference_number:
            raise ValidationError({"reference_number": "Reference number is required"})

        self.description = (self.description or "").strip()
        if not self.description:
            raise ValidationError({"description": "Journal entry description is required"})

        if self.total_debit != self.total_credit:
            raise ValidationError("Debit and Credit must balance")

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("JournalEntry records are immutable once created")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("JournalEntry records are immutable and cannot be deleted")
