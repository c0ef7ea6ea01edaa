# accounting/models/journal_line.py

"""
======================================================
PATH: accounting/models/journal_line.py
======================================================
JOURNAL ENTRY LINE

One side of a posting. Each line carries EXACTLY ONE of:
- (debit_account, debit_amount)
- (credit_account, credit_amount)

Guarantees:
- Immutable once created (no updates, no deletes)
- Amount is always positive
- line_number is 1-based display order within the entry
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from accounting.models.account import Account
from accounting.models.journal import JournalEntry

_DEBIT_ONLY = (
    Q(debit_account__isnull=False)
    & Q(debit_amount__gt=0)
    & Q(credit_account__isnull=True)
    & Q(credit_amount__isnull=True)
)
_CREDIT_ONLY = (
    Q(credit_account__isnull=False)
    & Q(credit_amount__gt=0)
    & Q(debit_account__isnull=True)
    & Q(debit_amount__isnull=True)
)


class JournalEntryLine(models.Model):
    journal_entry = models.ForeignKey(
        JournalEntry,
        on_delete=models.PROTECT,
        related_name="lines",
    )

    line_number = models.PositiveSmallIntegerField()

    debit_account = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="debit_lines",
    )
    debit_amount = models.DecimalField(max_digits=16, decimal_places=2, null=True, blank=True)

    credit_account = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="credit_lines",
    )
    credit_amount = models.DecimalField(max_digits=16, decimal_places=2, null=True, blank=True)

    memo = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        ordering = ["journal_entry", "line_number"]
        verbose_name = "Journal Entry Line"
        verbose_name_plural = "Journal Entry Lines"
        constraints = [
            models.UniqueConstraint(
                fields=["journal_entry", "line_number"],
                name="uniq_journal_line_number",
            ),
            models.CheckConstraint(
                condition=_DEBIT_ONLY | _CREDIT_ONLY,
                name="chk_journal_line_one_side",
            ),
            models.CheckConstraint(
                condition=Q(line_number__gte=1),
                name="chk_journal_line_number_positive",
            ),
        ]

    def __str__(self):
        return f"#{self.line_number} {self.side} {self.amount} -> {self.account}"

    @property
    def side(self) -> str:
        return Account.DEBIT if self.debit_account_id else Account.CREDIT

    @property
    def account(self) -> Account:
        return self.debit_account if self.debit_account_id else self.credit_account

    @property
    def amount(self) -> Decimal:
        return self.debit_amount if self.debit_account_id else self.credit_amount

    def clean(self):
        has_debit = self.debit_account_id is not None or self.debit_amount is not None
        has_credit = self.credit_account_id is not None or self.credit_amount is not None

        if has_debit and has_credit:
            raise ValidationError("A line cannot carry both a debit and a credit")
        if not has_debit and not has_credit:
            raise ValidationError("A line must carry either a debit or a credit")

        if has_debit and (self.debit_account_id is None or not self.debit_amount or self.debit_amount <= 0):
            raise ValidationError({"debit_amount": "Debit lines need an account and an amount > 0"})
        if has_credit and (self.credit_account_id is None or not self.credit_amount or self.credit_amount <= 0):
            raise ValidationError({"credit_amount": "Credit lines need an account and an amount > 0"})

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("JournalEntryLine records are immutable and cannot be modified")

        self.full_clean(validate_constraints=False)
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("JournalEntryLine records are immutable and cannot be deleted")
