# accounting/services/balance_service.py

"""
BALANCE & REPORTING HELPERS

Read-only aggregation over JournalEntryLine.

RULES:
- READ-ONLY: no writes, ever
- Journal lines are the single source of truth for reports
- Accounting timeline uses JournalEntry.entry_date
- Company-scoped: never mix tenants

Balance rule (natural side):
- Assets & Expenses             -> debits - credits
- Liabilities, Equity & Revenue -> credits - debits
"""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from django.db.models import Sum

from accounting.models.account import Account
from accounting.models.journal_line import JournalEntryLine

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def _q2(v) -> Decimal:
    return Decimal(str(v or "0.00")).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def natural_balance(account_type: str, debit, credit) -> Decimal:
    debit = _q2(debit)
    credit = _q2(credit)
    if account_type in Account.DEBIT_NORMAL_TYPES:
        return debit - credit
    return credit - debit


def natural_delta(account: Account, *, debit=ZERO, credit=ZERO) -> Decimal:
    """Change to current_balance caused by one debit and/or credit."""
    return natural_balance(account.account_type, debit, credit)


def _date_filters(prefix: str, *, start_date: date | None, end_date: date | None) -> dict:
    filters = {}
    if start_date is not None:
        filters[f"{prefix}__entry_date__gte"] = start_date
    if end_date is not None:
        filters[f"{prefix}__entry_date__lte"] = end_date
    return filters


def line_totals_by_account(
    company,
    *,
    start_date: date | None = None,
    end_date: date | None = None,
) -> dict[int, dict[str, Decimal]]:
    """
    {account_id: {"debit": Decimal, "credit": Decimal}} for the company's
    journal lines with entry_date in [start_date, end_date] (inclusive,
    either bound optional). Two grouped queries, no N+1.
    """
    date_filters = _date_filters("journal_entry", start_date=start_date, end_date=end_date)
    base = JournalEntryLine.objects.filter(journal_entry__company=company, **date_filters)

    totals: dict[int, dict[str, Decimal]] = {}

    debit_rows = (
        base.filter(debit_account__isnull=False)
        .values("debit_account_id")
        .annotate(total=Sum("debit_amount"))
    )
    for row in debit_rows:
        bucket = totals.setdefault(row["debit_account_id"], {"debit": ZERO, "credit": ZERO})
        bucket["debit"] = _q2(row["total"])

    credit_rows = (
        base.filter(credit_account__isnull=False)
        .values("credit_account_id")
        .annotate(total=Sum("credit_amount"))
    )
    for row in credit_rows:
        bucket = totals.setdefault(row["credit_account_id"], {"debit": ZERO, "credit": ZERO})
        bucket["credit"] = _q2(row["total"])

    return totals

