# accounting/services/income_statement_service.py

"""
INCOME STATEMENT (PROFIT & LOSS)

For journal entries dated within [start_date, end_date]:
- revenue = credit lines on REVENUE accounts, per account
- expense = debit lines on EXPENSE accounts, per account
- net_profit = total_revenue - total_expense
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db.models import Sum

from accounting.models.account import Account
from accounting.models.journal_line import JournalEntryLine

ZERO = Decimal("0.00")


def _grouped(qs, *, account_field: str, amount_field: str) -> list[dict]:
    rows = (
        qs.values(
            f"{account_field}_id",
            f"{account_field}__code",
            f"{account_field}__name",
        )
        .annotate(total=Sum(amount_field))
        .order_by(f"{account_field}__code")
    )
    return [
        {
            "account_id": r[f"{account_field}_id"],
            "code": r[f"{account_field}__code"],
            "name": r[f"{account_field}__name"],
            "amount": r["total"] or ZERO,
        }
        for r in rows
    ]


def generate_income_statement(company, start_date: date, end_date: date) -> dict:
    company = getattr(company, "company", None) or company
    if start_date > end_date:
        raise ValidationError({"start_date": "start_date must be on or before end_date"})

    lines = JournalEntryLine.objects.filter(
        journal_entry__company=company,
        journal_entry__entry_date__gte=start_date,
        journal_entry__entry_date__lte=end_date,
    )

    revenue = _grouped(
        lines.filter(credit_account__account_type=Account.REVENUE),
        account_field="credit_account",
        amount_field="credit_amount",
    )
    expenses = _grouped(
        lines.filter(debit_account__account_type=Account.EXPENSE),
        account_field="debit_account",
        amount_field="debit_amount",
    )

    total_revenue = sum((r["amount"] for r in revenue), ZERO)
    total_expense = sum((r["amount"] for r in expenses), ZERO)

    return {
        "start_date": start_date,
        "end_date": end_date,
        "revenue": {"accounts": revenue, "total": total_revenue},
        "expenses": {"accounts": expenses, "total": total_expense},
        "net_profit": total_revenue - total_expense,
    }
