# accounting/services/trial_balance_service.py

"""
TRIAL BALANCE + CACHED BALANCE RECONCILIATION

Trial balance is ALWAYS derived from journal lines, never from
Account.current_balance. Reconciliation compares the two; any mismatch
means something moved a balance outside the journal engine.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from django.utils import timezone

from accounting.models.account import Account
from accounting.services.balance_service import line_totals_by_account, natural_balance

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")

DR = "DR"
CR = "CR"


def _q2(amount) -> Decimal:
    return Decimal(str(amount or "0.00")).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _company_of(company_or_context):
    return getattr(company_or_context, "company", None) or company_or_context


class TrialBalanceService:
    """
    Trial Balance computation service.

    Guarantees:
    - Scopes to the given company
    - Scopes to ACTIVE accounts only (all of them, including untouched ones)
    - Uses JournalEntry.entry_date <= as_of_date as the timeline
    - Avoids N+1 queries by aggregating in bulk
    - balance = debit - credit; negative -> magnitude with side CR, else DR
    """

    def __init__(self, account_model=Account):
        self.Account = account_model

    def generate(self, *, company, as_of_date: date | None = None) -> dict:
        cutoff = as_of_date or timezone.localdate()

        accounts = list(
            self.Account.objects.filter(company=company, is_active=True)
            .only("id", "code", "name", "account_type")
            .order_by("code")
        )
        totals = line_totals_by_account(company, end_date=cutoff)

        rows = []
        total_debit = ZERO
        total_credit = ZERO

        for acc in accounts:
            bucket = totals.get(acc.id, {"debit": ZERO, "credit": ZERO})
            debit = _q2(bucket["debit"])
            credit = _q2(bucket["credit"])
            balance = debit - credit

            rows.append(
                {
                    "account_id": acc.id,
                    "code": acc.code,
                    "name": acc.name,
                    "account_type": acc.account_type,
                    "debit": debit,
                    "credit": credit,
                    "balance": abs(balance),
                    "side": CR if balance < 0 else DR,
                }
            )
            total_debit += debit
            total_credit += credit

        return {
            "as_of_date": cutoff,
            "accounts": rows,
            "totals": {
                "debit": total_debit,
                "credit": total_credit,
                "balanced": total_debit == total_credit,
            },
        }


def generate_trial_balance(company, as_of_date: date | None = None) -> dict:
    return TrialBalanceService().generate(
        company=_company_of(company),
        as_of_date=as_of_date,
    )


def reconcile_cached_balances(company) -> list[dict]:
    """
    Compare every account's cached current_balance with the balance derived
    from ALL its journal lines. Returns only the mismatches.
    """
    company = _company_of(company)
    totals = line_totals_by_account(company)

    mismatches = []
    for acc in Account.objects.filter(company=company).order_by("code"):
        bucket = totals.get(acc.id, {"debit": ZERO, "credit": ZERO})
        derived = natural_balance(acc.account_type, bucket["debit"], bucket["credit"])
        cached = _q2(acc.current_balance)
        if derived != cached:
            mismatches.append(
                {
                    "account_id": acc.id,
                    "code": acc.code,
                    "name": acc.name,
                    "cached_balance": cached,
                    "derived_balance": derived,
                    "difference": cached - derived,
                }
            )

    if mismatches:
        logger.warning(
            "Balance reconciliation found %s mismatch(es) for company=%s: %s",
            len(mismatches),
            company.pk,
            ",".join(m["code"] for m in mismatches),
        )
    return mismatches
