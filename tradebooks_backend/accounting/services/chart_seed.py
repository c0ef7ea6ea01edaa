# accounting/services/chart_seed.py

"""
STANDARD CHART OF ACCOUNTS

Idempotent: re-running only creates missing accounts and repairs
name/type/active drift. Balances are never touched here.
"""

from __future__ import annotations

import logging

from django.db import transaction

from accounting.models.account import Account
from accounting.services import account_resolver as ar

logger = logging.getLogger(__name__)


def standard_chart() -> list[tuple[str, str, str]]:
    return [
        (ar.code_for(ar.CASH), "Cash", Account.ASSET),
        (ar.code_for(ar.INVENTORY), "Inventory", Account.ASSET),
        (ar.code_for(ar.ACCOUNTS_RECEIVABLE), "Accounts Receivable", Account.ASSET),
        (ar.code_for(ar.VAT_RECOVERABLE), "VAT Recoverable", Account.ASSET),
        (ar.code_for(ar.ACCOUNTS_PAYABLE), "Accounts Payable", Account.LIABILITY),
        (ar.code_for(ar.VAT_PAYABLE), "VAT Payable", Account.LIABILITY),
        ("3000", "Owner's Equity", Account.EQUITY),
        (ar.code_for(ar.SALES_REVENUE), "Sales Revenue", Account.REVENUE),
        ("5100", "Purchases", Account.EXPENSE),
        ("6000", "Operating Expenses", Account.EXPENSE),
    ]


@transaction.atomic
def seed_standard_chart(company) -> tuple[int, int]:
    created_count = 0
    updated_count = 0

    for code, name, account_type in standard_chart():
        acc, created = Account.objects.get_or_create(
            company=company,
            code=code,
            defaults={"name": name, "account_type": account_type, "is_active": True},
        )
        if created:
            created_count += 1
            continue

        needs_update = False
        if acc.name != name:
            acc.name = name
            needs_update = True
        if acc.account_type != account_type:
            acc.account_type = account_type
            needs_update = True
        if not acc.is_active:
            acc.is_active = True
            needs_update = True

        if needs_update:
            acc.save(update_fields=["name", "account_type", "is_active", "updated_at"])
            updated_count += 1

    logger.info(
        "Chart seeded for company=%s created=%s updated=%s",
        company.pk,
        created_count,
        updated_count,
    )
    return created_count, updated_count
