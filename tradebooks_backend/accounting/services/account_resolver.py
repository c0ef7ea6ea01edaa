# PATH: accounting/services/account_resolver.py

"""
PATH: accounting/services/account_resolver.py

ACCOUNT RESOLVER (AUTHORITATIVE)

This module answers ONE question:
"Which account should be used for this purpose?"

Semantic key -> account code, per company. Defaults below can be
overridden project-wide with settings.ACCOUNTING_ACCOUNT_CODES.

Design goals:
- deterministic
- company-safe (never crosses tenants)
- hard-fail on missing setup (so we don't post to wrong accounts),
  naming EVERY missing code in one error
"""

from __future__ import annotations

import logging

from django.conf import settings

from accounting.models.account import Account
from accounting.services.exceptions import MissingAccountError

logger = logging.getLogger(__name__)

CASH = "CASH"
INVENTORY = "INVENTORY"
ACCOUNTS_RECEIVABLE = "ACCOUNTS_RECEIVABLE"
ACCOUNTS_PAYABLE = "ACCOUNTS_PAYABLE"
VAT_PAYABLE = "VAT_PAYABLE"
VAT_RECOVERABLE = "VAT_RECOVERABLE"
SALES_REVENUE = "SALES_REVENUE"

DEFAULT_CODES = {
    CASH: "1010",
    INVENTORY: "1020",
    ACCOUNTS_RECEIVABLE: "1100",
    ACCOUNTS_PAYABLE: "2000",
    VAT_PAYABLE: "2100",
    VAT_RECOVERABLE: "2200",
    SALES_REVENUE: "4100",
}


def account_codes() -> dict[str, str]:
    codes = dict(DEFAULT_CODES)
    codes.update(getattr(settings, "ACCOUNTING_ACCOUNT_CODES", None) or {})
    return codes


def code_for(semantic_key: str) -> str:
    key = (semantic_key or "").strip().upper()
    code = (account_codes().get(key) or "").strip()
    if not code:
        raise KeyError(f"Unknown semantic account key '{semantic_key}'")
    return code


def resolve_accounts(company, keys) -> dict[str, Account]:
    """
    Resolve every semantic key to an ACTIVE account of `company`.

    Returns {semantic_key: Account}. Raises MissingAccountError listing all
    codes that are absent or inactive.
    """
    wanted = {key: code_for(key) for key in keys}

    found = {
        acc.code: acc
        for acc in Account.objects.filter(
            company=company,
            code__in=set(wanted.values()),
            is_active=True,
        )
    }

    missing = [code for code in wanted.values() if code not in found]
    if missing:
        logger.warning(
            "Account resolution failed for company=%s missing=%s",
            getattr(company, "pk", None),
            ",".join(sorted(set(missing))),
        )
        raise MissingAccountError(missing, company=company)

    return {key: found[code] for key, code in wanted.items()}


def get_account_by_code(company, code: str) -> Account:
    code = (code or "").strip()
    account = Account.objects.filter(company=company, code=code, is_active=True).first()
    if account is None:
        raise MissingAccountError([code], company=company)
    return account
