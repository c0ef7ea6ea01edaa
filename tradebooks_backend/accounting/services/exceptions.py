# accounting/services/exceptions.py

"""
ACCOUNTING SERVICE ERRORS

Centralized domain errors for accounting services.
All of them are DomainError subclasses, so the API layer maps them
to {"error": {...}} responses without per-view try/except.
"""

from __future__ import annotations

from rest_framework import status

from backend.exceptions import DomainError


class AccountingServiceError(DomainError):
    """Accounting operation failed."""

    code = "ACCOUNTING_ERROR"


class ImbalanceError(AccountingServiceError):
    """Debit and Credit must balance"""

    code = "IMBALANCE"


class JournalEntryCreationError(AccountingServiceError):
    """Journal entry input is invalid."""

    code = "JOURNAL_ENTRY_INVALID"


class DuplicateEntryError(AccountingServiceError):
    """A journal entry with this reference already exists."""

    code = "DUPLICATE_ENTRY"
    http_status = status.HTTP_409_CONFLICT


class MissingAccountError(AccountingServiceError):
    """
    Chart of accounts is incomplete for this posting.

    Configuration error: fix the chart (seed_chart_of_accounts), never retry.
    """

    code = "MISSING_ACCOUNT"
    http_status = status.HTTP_409_CONFLICT

    def __init__(self, codes, *, company=None, message: str = ""):
        self.codes = sorted(set(codes))
        company_label = f" for company '{company}'" if company is not None else ""
        super().__init__(
            message
            or (
                f"Missing or inactive account(s) {', '.join(self.codes)}{company_label}. "
                "Run seed_chart_of_accounts or create the accounts."
            ),
            details={"codes": self.codes},
        )
