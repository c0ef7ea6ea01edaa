# accounting/api/views/__init__.py

"""
accounting.api.views package

Do NOT import accounting.api.urls from here to avoid circular imports.
"""

from accounting.api.views.accounts import AccountListCreateView
from accounting.api.views.calculator import TotalsPreviewView
from accounting.api.views.journal_entries import JournalEntryViewSet, ManualJournalEntryView
from accounting.api.views.reports import (
    IncomeStatementView,
    ReconciliationView,
    TrialBalanceView,
    VatSummaryView,
)

__all__ = [
    "AccountListCreateView",
    "JournalEntryViewSet",
    "ManualJournalEntryView",
    "VatSummaryView",
    "TrialBalanceView",
    "IncomeStatementView",
    "ReconciliationView",
    "TotalsPreviewView",
]
