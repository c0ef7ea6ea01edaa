# accounting/api/serializers/__init__.py

from accounting.api.serializers.accounts import AccountCreateSerializer, AccountListSerializer
from accounting.api.serializers.journal_entries import (
    JournalEntryDetailSerializer,
    JournalEntryLineSerializer,
    JournalEntrySerializer,
    ManualJournalEntryInputSerializer,
)
from accounting.api.serializers.reports import (
    DocumentTotalsSerializer,
    IncomeStatementSerializer,
    ReconciliationMismatchSerializer,
    TotalsPreviewInputSerializer,
    TrialBalanceSerializer,
    VatSummarySerializer,
)

__all__ = [
    "AccountListSerializer",
    "AccountCreateSerializer",
    "JournalEntrySerializer",
    "JournalEntryDetailSerializer",
    "JournalEntryLineSerializer",
    "ManualJournalEntryInputSerializer",
    "VatSummarySerializer",
    "TrialBalanceSerializer",
    "IncomeStatementSerializer",
    "ReconciliationMismatchSerializer",
    "TotalsPreviewInputSerializer",
    "DocumentTotalsSerializer",
]
