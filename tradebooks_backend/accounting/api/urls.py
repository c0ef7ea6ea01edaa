# accounting/api/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from accounting.api.views import (
    AccountListCreateView,
    IncomeStatementView,
    JournalEntryViewSet,
    ManualJournalEntryView,
    ReconciliationView,
    TotalsPreviewView,
    TrialBalanceView,
    VatSummaryView,
)

router = DefaultRouter()
router.register("journal-entries", JournalEntryViewSet, basename="journal-entry")

urlpatterns = [
    # Posting actions (before the router so "manual" is not read as a pk)
    path("journal-entries/manual/", ManualJournalEntryView.as_view(), name="journal-entry-manual"),
    # Router endpoints
    path("", include(router.urls)),
    # Master data
    path("accounts/", AccountListCreateView.as_view(), name="accounts"),
    # Reports
    path("reports/vat-summary/", VatSummaryView.as_view(), name="vat-summary"),
    path("reports/trial-balance/", TrialBalanceView.as_view(), name="trial-balance"),
    path("reports/income-statement/", IncomeStatementView.as_view(), name="income-statement"),
    path("reports/reconciliation/", ReconciliationView.as_view(), name="reconciliation"),
    # Advisory calculator
    path("calculator/totals/", TotalsPreviewView.as_view(), name="calculator-totals"),
]
