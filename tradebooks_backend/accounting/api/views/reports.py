# accounting/api/views/reports.py

"""
PATH: accounting/api/views/reports.py

ACCOUNTING REPORTS (READ-ONLY)

GET reports/vat-summary/?start_date&end_date
GET reports/trial-balance/?as_of_date          (default: today)
GET reports/income-statement/?start_date&end_date
GET reports/reconciliation/                     (cached vs derived balances)

All require accounting.view_journalentry and are scoped to the
current company.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from accounting.api.serializers.reports import (
    IncomeStatementSerializer,
    ReconciliationMismatchSerializer,
    TrialBalanceSerializer,
    VatSummarySerializer,
)
from accounting.services.income_statement_service import generate_income_statement
from accounting.services.trial_balance_service import (
    generate_trial_balance,
    reconcile_cached_balances,
)
from accounting.services.vat_summary_service import compute_vat_summary
from backend.query_params import date_param
from companies.api.mixins import CompanyScopedMixin, require_perm

DATE_RANGE_PARAMS = [
    OpenApiParameter(name="start_date", type=str, location=OpenApiParameter.QUERY, required=True, description="YYYY-MM-DD (inclusive)"),
    OpenApiParameter(name="end_date", type=str, location=OpenApiParameter.QUERY, required=True, description="YYYY-MM-DD (inclusive)"),
]


class _ReportView(CompanyScopedMixin, APIView):
    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        require_perm(
            request,
            "accounting.view_journalentry",
            "You do not have permission to view accounting reports.",
        )


@extend_schema(tags=["accounting"], parameters=DATE_RANGE_PARAMS, responses=VatSummarySerializer)
class VatSummaryView(_ReportView):
    def get(self, request):
        data = compute_vat_summary(
            self.company,
            date_param(request, "start_date", required=True),
            date_param(request, "end_date", required=True),
        )
        return Response(VatSummarySerializer(data).data)


@extend_schema(
    tags=["accounting"],
    parameters=[
        OpenApiParameter(
            name="as_of_date",
            type=str,
            location=OpenApiParameter.QUERY,
            required=False,
            description="Snapshot date (YYYY-MM-DD). Defaults to today.",
        ),
    ],
    responses=TrialBalanceSerializer,
)
class TrialBalanceView(_ReportView):
    def get(self, request):
        data = generate_trial_balance(self.company, date_param(request, "as_of_date"))
        return Response(TrialBalanceSerializer(data).data)


@extend_schema(tags=["accounting"], parameters=DATE_RANGE_PARAMS, responses=IncomeStatementSerializer)
class IncomeStatementView(_ReportView):
    def get(self, request):
        data = generate_income_statement(
            self.company,
            date_param(request, "start_date", required=True),
            date_param(request, "end_date", required=True),
        )
        return Response(IncomeStatementSerializer(data).data)


@extend_schema(tags=["accounting"], responses=ReconciliationMismatchSerializer(many=True))
class ReconciliationView(_ReportView):
    def get(self, request):
        mismatches = reconcile_cached_balances(self.company)
        return Response(
            {
                "consistent": not mismatches,
                "mismatches": ReconciliationMismatchSerializer(mismatches, many=True).data,
            }
        )
