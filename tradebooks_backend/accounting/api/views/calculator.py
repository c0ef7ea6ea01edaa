# accounting/api/views/calculator.py

"""
PATH: accounting/api/views/calculator.py

TOTALS PREVIEW (ADVISORY)

POST /api/accounting/calculator/totals/

Uses the company's configured VAT rate. Nothing is persisted; sale and
purchase creation re-derive every figure server-side.
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework.generics import GenericAPIView
from rest_framework.response import Response

from accounting.api.serializers.reports import DocumentTotalsSerializer, TotalsPreviewInputSerializer
from accounting.services.totals import compute_document_totals
from companies.api.mixins import CompanyScopedMixin


class TotalsPreviewView(CompanyScopedMixin, GenericAPIView):
    serializer_class = TotalsPreviewInputSerializer

    @extend_schema(
        tags=["accounting"],
        request=TotalsPreviewInputSerializer,
        responses=DocumentTotalsSerializer,
    )
    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        totals = compute_document_totals(
            data["items"],
            vat_rate=self.company.effective_vat_rate,
            discount_percent=data["discount_percent"],
            tax_inclusive=data["tax_inclusive"],
        )
        return Response(DocumentTotalsSerializer(totals).data)
