# companies/api/views.py

"""
PATH: companies/api/views.py

COMPANIES API

GET  /api/companies/me/       -> the caller's active memberships
GET  /api/companies/series/   -> invoice series of the current company
POST /api/companies/series/   -> create a series (companies.add_invoiceseries)
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from companies.api.mixins import CompanyScopedMixin, require_perm
from companies.api.serializers import InvoiceSeriesSerializer, MembershipSerializer
from companies.models import InvoiceSeries
from companies.services.context import active_memberships

logger = logging.getLogger(__name__)


class MyCompaniesView(GenericAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = MembershipSerializer

    @extend_schema(tags=["companies"], responses=MembershipSerializer(many=True))
    def get(self, request):
        qs = active_memberships(request.user).order_by("company__name")
        return Response(MembershipSerializer(qs, many=True).data)


class InvoiceSeriesListCreateView(CompanyScopedMixin, GenericAPIView):
    serializer_class = InvoiceSeriesSerializer

    def get_queryset(self):
        return InvoiceSeries.objects.filter(company=self.company).order_by("prefix")

    def get_serializer_context(self):
        ctx = super().get_serializer_context()
        ctx["company"] = self.company
        return ctx

    @extend_schema(tags=["companies"], responses=InvoiceSeriesSerializer(many=True))
    def get(self, request):
        return Response(self.get_serializer(self.get_queryset(), many=True).data)

    @extend_schema(
        tags=["companies"],
        request=InvoiceSeriesSerializer,
        responses={201: InvoiceSeriesSerializer},
    )
    def post(self, request):
        require_perm(
            request,
            "companies.add_invoiceseries",
            "You do not have permission to create invoice series.",
        )
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        series = serializer.save(company=self.company)

        logger.info("Invoice series %s created for company=%s", series.prefix, self.company.pk)
        return Response(self.get_serializer(series).data, status=status.HTTP_201_CREATED)
