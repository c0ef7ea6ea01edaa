# accounting/api/views/journal_entries.py

"""
PATH: accounting/api/views/journal_entries.py

JOURNAL ENTRY API (AUDIT SAFE)

- List / retrieve are read-only (accounting.view_journalentry)
- Filtering via django-filter: ?entry_type=SALE&start_date=...&end_date=...
- Manual / adjustment postings go through the same engine as sales and
  purchases (accounting.add_journalentry)
"""

from __future__ import annotations

import django_filters
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.response import Response
from rest_framework.viewsets import ReadOnlyModelViewSet

from accounting.api.serializers.journal_entries import (
    JournalEntryDetailSerializer,
    JournalEntrySerializer,
    ManualJournalEntryInputSerializer,
)
from accounting.models.journal import JournalEntry
from accounting.services.posting import post_manual_journal_entry
from companies.api.mixins import CompanyScopedMixin, require_perm


class JournalEntryFilter(django_filters.FilterSet):
    start_date = django_filters.DateFilter(field_name="entry_date", lookup_expr="gte")
    end_date = django_filters.DateFilter(field_name="entry_date", lookup_expr="lte")
    reference = django_filters.CharFilter(field_name="reference_number", lookup_expr="icontains")

    class Meta:
        model = JournalEntry
        fields = ["entry_type", "start_date", "end_date", "reference"]


@extend_schema(tags=["accounting"])
class JournalEntryViewSet(CompanyScopedMixin, ReadOnlyModelViewSet):
    """
    Read-only access to the current company's journal entries.
    """

    serializer_class = JournalEntrySerializer
    filterset_class = JournalEntryFilter
    http_method_names = ["get", "head", "options"]

    def get_serializer_class(self):
        if self.action == "retrieve":
            return JournalEntryDetailSerializer
        return JournalEntrySerializer

    def get_queryset(self):
        require_perm(
            self.request,
            "accounting.view_journalentry",
            "You do not have permission to view journal entries.",
        )
        qs = JournalEntry.objects.filter(company=self.company).order_by(
            "-entry_date", "-created_at"
        )
        if self.action == "retrieve":
            qs = qs.prefetch_related("lines__debit_account", "lines__credit_account")
        return qs


class ManualJournalEntryView(CompanyScopedMixin, GenericAPIView):
    serializer_class = ManualJournalEntryInputSerializer

    @extend_schema(
        tags=["accounting"],
        request=ManualJournalEntryInputSerializer,
        responses={201: JournalEntryDetailSerializer},
    )
    def post(self, request):
        require_perm(
            request,
            "accounting.add_journalentry",
            "You do not have permission to post journal entries.",
        )
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        entry = post_manual_journal_entry(
            context=self.get_company_context(),
            description=data["description"],
            entry_type=data["entry_type"],
            entry_date=data.get("entry_date"),
            reference_number=data.get("reference_number"),
            lines=data["lines"],
        )
        return Response(JournalEntryDetailSerializer(entry).data, status=status.HTTP_201_CREATED)
