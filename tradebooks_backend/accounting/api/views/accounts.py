# accounting/api/views/accounts.py

"""
PATH: accounting/api/views/accounts.py

COMPANY ACCOUNTS API

GET  /api/accounting/accounts/   -> current company's chart (accounting.view_account)
POST /api/accounting/accounts/   -> add an account (accounting.add_account)

current_balance is read-only; only the journal engine moves it.
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.response import Response

from accounting.api.serializers.accounts import AccountCreateSerializer, AccountListSerializer
from accounting.models.account import Account
from companies.api.mixins import CompanyScopedMixin, require_perm

logger = logging.getLogger(__name__)


class AccountListCreateView(CompanyScopedMixin, GenericAPIView):
    serializer_class = AccountListSerializer

    def get_queryset(self):
        qs = Account.objects.filter(company=self.company).order_by("code")
        if self.request.query_params.get("include_inactive") != "1":
            qs = qs.filter(is_active=True)
        return qs

    @extend_schema(tags=["accounting"], responses=AccountListSerializer(many=True))
    def get(self, request, *args, **kwargs):
        require_perm(request, "accounting.view_account", "You do not have permission to view accounts.")
        return Response(AccountListSerializer(self.get_queryset(), many=True).data)

    @extend_schema(
        tags=["accounting"],
        request=AccountCreateSerializer,
        responses={201: AccountListSerializer},
    )
    def post(self, request, *args, **kwargs):
        require_perm(request, "accounting.add_account", "You do not have permission to create accounts.")

        serializer = AccountCreateSerializer(data=request.data, context={"company": self.company})
        serializer.is_valid(raise_exception=True)
        account = serializer.save(company=self.company)

        logger.info("Account %s created for company=%s", account.code, self.company.pk)
        return Response(AccountListSerializer(account).data, status=status.HTTP_201_CREATED)
