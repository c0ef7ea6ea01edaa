# companies/api/mixins.py

"""
COMPANY-SCOPED VIEW HELPERS

- CompanyScopedMixin.get_company_context(): resolves once per request
- require_perm(): Django model permission gate for write endpoints
"""

from __future__ import annotations

from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated

from companies.services.context import CompanyContext, resolve_company_context


def require_perm(request, perm: str, message: str) -> None:
    if not request.user.has_perm(perm):
        raise PermissionDenied(message)


class CompanyScopedMixin:
    permission_classes = [IsAuthenticated]

    def get_company_context(self) -> CompanyContext:
        ctx = getattr(self.request, "_company_context", None)
        if ctx is None:
            ctx = resolve_company_context(self.request)
            self.request._company_context = ctx
        return ctx

    @property
    def company(self):
        return self.get_company_context().company
