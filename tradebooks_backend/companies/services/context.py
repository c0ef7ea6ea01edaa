# companies/services/context.py

"""
======================================================
PATH: companies/services/context.py
======================================================
COMPANY CONTEXT

Every core operation receives an explicit CompanyContext
(company + acting user) instead of reading request globals.

Resolution order for API requests:
1) X-Company-ID header
2) ?company_id= query param
3) the user's single active membership

Access rule:
- active membership in an active company
- superusers may act for any active company
"""

from __future__ import annotations

from dataclasses import dataclass

from django.core.exceptions import ValidationError

from backend.exceptions import NotFoundError
from companies.models import Company, CompanyMembership

COMPANY_HEADER = "X-Company-ID"
COMPANY_QUERY_PARAM = "company_id"


@dataclass(frozen=True)
class CompanyContext:
    company: Company
    actor: object = None

    @property
    def company_id(self) -> int:
        return self.company.pk

    @property
    def actor_id(self):
        return getattr(self.actor, "pk", None)


def _parse_company_id(raw) -> int:
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        raise ValidationError({COMPANY_QUERY_PARAM: "company_id must be an integer"})
    if value <= 0:
        raise ValidationError({COMPANY_QUERY_PARAM: "company_id must be positive"})
    return value


def active_memberships(user):
    return CompanyMembership.objects.select_related("company").filter(
        user=user,
        is_active=True,
        company__is_active=True,
    )


def company_for_user(user, company_id: int) -> Company:
    if getattr(user, "is_superuser", False):
        company = Company.objects.filter(pk=company_id, is_active=True).first()
    else:
        membership = active_memberships(user).filter(company_id=company_id).first()
        company = membership.company if membership else None

    if company is None:
        raise NotFoundError(
            "Company not found",
            details={COMPANY_QUERY_PARAM: company_id},
        )
    return company


def resolve_company_context(request) -> CompanyContext:
    user = request.user
    raw = request.headers.get(COMPANY_HEADER) or request.query_params.get(
        COMPANY_QUERY_PARAM
    )

    if raw not in (None, ""):
        company = company_for_user(user, _parse_company_id(raw))
        return CompanyContext(company=company, actor=user)

    memberships = list(active_memberships(user)[:2])
    if len(memberships) == 1:
        return CompanyContext(company=memberships[0].company, actor=user)

    raise ValidationError(
        {
            COMPANY_QUERY_PARAM: (
                "Company is required: send the X-Company-ID header or company_id"
            )
        }
    )
