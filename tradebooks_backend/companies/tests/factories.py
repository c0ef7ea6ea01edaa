# companies/tests/factories.py

"""
Shared test setup helpers (plain functions, no factory library).

Every helper creates rows through the ORM the same way the services do,
so model.full_clean() rules apply in tests too.
"""

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Permission

from companies.models import Company, CompanyMembership, InvoiceSeries
from companies.services.context import CompanyContext

User = get_user_model()


def make_company(name="Al Baraka Trading", *, vat_rate=Decimal("5.00"), **extra) -> Company:
    return Company.objects.create(name=name, currency="AED", vat_rate=vat_rate, **extra)


def make_user(username="accountant", *, company=None, perms=(), **extra):
    user = User.objects.create_user(
        username=username,
        email=f"{username}@example.com",
        password="password123",
        **extra,
    )
    if company is not None:
        CompanyMembership.objects.create(user=user, company=company)
    for perm in perms:
        app_label, codename = perm.split(".", 1)
        user.user_permissions.add(
            Permission.objects.get(content_type__app_label=app_label, codename=codename)
        )
    return user


def make_series(company, prefix, *, next_number=1) -> InvoiceSeries:
    return InvoiceSeries.objects.create(company=company, prefix=prefix, next_number=next_number)


def make_context(company, user=None) -> CompanyContext:
    return CompanyContext(company=company, actor=user)
