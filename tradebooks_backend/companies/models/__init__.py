# companies/models/__init__.py

"""
COMPANIES MODELS PACKAGE EXPORTS

Keep this file imports-only.
"""

from companies.models.company import Company
from companies.models.invoice_series import InvoiceSeries
from companies.models.membership import CompanyMembership

__all__ = [
    "Company",
    "CompanyMembership",
    "InvoiceSeries",
]
