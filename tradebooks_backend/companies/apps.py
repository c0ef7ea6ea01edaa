# companies/apps.py

"""
COMPANIES APP CONFIG

Tenant boundary:
- Company (tenant) + user memberships
- Invoice / purchase order numbering series
"""

from django.apps import AppConfig


class CompaniesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "companies"
    verbose_name = "Companies"
