# companies/models/membership.py

from __future__ import annotations

from django.conf import settings
from django.db import models

from companies.models.company import Company


class CompanyMembership(models.Model):
    """
    Links a user to a company they may act for.

    A user acts for a company only through an ACTIVE membership
    (superusers excepted, see companies.services.context).
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="company_memberships",
    )
    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        related_name="memberships",
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["company__name"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "company"],
                name="uniq_membership_user_company",
            )
        ]

    def __str__(self):
        return f"{self.user} @ {self.company}"
