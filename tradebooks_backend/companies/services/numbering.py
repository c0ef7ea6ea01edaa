# companies/services/numbering.py

"""
======================================================
PATH: companies/services/numbering.py
======================================================
DOCUMENT NUMBERING

Format: <PREFIX>-<YYYY>-<NNNNNN>   e.g. SI-2024-000001

reserve_document_number() reads and advances the series as ONE step:
- row lock (select_for_update) on the series
- F("next_number") + 1 in the same transaction

Call it inside the document's transaction.atomic() block; if the
document fails, the rollback gives the number back.
"""

from __future__ import annotations

import logging
from datetime import date

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from backend.exceptions import NotFoundError
from companies.models import InvoiceSeries

logger = logging.getLogger(__name__)

SEQUENCE_WIDTH = 6


def format_document_number(prefix: str, year: int, number: int) -> str:
    prefix = (prefix or "").strip().upper()
    return f"{prefix}-{int(year):04d}-{int(number):0{SEQUENCE_WIDTH}d}"


@transaction.atomic
def reserve_document_number(company, prefix: str, *, on_date: date | None = None) -> str:
    prefix = (prefix or "").strip().upper()
    on_date = on_date or timezone.localdate()

    try:
        series = InvoiceSeries.objects.select_for_update().get(
            company=company,
            prefix=prefix,
        )
    except InvoiceSeries.DoesNotExist as exc:
        raise NotFoundError(
            f"Invoice series '{prefix}' is not configured for this company",
            details={"series_prefix": prefix},
        ) from exc

    number = format_document_number(prefix, on_date.year, series.next_number)

    InvoiceSeries.objects.filter(pk=series.pk).update(
        next_number=F("next_number") + 1,
        updated_at=timezone.now(),
    )

    logger.debug("Reserved %s for company=%s", number, company.pk)
    return number
