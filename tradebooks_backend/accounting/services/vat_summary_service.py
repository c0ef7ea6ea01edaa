# accounting/services/vat_summary_service.py

"""
VAT SUMMARY

For [start_date, end_date] (inclusive), non-cancelled documents only:
- output_vat   = sum(Sale.output_vat)
- input_vat    = sum(Purchase.input_vat)
- vat_payable  = max(0, output_vat - input_vat)   (refund position clamps to 0)
- net_position = output_vat - input_vat            (signed, informational)
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db.models import Sum

from purchases.models import Purchase
from sales.models import Sale

ZERO = Decimal("0.00")


def compute_vat_summary(company, start_date: date, end_date: date) -> dict:
    company = getattr(company, "company", None) or company
    if start_date > end_date:
        raise ValidationError({"start_date": "start_date must be on or before end_date"})

    output_vat = (
        Sale.objects.filter(
            company=company,
            invoice_date__gte=start_date,
            invoice_date__lte=end_date,
        )
        .exclude(status=Sale.Status.CANCELLED)
        .aggregate(total=Sum("output_vat"))["total"]
        or ZERO
    )
    input_vat = (
        Purchase.objects.filter(
            company=company,
            po_date__gte=start_date,
            po_date__lte=end_date,
        )
        .exclude(status=Purchase.Status.CANCELLED)
        .aggregate(total=Sum("input_vat"))["total"]
        or ZERO
    )

    net_position = output_vat - input_vat
    return {
        "start_date": start_date,
        "end_date": end_date,
        "output_vat": output_vat,
        "input_vat": input_vat,
        "vat_payable": max(ZERO, net_position),
        "net_position": net_position,
    }
