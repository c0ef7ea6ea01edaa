# purchases/services/purchase_service.py

"""
======================================================
PATH: purchases/services/purchase_service.py
======================================================
PURCHASE CREATION (RECEIVE ON CREATE)

One transaction:
1) reserve PO number (series row lock)
2) derive totals with the company VAT rate (input VAT)
3) persist Purchase + PurchaseItems
4) post JE-PURCHASE-<po> (when ACCOUNTING_POSTING_ENABLED)
5) increase stock (one IN movement per item)

Unit cost defaults to the product's cost_price.
"""

from __future__ import annotations

import logging
from datetime import date

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from accounting.services.posting import post_purchase_journal_entry
from accounting.services.totals import ZERO, compute_document_totals, quantize_money, to_decimal
from companies.services.numbering import reserve_document_number
from products.services.inventory import increase_stock_on_purchase
from purchases.models import Purchase, PurchaseItem

logger = logging.getLogger(__name__)


def _check_owned(obj, company, label: str) -> None:
    if obj is None:
        raise ValidationError({label: f"{label.capitalize()} is required"})
    if obj.company_id != company.pk:
        raise ValidationError({label: f"{label.capitalize()} belongs to another company"})


def _normalize_items(items, company) -> list[dict]:
    if not items:
        raise ValidationError({"items": "A purchase must contain at least one item"})

    normalized = []
    for index, item in enumerate(items, start=1):
        product = item.get("product")
        if product is None:
            raise ValidationError({"items": f"Item {index}: product is required"})
        if product.company_id != company.pk:
            raise ValidationError({"items": f"Item {index}: product belongs to another company"})
        if not product.is_active:
            raise ValidationError({"items": f"Item {index}: product {product.sku} is inactive"})

        quantity = item.get("quantity")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError(
                {"items": f"Item {index}: quantity must be a positive whole number"}
            )

        unit_cost = item.get("unit_cost")
        unit_cost = product.cost_price if unit_cost is None else unit_cost
        unit_cost = to_decimal(unit_cost, field_name="unit_cost")
        if unit_cost < ZERO:
            raise ValidationError({"items": f"Item {index}: unit_cost cannot be negative"})

        # compute_document_totals reads unit_price
        normalized.append({"product": product, "quantity": quantity, "unit_price": unit_cost})
    return normalized


@transaction.atomic
def create_purchase(
    *,
    context,
    vendor,
    warehouse,
    items,
    discount_percent=0,
    tax_inclusive: bool = False,
    series_prefix: str | None = None,
    po_date: date | None = None,
    notes: str = "",
) -> Purchase:
    """
    items: [{"product": Product, "quantity": int, "unit_cost": optional}]
    """
    company = context.company

    _check_owned(vendor, company, "vendor")
    _check_owned(warehouse, company, "warehouse")

    lines = _normalize_items(items, company)
    po_date = po_date or timezone.localdate()
    vat_rate = company.effective_vat_rate

    totals = compute_document_totals(
        lines,
        vat_rate=vat_rate,
        discount_percent=discount_percent,
        tax_inclusive=tax_inclusive,
    )

    po_number = reserve_document_number(
        company,
        series_prefix or settings.PURCHASE_ORDER_PREFIX,
        on_date=po_date,
    )

    purchase = Purchase.objects.create(
        company=company,
        po_number=po_number,
        po_date=po_date,
        vendor=vendor,
        warehouse=warehouse,
        subtotal=quantize_money(totals.subtotal),
        discount_percent=quantize_money(totals.discount_percent),
        discount_amount=quantize_money(totals.discount_amount),
        tax_inclusive=totals.tax_inclusive,
        vat_rate=vat_rate,
        input_vat=quantize_money(totals.vat_amount),
        total_amount=quantize_money(totals.total),
        notes=(notes or "").strip(),
        created_by=context.actor if getattr(context.actor, "pk", None) else None,
    )

    PurchaseItem.objects.bulk_create(
        [
            PurchaseItem(
                purchase=purchase,
                product=line["product"],
                quantity=line["quantity"],
                unit_cost=quantize_money(line["unit_price"]),
                tax_rate=line_totals.tax_rate,
                tax_amount=quantize_money(line_totals.tax_amount),
                line_total=quantize_money(line_totals.line_total),
            )
            for line, line_totals in zip(lines, totals.lines)
        ]
    )

    if settings.ACCOUNTING_POSTING_ENABLED:
        post_purchase_journal_entry(purchase, context)

    for line in lines:
        increase_stock_on_purchase(
            product=line["product"],
            warehouse=warehouse,
            quantity=line["quantity"],
            reference=po_number,
            user=context.actor,
        )

    logger.info(
        "Purchase %s created company=%s total=%s input_vat=%s",
        po_number,
        company.pk,
        purchase.total_amount,
        purchase.input_vat,
    )
    return purchase
