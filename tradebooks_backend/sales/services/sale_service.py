# sales/services/sale_service.py

"""
======================================================
PATH: sales/services/sale_service.py
======================================================
CORE SALES DOMAIN SERVICE

SINGLE SOURCE OF TRUTH for:
- Sale + SaleItem creation
- Invoice numbering (series row lock)
- Server-side totals (company VAT rate)
- Journal posting (JE-SALE-<invoice>)
- Stock reduction (one OUT movement per item)

GUARANTEES:
- Fully atomic: any failure (missing account, insufficient stock,
  bad input) rolls back the sale, the entry, the stock AND the
  series increment
- Client-supplied totals are never trusted
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from accounting.services.posting import post_sale_journal_entry
from accounting.services.totals import (
    ZERO,
    compute_document_totals,
    quantize_money,
    to_decimal,
)
from companies.services.numbering import reserve_document_number
from products.services.inventory import reduce_stock_on_sale
from sales.models import Sale, SaleItem

logger = logging.getLogger(__name__)


def _check_owned(obj, company, label: str) -> None:
    if obj is not None and obj.company_id != company.pk:
        raise ValidationError({label: f"{label.capitalize()} belongs to another company"})


def _normalize_items(items, company) -> list[dict]:
    if not items:
        raise ValidationError({"items": "A sale must contain at least one item"})

    normalized = []
    for index, item in enumerate(items, start=1):
        product = item.get("product")
        if product is None:
            raise ValidationError({"items": f"Item {index}: product is required"})
        _check_owned(product, company, "product")
        if not product.is_active:
            raise ValidationError({"items": f"Item {index}: product {product.sku} is inactive"})

        quantity = item.get("quantity")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError(
                {"items": f"Item {index}: quantity must be a positive whole number"}
            )

        unit_price = item.get("unit_price")
        unit_price = product.selling_price if unit_price is None else unit_price
        unit_price = to_decimal(unit_price, field_name="unit_price")
        if unit_price < ZERO:
            raise ValidationError({"items": f"Item {index}: unit_price cannot be negative"})

        normalized.append({"product": product, "quantity": quantity, "unit_price": unit_price})
    return normalized


@transaction.atomic
def create_sale(
    *,
    context,
    customer,
    warehouse,
    items,
    discount_percent=0,
    tax_inclusive: bool = False,
    paid_amount=0,
    series_prefix: str | None = None,
    invoice_date: date | None = None,
    notes: str = "",
) -> Sale:
    """
    items: [{"product": Product, "quantity": int, "unit_price": optional}]
    """
    company = context.company

    _check_owned(customer, company, "customer")
    if warehouse is None:
        raise ValidationError({"warehouse": "Warehouse is required"})
    _check_owned(warehouse, company, "warehouse")

    lines = _normalize_items(items, company)
    invoice_date = invoice_date or timezone.localdate()
    vat_rate = company.effective_vat_rate

    totals = compute_document_totals(
        lines,
        vat_rate=vat_rate,
        discount_percent=discount_percent,
        tax_inclusive=tax_inclusive,
    )
    total_amount = quantize_money(totals.total)
    output_vat = quantize_money(totals.vat_amount)

    paid = quantize_money(to_decimal(paid_amount, field_name="paid_amount"))
    if paid < ZERO:
        raise ValidationError({"paid_amount": "paid_amount cannot be negative"})
    if paid > total_amount:
        raise ValidationError({"paid_amount": "paid_amount cannot exceed the sale total"})

    invoice_number = reserve_document_number(
        company,
        series_prefix or settings.SALES_INVOICE_PREFIX,
        on_date=invoice_date,
    )

    sale = Sale.objects.create(
        company=company,
        invoice_number=invoice_number,
        invoice_date=invoice_date,
        customer=customer,
        warehouse=warehouse,
        subtotal=quantize_money(totals.subtotal),
        discount_percent=quantize_money(totals.discount_percent),
        discount_amount=quantize_money(totals.discount_amount),
        tax_inclusive=totals.tax_inclusive,
        vat_rate=vat_rate,
        output_vat=output_vat,
        total_amount=total_amount,
        paid_amount=paid,
        payment_status=Sale.payment_status_for(total_amount, paid),
        notes=(notes or "").strip(),
        created_by=context.actor if getattr(context.actor, "pk", None) else None,
    )

    SaleItem.objects.bulk_create(
        [
            SaleItem(
                sale=sale,
                product=line["product"],
                quantity=line["quantity"],
                unit_price=quantize_money(line["unit_price"]),
                tax_rate=line_totals.tax_rate,
                tax_amount=quantize_money(line_totals.tax_amount),
                line_total=quantize_money(line_totals.line_total),
            )
            for line, line_totals in zip(lines, totals.lines)
        ]
    )

    if settings.ACCOUNTING_POSTING_ENABLED:
        post_sale_journal_entry(sale, context)

    for line in lines:
        reduce_stock_on_sale(
            product=line["product"],
            warehouse=warehouse,
            quantity=line["quantity"],
            reference=invoice_number,
            user=context.actor,
        )

    logger.info(
        "Sale %s created company=%s total=%s vat=%s paid=%s",
        invoice_number,
        company.pk,
        total_amount,
        output_vat,
        paid,
    )
    return sale


def sales_for_company(company, *, status: str | None = None, customer_id=None):
    qs = Sale.objects.filter(company=company).select_related("customer", "warehouse")
    if status:
        qs = qs.filter(status=status)
    if customer_id:
        qs = qs.filter(customer_id=customer_id)
    return qs.order_by("-invoice_date", "-created_at")
