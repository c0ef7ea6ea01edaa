# accounting/services/posting.py

"""
======================================================
PATH: accounting/services/posting.py
======================================================
POSTING ADAPTER

Build journal lines for business documents and call create_journal_entry
(the engine).

This module should remain a thin adapter:
- It DOES NOT do workflows (sale/purchase services do).
- It DOES map business events -> accounting lines.
- It ALWAYS calls create_journal_entry (engine) for balance, immutability,
  idempotency and cached balance updates.

SALE  (JE-SALE-<invoice>):
    Dr Cash                  paid_amount
    Dr Accounts Receivable   total - paid_amount
        Cr Sales Revenue     total - output_vat
        Cr VAT Payable       output_vat

PURCHASE  (JE-PURCHASE-<po>):
    Dr Inventory             total - input_vat
    Dr VAT Recoverable       input_vat
        Cr Accounts Payable  total

Zero-amount lines are omitted. All accounts are resolved BEFORE anything is
written, so a missing account aborts the posting with no partial entry.
"""

from __future__ import annotations

import uuid
from datetime import date

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from accounting.models.journal import JournalEntry
from accounting.services import account_resolver as ar
from accounting.services.exceptions import JournalEntryCreationError
from accounting.services.journal_entry_service import create_journal_entry
from accounting.services.totals import ZERO, to_decimal


def sale_reference(invoice_number: str) -> str:
    return f"JE-SALE-{invoice_number}"


def purchase_reference(po_number: str) -> str:
    return f"JE-PURCHASE-{po_number}"


def _assert_same_company(document, context) -> None:
    if document.company_id != context.company.pk:
        raise ValidationError("Document belongs to another company")


@transaction.atomic
def post_sale_journal_entry(sale, context) -> JournalEntry | None:
    _assert_same_company(sale, context)

    total = to_decimal(sale.total_amount, field_name="total_amount")
    output_vat = to_decimal(sale.output_vat, field_name="output_vat")
    paid = to_decimal(sale.paid_amount, field_name="paid_amount")

    net_sales = total - output_vat
    receivable = total - paid

    keys = [ar.CASH, ar.VAT_PAYABLE, ar.SALES_REVENUE]
    if receivable > ZERO:
        keys.append(ar.ACCOUNTS_RECEIVABLE)
    accounts = ar.resolve_accounts(sale.company, keys)

    lines = []
    if paid > ZERO:
        lines.append({"account": accounts[ar.CASH], "debit": paid, "memo": "Cash received"})
    if receivable > ZERO:
        lines.append(
            {
                "account": accounts[ar.ACCOUNTS_RECEIVABLE],
                "debit": receivable,
                "memo": "Amount due from customer",
            }
        )
    if net_sales > ZERO:
        lines.append(
            {"account": accounts[ar.SALES_REVENUE], "credit": net_sales, "memo": "Net sales"}
        )
    if output_vat > ZERO:
        lines.append(
            {"account": accounts[ar.VAT_PAYABLE], "credit": output_vat, "memo": "Output VAT"}
        )

    if not lines:
        return None

    return create_journal_entry(
        context=context,
        reference_number=sale_reference(sale.invoice_number),
        entry_date=sale.invoice_date,
        entry_type=JournalEntry.EntryType.SALE,
        description=f"Sales invoice {sale.invoice_number}",
        lines=lines,
    )


@transaction.atomic
def post_purchase_journal_entry(purchase, context) -> JournalEntry | None:
    _assert_same_company(purchase, context)

    total = to_decimal(purchase.total_amount, field_name="total_amount")
    input_vat = to_decimal(purchase.input_vat, field_name="input_vat")
    net = total - input_vat

    accounts = ar.resolve_accounts(
        purchase.company,
        [ar.INVENTORY, ar.VAT_RECOVERABLE, ar.ACCOUNTS_PAYABLE],
    )

    lines = []
    if net > ZERO:
        lines.append({"account": accounts[ar.INVENTORY], "debit": net, "memo": "Inventory"})
    if input_vat > ZERO:
        lines.append(
            {"account": accounts[ar.VAT_RECOVERABLE], "debit": input_vat, "memo": "Input VAT"}
        )
    if total > ZERO:
        lines.append(
            {
                "account": accounts[ar.ACCOUNTS_PAYABLE],
                "credit": total,
                "memo": "Amount due to vendor",
            }
        )

    if not lines:
        return None

    return create_journal_entry(
        context=context,
        reference_number=purchase_reference(purchase.po_number),
        entry_date=purchase.po_date,
        entry_type=JournalEntry.EntryType.PURCHASE,
        description=f"Purchase order {purchase.po_number}",
        lines=lines,
    )


MANUAL_ENTRY_TYPES = (JournalEntry.EntryType.MANUAL, JournalEntry.EntryType.ADJUSTMENT)


def manual_reference(entry_type: str) -> str:
    stamp = timezone.now().strftime("%Y%m%d%H%M%S")
    return f"JE-{entry_type}-{stamp}-{uuid.uuid4().hex[:6].upper()}"


@transaction.atomic
def post_manual_journal_entry(
    *,
    context,
    description: str,
    lines: list,
    entry_type: str = JournalEntry.EntryType.MANUAL,
    entry_date: date | None = None,
    reference_number: str | None = None,
) -> JournalEntry:
    """
    lines: [{"account_code": "1010", "debit": ...} | {"account_code": ..., "credit": ...}]
    """
    if entry_type not in MANUAL_ENTRY_TYPES:
        raise JournalEntryCreationError(
            f"Manual postings must be one of {', '.join(MANUAL_ENTRY_TYPES)}"
        )

    resolved = []
    for line in lines or []:
        account = ar.get_account_by_code(context.company, line.get("account_code"))
        resolved.append(
            {
                "account": account,
                "debit": line.get("debit"),
                "credit": line.get("credit"),
                "memo": line.get("memo") or "",
            }
        )

    return create_journal_entry(
        context=context,
        reference_number=(reference_number or "").strip() or manual_reference(entry_type),
        entry_date=entry_date,
        entry_type=entry_type,
        description=description,
        lines=resolved,
    )
