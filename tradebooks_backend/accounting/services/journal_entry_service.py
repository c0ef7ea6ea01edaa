# accounting/services/journal_entry_service.py

"""
======================================================
PATH: accounting/services/journal_entry_service.py
======================================================
JOURNAL ENTRY SERVICE (ACCOUNTING ENGINE)

This module is the ONLY place allowed to:
- Create JournalEntry
- Create JournalEntryLine
- Enforce debit == credit
- Move Account.current_balance
- Guarantee atomicity
- Enforce idempotency via reference_number (prevents double-posting)

Everything else (sale posting, purchase posting, manual entries) must
pass through create_journal_entry().

Line format (one side per line):
    {"account": Account, "debit": Decimal, "memo": "..."}
    {"account": Account, "credit": Decimal}

Order of checks (nothing is written until all pass):
1) shape: one side per line, amount > 0, account active + same company
2) balance on the exact amounts (ImbalanceError)
3) balance again after quantizing to 0.01 (what gets stored)
4) duplicate reference (DuplicateEntryError)
Then entry + lines + balance updates commit as one unit.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from accounting.models.account import Account
from accounting.models.journal import JournalEntry
from accounting.models.journal_line import JournalEntryLine
from accounting.services.balance_service import natural_delta
from accounting.services.exceptions import (
    DuplicateEntryError,
    ImbalanceError,
    JournalEntryCreationError,
)
from accounting.services.totals import (
    BALANCE_ERROR,
    assert_journal_balanced,
    to_decimal,
)

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def _q2(amount: Decimal) -> Decimal:
    return amount.quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _normalize_lines(*, company, lines) -> list[dict]:
    if not lines:
        raise JournalEntryCreationError("Journal entry must contain at least one line")

    normalized: list[dict] = []
    for index, line in enumerate(lines, start=1):
        if not isinstance(line, dict):
            raise JournalEntryCreationError(f"Line {index}: each line must be a dict")

        account = line.get("account")
        if not isinstance(account, Account):
            raise JournalEntryCreationError(f"Line {index}: missing account")

        if account.company_id != company.pk:
            raise JournalEntryCreationError(
                f"Line {index}: account {account.code} belongs to another company"
            )

        if not account.is_active:
            raise JournalEntryCreationError(f"Line {index}: account {account.code} is inactive")

        debit = to_decimal(line.get("debit"), field_name="debit")
        credit = to_decimal(line.get("credit"), field_name="credit")

        if debit < 0 or credit < 0:
            raise JournalEntryCreationError(f"Line {index}: amounts cannot be negative")
        if debit > 0 and credit > 0:
            raise JournalEntryCreationError(
                f"Line {index}: a line cannot have both debit and credit"
            )
        if debit == 0 and credit == 0:
            raise JournalEntryCreationError(
                f"Line {index}: a line must have either debit or credit"
            )

        normalized.append(
            {
                "account": account,
                "debit": debit,
                "credit": credit,
                "memo": (line.get("memo") or "").strip()[:255],
            }
        )

    return normalized


def _quantize_lines(normalized: list[dict]) -> tuple[Decimal, Decimal]:
    total_debit = ZERO
    total_credit = ZERO

    for index, line in enumerate(normalized, start=1):
        line["debit"] = _q2(line["debit"])
        line["credit"] = _q2(line["credit"])
        if line["debit"] == 0 and line["credit"] == 0:
            raise JournalEntryCreationError(f"Line {index}: amount rounds to zero")
        total_debit += line["debit"]
        total_credit += line["credit"]

    if total_debit != total_credit:
        raise ImbalanceError(
            BALANCE_ERROR,
            details={"total_debit": str(total_debit), "total_credit": str(total_credit)},
        )
    return total_debit, total_credit


def _apply_balance_updates(normalized: list[dict]) -> None:
    deltas: dict[int, Decimal] = defaultdict(lambda: ZERO)
    for line in normalized:
        account = line["account"]
        deltas[account.pk] += natural_delta(account, debit=line["debit"], credit=line["credit"])

    # lock in primary-key order so concurrent postings cannot deadlock
    locked = list(
        Account.objects.select_for_update().filter(pk__in=deltas.keys()).order_by("pk")
    )
    now = timezone.now()
    for account in locked:
        delta = deltas[account.pk]
        if delta == 0:
            continue
        Account.objects.filter(pk=account.pk).update(
            current_balance=F("current_balance") + delta,
            updated_at=now,
        )


@transaction.atomic
def create_journal_entry(
    *,
    context,
    reference_number: str,
    entry_type: str,
    description: str,
    lines: list,
    entry_date: date | None = None,
) -> JournalEntry:
    company = context.company

    reference_number = (reference_number or "").strip()
    if not reference_number:
        raise JournalEntryCreationError("reference_number is required")

    description = (description or "").strip()
    if not description:
        raise JournalEntryCreationError("Journal entry description is required")

    if entry_type not in JournalEntry.EntryType.values:
        raise JournalEntryCreationError(f"Invalid entry_type: {entry_type!r}")

    normalized = _normalize_lines(company=company, lines=lines)

    assert_journal_balanced(normalized)
    total_debit, total_credit = _quantize_lines(normalized)

    if JournalEntry.objects.filter(company=company, reference_number=reference_number).exists():
        raise DuplicateEntryError(
            f"Journal entry already exists for reference {reference_number}",
            details={"reference_number": reference_number},
        )

    try:
        with transaction.atomic():
            entry = JournalEntry.objects.create(
                company=company,
                reference_number=reference_number,
                entry_date=entry_date or timezone.localdate(),
                entry_type=entry_type,
                description=description,
                total_debit=total_debit,
                total_credit=total_credit,
                created_by=context.actor if getattr(context.actor, "pk", None) else None,
            )
    except IntegrityError as exc:
        if JournalEntry.objects.filter(
            company=company, reference_number=reference_number
        ).exists():
            raise DuplicateEntryError(
                f"Journal entry already exists for reference {reference_number}",
                details={"reference_number": reference_number},
            ) from exc
        raise JournalEntryCreationError(f"Failed to create journal entry: {exc}") from exc

    rows: list[JournalEntryLine] = []
    for line_number, line in enumerate(normalized, start=1):
        if line["debit"] > 0:
            rows.append(
                JournalEntryLine(
                    journal_entry=entry,
                    line_number=line_number,
                    debit_account=line["account"],
                    debit_amount=line["debit"],
                    memo=line["memo"],
                )
            )
        else:
            rows.append(
                JournalEntryLine(
                    journal_entry=entry,
                    line_number=line_number,
                    credit_account=line["account"],
                    credit_amount=line["credit"],
                    memo=line["memo"],
                )
            )
    JournalEntryLine.objects.bulk_create(rows)

    _apply_balance_updates(normalized)

    logger.info(
        "Posted %s %s company=%s debit=%s credit=%s lines=%s",
        entry_type,
        reference_number,
        company.pk,
        total_debit,
        total_credit,
        len(rows),
    )
    return entry
