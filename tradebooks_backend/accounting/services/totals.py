# accounting/services/totals.py

"""
======================================================
PATH: accounting/services/totals.py
======================================================
VAT & TOTALS CALCULATOR

Pure functions. No DB access, no side effects.

Rules:
- Decimal only. Inputs are coerced via Decimal(str(value)); floats are
  never used for arithmetic.
- Nothing in the discount -> VAT -> total chain is rounded. Rounding
  (quantize_money) happens only when values are persisted or displayed.
- Balance checks are exact equality (no tolerance).

Chain:
    subtotal      = sum(quantity * unit_price)
    discount      = subtotal * clamp(discount_percent, 0, 100) / 100
    net_subtotal  = subtotal - discount
    vat           = net_subtotal * rate / 100
    total         = net_subtotal            (tax inclusive)
                  = net_subtotal + vat      (tax exclusive)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from django.core.exceptions import ValidationError

from accounting.services.exceptions import ImbalanceError

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")

BALANCE_ERROR = "Debit and Credit must balance"


def to_decimal(value, *, field_name: str = "amount") -> Decimal:
    if value is None or value == "":
        return ZERO

    if isinstance(value, bool):
        raise ValidationError({field_name: "Expected a number, got a boolean"})

    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError, TypeError) as exc:
            raise ValidationError({field_name: f"Invalid number: {value!r}"}) from exc

    if not amount.is_finite():
        raise ValidationError({field_name: f"Invalid number: {value!r}"})
    return amount


def quantize_money(value) -> Decimal:
    return to_decimal(value).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def clamp_percent(value) -> Decimal:
    pct = to_decimal(value, field_name="discount_percent")
    if pct < ZERO:
        return ZERO
    if pct > HUNDRED:
        return HUNDRED
    return pct


# ------------------------------------------------------------
# LINE / VAT / DISCOUNT / TOTAL
# ------------------------------------------------------------


def compute_line_total(quantity, unit_price) -> Decimal:
    return to_decimal(quantity, field_name="quantity") * to_decimal(
        unit_price, field_name="unit_price"
    )


def compute_vat(amount, rate_percent) -> Decimal:
    return to_decimal(amount) * to_decimal(rate_percent, field_name="vat_rate") / HUNDRED


@dataclass(frozen=True)
class DiscountResult:
    discount_percent: Decimal
    discount_amount: Decimal
    net_subtotal: Decimal


def apply_discount(subtotal, discount_percent) -> DiscountResult:
    subtotal = to_decimal(subtotal, field_name="subtotal")
    pct = clamp_percent(discount_percent)
    discount_amount = subtotal * pct / HUNDRED
    return DiscountResult(
        discount_percent=pct,
        discount_amount=discount_amount,
        net_subtotal=subtotal - discount_amount,
    )


def compute_total(net_subtotal, vat_amount, tax_inclusive: bool) -> Decimal:
    net_subtotal = to_decimal(net_subtotal, field_name="net_subtotal")
    if tax_inclusive:
        return net_subtotal
    return net_subtotal + to_decimal(vat_amount, field_name="vat_amount")


def total_with_vat(subtotal, rate_percent) -> Decimal:
    subtotal = to_decimal(subtotal, field_name="subtotal")
    return subtotal + compute_vat(subtotal, rate_percent)


def total_without_vat(gross, rate_percent) -> Decimal:
    """Extract the net amount from a VAT-inclusive gross."""
    gross = to_decimal(gross, field_name="gross")
    rate = to_decimal(rate_percent, field_name="vat_rate")
    return gross / (Decimal("1") + rate / HUNDRED)


def format_currency(amount, currency: str = "AED") -> str:
    return f"{(currency or '').strip().upper()} {quantize_money(amount):,.2f}".strip()


# ------------------------------------------------------------
# JOURNAL BALANCE
# ------------------------------------------------------------


@dataclass(frozen=True)
class BalanceCheck:
    valid: bool
    total_debit: Decimal
    total_credit: Decimal
    error: str | None = None


def validate_journal_balance(lines) -> BalanceCheck:
    """
    lines: iterable of {"debit": amount} / {"credit": amount} dicts
    (extra keys such as "account" are ignored).
    """
    total_debit = ZERO
    total_credit = ZERO

    for line in lines:
        total_debit += to_decimal(line.get("debit"), field_name="debit")
        total_credit += to_decimal(line.get("credit"), field_name="credit")

    if total_debit != total_credit:
        return BalanceCheck(
            valid=False,
            total_debit=total_debit,
            total_credit=total_credit,
            error=BALANCE_ERROR,
        )
    return BalanceCheck(valid=True, total_debit=total_debit, total_credit=total_credit)


def assert_journal_balanced(lines) -> BalanceCheck:
    check = validate_journal_balance(lines)
    if not check.valid:
        raise ImbalanceError(
            BALANCE_ERROR,
            details={
                "total_debit": str(check.total_debit),
                "total_credit": str(check.total_credit),
            },
        )
    return check


# ------------------------------------------------------------
# DOCUMENT TOTALS (sale / purchase)
# ------------------------------------------------------------


@dataclass(frozen=True)
class LineTotals:
    quantity: Decimal
    unit_price: Decimal
    tax_rate: Decimal
    line_total: Decimal
    tax_amount: Decimal


@dataclass(frozen=True)
class DocumentTotals:
    subtotal: Decimal
    discount_percent: Decimal
    discount_amount: Decimal
    net_subtotal: Decimal
    vat_rate: Decimal
    vat_amount: Decimal
    total: Decimal
    tax_inclusive: bool
    lines: list[LineTotals] = field(default_factory=list)


def compute_document_totals(
    lines,
    *,
    vat_rate,
    discount_percent=0,
    tax_inclusive: bool = False,
) -> DocumentTotals:
    """
    lines: iterable of {"quantity": ..., "unit_price": ...}

    Per-line tax_amount is informational (line_total * rate / 100, before
    the document discount). Document VAT is charged on the discounted
    subtotal.
    """
    rate = to_decimal(vat_rate, field_name="vat_rate")

    line_totals: list[LineTotals] = []
    subtotal = ZERO
    for line in lines:
        quantity = to_decimal(line.get("quantity"), field_name="quantity")
        unit_price = to_decimal(line.get("unit_price"), field_name="unit_price")
        line_total = compute_line_total(quantity, unit_price)
        subtotal += line_total
        line_totals.append(
            LineTotals(
                quantity=quantity,
                unit_price=unit_price,
                tax_rate=rate,
                line_total=line_total,
                tax_amount=compute_vat(line_total, rate),
            )
        )

    discount = apply_discount(subtotal, discount_percent)
    vat_amount = compute_vat(discount.net_subtotal, rate)

    return DocumentTotals(
        subtotal=subtotal,
        discount_percent=discount.discount_percent,
        discount_amount=discount.discount_amount,
        net_subtotal=discount.net_subtotal,
        vat_rate=rate,
        vat_amount=vat_amount,
        total=compute_total(discount.net_subtotal, vat_amount, tax_inclusive),
        tax_inclusive=bool(tax_inclusive),
        lines=line_totals,
    )
