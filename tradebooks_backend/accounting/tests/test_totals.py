# accounting/tests/test_totals.py

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import SimpleTestCase

from accounting.services.exceptions import ImbalanceError
from accounting.services.totals import (
    BALANCE_ERROR,
    apply_discount,
    assert_journal_balanced,
    compute_document_totals,
    compute_line_total,
    compute_total,
    compute_vat,
    format_currency,
    quantize_money,
    total_with_vat,
    total_without_vat,
    validate_journal_balance,
)


class VatAndTotalsTests(SimpleTestCase):
    """
    Calculator tests.

    GUARANTEES:
    - Decimal only, no float drift
    - Discount percent clamped to [0, 100]
    - Tax-inclusive totals equal the net subtotal
    """

    def test_compute_vat(self):
        self.assertEqual(compute_vat(1000, 5), Decimal("50"))
        self.assertEqual(compute_vat("0.10", "5"), Decimal("0.005"))

    def test_line_total_has_no_float_drift(self):
        self.assertEqual(compute_line_total(3, "0.10"), Decimal("0.30"))

    def test_compute_total(self):
        self.assertEqual(compute_total(1000, 50, tax_inclusive=False), Decimal("1050"))
        self.assertEqual(compute_total(1000, 50, tax_inclusive=True), Decimal("1000"))

    def test_discount_is_clamped(self):
        over = apply_discount(Decimal("200"), 150)
        self.assertEqual(over.discount_percent, Decimal("100"))
        self.assertEqual(over.net_subtotal, Decimal("0"))

        under = apply_discount(Decimal("200"), -5)
        self.assertEqual(under.discount_percent, Decimal("0"))
        self.assertEqual(under.discount_amount, Decimal("0"))

        normal = apply_discount(Decimal("200"), "12.5")
        self.assertEqual(normal.discount_amount, Decimal("25"))
        self.assertEqual(normal.net_subtotal, Decimal("175"))

    def test_vat_inclusive_helpers(self):
        self.assertEqual(total_with_vat(1000, 5), Decimal("1050"))
        self.assertEqual(total_without_vat(1050, 5), Decimal("1000"))

    def test_format_currency(self):
        self.assertEqual(format_currency(Decimal("1234.5")), "AED 1,234.50")
        self.assertEqual(format_currency("0.005", "usd"), "USD 0.01")

    def test_quantize_money_rounds_half_up(self):
        self.assertEqual(quantize_money("2.675"), Decimal("2.68"))
        self.assertEqual(quantize_money("2.665"), Decimal("2.67"))

    def test_invalid_number_is_validation_error(self):
        with self.assertRaises(ValidationError):
            compute_vat("abc", 5)

    def test_document_totals(self):
        totals = compute_document_totals(
            [
                {"quantity": 2, "unit_price": "3500.00"},
                {"quantity": 1, "unit_price": "800.00"},
            ],
            vat_rate=5,
            discount_percent=10,
        )

        self.assertEqual(totals.subtotal, Decimal("7800.00"))
        self.assertEqual(totals.discount_amount, Decimal("780.00"))
        self.assertEqual(totals.net_subtotal, Decimal("7020.00"))
        self.assertEqual(totals.vat_amount, Decimal("351.00"))
        self.assertEqual(totals.total, Decimal("7371.00"))
        self.assertEqual([l.line_total for l in totals.lines], [Decimal("7000.00"), Decimal("800.00")])
        self.assertEqual(totals.lines[0].tax_amount, Decimal("350.00"))

    def test_document_totals_tax_inclusive(self):
        totals = compute_document_totals(
            [{"quantity": 1, "unit_price": 1000}], vat_rate=5, tax_inclusive=True
        )
        self.assertEqual(totals.vat_amount, Decimal("50"))
        self.assertEqual(totals.total, Decimal("1000"))


class JournalBalanceTests(SimpleTestCase):
    def test_balanced(self):
        check = validate_journal_balance([{"debit": "100.00"}, {"credit": 100}])
        self.assertTrue(check.valid)
        self.assertIsNone(check.error)
        self.assertEqual(check.total_debit, Decimal("100.00"))

    def test_unbalanced(self):
        check = validate_journal_balance([{"debit": "100.00"}, {"credit": "99.99"}])
        self.assertFalse(check.valid)
        self.assertEqual(check.error, BALANCE_ERROR)

    def test_exact_comparison(self):
        # 0.001 difference is not rounded away
        check = validate_journal_balance([{"debit": "100.001"}, {"credit": "100.00"}])
        self.assertFalse(check.valid)

    def test_assert_raises_imbalance(self):
        with self.assertRaises(ImbalanceError) as ctx:
            assert_journal_balanced([{"debit": 10}, {"credit": 5}])
        self.assertEqual(ctx.exception.code, "IMBALANCE")
        self.assertEqual(str(ctx.exception), BALANCE_ERROR)
