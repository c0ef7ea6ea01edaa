# accounting/tests/test_reports.py

from datetime import timedelta
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase
from django.utils import timezone

from accounting.models import Account
from accounting.services.chart_seed import seed_standard_chart
from accounting.services.income_statement_service import generate_income_statement
from accounting.services.posting import post_manual_journal_entry
from accounting.services.trial_balance_service import (
    generate_trial_balance,
    reconcile_cached_balances,
)
from accounting.services.vat_summary_service import compute_vat_summary
from companies.tests.factories import make_company, make_context, make_series, make_user
from products.tests.factories import make_product, make_warehouse, set_stock
from purchases.models import Vendor
from purchases.services.purchase_service import create_purchase
from sales.models import Sale
from sales.services.sale_service import create_sale


class ReportTestMixin:
    def setUp(self):
        self.company = make_company()
        self.ctx = make_context(self.company, make_user(company=self.company))
        make_series(self.company, "SI")
        make_series(self.company, "PO")
        seed_standard_chart(self.company)

        self.warehouse = make_warehouse(self.company)
        self.chair = make_product(
            self.company,
            sku="CHR-001",
            name="Office Chair",
            selling_price=Decimal("1600.00"),
            cost_price=Decimal("400.00"),
        )
        set_stock(self.chair, self.warehouse, 10)
        self.vendor = Vendor.objects.create(company=self.company, name="Global Supplies")
        self.today = timezone.localdate()

    def _sell(self, quantity=1):
        return create_sale(
            context=self.ctx,
            customer=None,
            warehouse=self.warehouse,
            items=[{"product": self.chair, "quantity": quantity}],
            paid_amount=Decimal("1680.00") * quantity,
        )

    def _buy(self, quantity=1):
        return create_purchase(
            context=self.ctx,
            vendor=self.vendor,
            warehouse=self.warehouse,
            items=[{"product": self.chair, "quantity": quantity}],
        )


class VatSummaryTests(ReportTestMixin, TestCase):
    def test_payable_is_output_minus_input(self):
        self._sell()
        self._buy()

        summary = compute_vat_summary(self.company, self.today, self.today)

        self.assertEqual(summary["output_vat"], Decimal("80.00"))
        self.assertEqual(summary["input_vat"], Decimal("20.00"))
        self.assertEqual(summary["vat_payable"], Decimal("60.00"))
        self.assertEqual(summary["net_position"], Decimal("60.00"))

    def test_cancelled_sales_are_excluded(self):
        self._sell()
        cancelled = self._sell()
        # status is not editable through the model; write the row directly
        Sale.objects.filter(pk=cancelled.pk).update(status=Sale.Status.CANCELLED)

        summary = compute_vat_summary(self.company, self.today, self.today)
        self.assertEqual(summary["output_vat"], Decimal("80.00"))

    def test_payable_never_negative(self):
        self._sell()
        self._buy(quantity=16)

        summary = compute_vat_summary(self.company, self.today, self.today)

        self.assertEqual(summary["input_vat"], Decimal("320.00"))
        self.assertEqual(summary["vat_payable"], Decimal("0.00"))
        self.assertEqual(summary["net_position"], Decimal("-240.00"))

    def test_outside_range_is_ignored(self):
        self._sell()
        yesterday = self.today - timedelta(days=1)

        summary = compute_vat_summary(self.company, yesterday, yesterday)
        self.assertEqual(summary["output_vat"], Decimal("0.00"))

    def test_inverted_range_is_rejected(self):
        with self.assertRaises(ValidationError):
            compute_vat_summary(self.company, self.today, self.today - timedelta(days=1))


class TrialBalanceTests(ReportTestMixin, TestCase):
    def test_balanced_and_matches_cached_balances(self):
        self._sell()
        self._buy()

        report = generate_trial_balance(self.company)
        rows = {row["code"]: row for row in report["accounts"]}

        self.assertTrue(report["totals"]["balanced"])
        self.assertEqual(report["totals"]["debit"], Decimal("2100.00"))
        self.assertEqual(report["totals"]["credit"], Decimal("2100.00"))

        self.assertEqual(rows["1010"]["balance"], Decimal("1680.00"))
        self.assertEqual(rows["1010"]["side"], "DR")
        self.assertEqual(rows["2100"]["balance"], Decimal("80.00"))
        self.assertEqual(rows["2100"]["side"], "CR")
        self.assertEqual(rows["2000"]["credit"], Decimal("420.00"))
        # untouched accounts still listed
        self.assertEqual(rows["3000"]["balance"], Decimal("0.00"))

        self.assertEqual(reconcile_cached_balances(self.company), [])

    def test_repeated_generation_gives_same_result(self):
        self._sell()
        self._buy()

        first = generate_trial_balance(self.company)
        second = generate_trial_balance(self.company)

        self.assertEqual(first, second)
        self.assertTrue(second["totals"]["balanced"])

    def test_as_of_date_excludes_later_entries(self):
        self._sell()

        report = generate_trial_balance(self.company, self.today - timedelta(days=1))
        self.assertEqual(report["totals"]["debit"], Decimal("0.00"))
        self.assertTrue(report["totals"]["balanced"])

    def test_reconciliation_detects_out_of_band_balance_change(self):
        self._sell()
        Account.objects.filter(company=self.company, code="1010").update(
            current_balance=Decimal("1.00")
        )

        mismatches = reconcile_cached_balances(self.company)

        self.assertEqual([m["code"] for m in mismatches], ["1010"])
        self.assertEqual(mismatches[0]["derived_balance"], Decimal("1680.00"))
        self.assertEqual(mismatches[0]["difference"], Decimal("-1679.00"))


class IncomeStatementTests(ReportTestMixin, TestCase):
    def test_revenue_less_expenses(self):
        self._sell()
        self._buy()
        post_manual_journal_entry(
            context=self.ctx,
            description="Office rent",
            lines=[
                {"account_code": "6000", "debit": "300.00"},
                {"account_code": "1010", "credit": "300.00"},
            ],
        )

        statement = generate_income_statement(self.company, self.today, self.today)

        self.assertEqual(statement["revenue"]["total"], Decimal("1600.00"))
        self.assertEqual([r["code"] for r in statement["revenue"]["accounts"]], ["4100"])
        self.assertEqual(statement["expenses"]["total"], Decimal("300.00"))
        self.assertEqual(statement["net_profit"], Decimal("1300.00"))

    def test_empty_period(self):
        statement = generate_income_statement(self.company, self.today, self.today)

        self.assertEqual(statement["revenue"]["accounts"], [])
        self.assertEqual(statement["net_profit"], Decimal("0.00"))

    def test_inverted_range_is_rejected(self):
        with self.assertRaises(ValidationError):
            generate_income_statement(self.company, self.today, self.today - timedelta(days=1))
