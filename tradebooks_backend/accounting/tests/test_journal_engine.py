# accounting/tests/test_journal_engine.py

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase

from accounting.models import Account, JournalEntry, JournalEntryLine
from accounting.services.chart_seed import seed_standard_chart
from accounting.services.exceptions import (
    DuplicateEntryError,
    ImbalanceError,
    JournalEntryCreationError,
)
from accounting.services.journal_entry_service import create_journal_entry
from companies.tests.factories import make_company, make_context, make_user


class JournalEngineTests(TestCase):
    """
    Journal engine guarantees:
    - debit == credit or nothing is written
    - reference numbers are unique per company
    - balances move on each account's normal side
    - entries and lines are immutable
    """

    def setUp(self):
        self.company = make_company()
        self.user = make_user(company=self.company)
        self.ctx = make_context(self.company, self.user)
        seed_standard_chart(self.company)

        self.cash = self._account("1010")
        self.revenue = self._account("4100")
        self.vat_payable = self._account("2100")
        self.expenses = self._account("6000")

    def _account(self, code):
        return Account.objects.get(company=self.company, code=code)

    def _post(self, lines, reference="JE-TEST-0001", **kwargs):
        kwargs.setdefault("entry_type", JournalEntry.EntryType.MANUAL)
        kwargs.setdefault("description", "Test entry")
        return create_journal_entry(
            context=self.ctx,
            reference_number=reference,
            lines=lines,
            **kwargs,
        )

    def test_balanced_entry_writes_lines_and_balances(self):
        entry = self._post(
            [
                {"account": self.cash, "debit": Decimal("1050.00")},
                {"account": self.revenue, "credit": Decimal("1000.00")},
                {"account": self.vat_payable, "credit": Decimal("50.00"), "memo": "VAT"},
            ]
        )

        self.assertEqual(entry.total_debit, Decimal("1050.00"))
        self.assertEqual(entry.total_credit, Decimal("1050.00"))
        self.assertEqual(entry.created_by, self.user)
        self.assertEqual(
            list(entry.lines.values_list("line_number", flat=True)),
            [1, 2, 3],
        )

        self.assertEqual(self._account("1010").current_balance, Decimal("1050.00"))
        self.assertEqual(self._account("4100").current_balance, Decimal("1000.00"))
        self.assertEqual(self._account("2100").current_balance, Decimal("50.00"))

    def test_credit_to_asset_reduces_its_balance(self):
        self._post(
            [
                {"account": self.cash, "debit": 500},
                {"account": self.revenue, "credit": 500},
            ],
            reference="JE-TEST-A",
        )
        self._post(
            [
                {"account": self.expenses, "debit": 200},
                {"account": self.cash, "credit": 200},
            ],
            reference="JE-TEST-B",
        )

        self.assertEqual(self._account("1010").current_balance, Decimal("300.00"))
        self.assertEqual(self._account("6000").current_balance, Decimal("200.00"))

    def test_imbalanced_entry_writes_nothing(self):
        with self.assertRaises(ImbalanceError) as ctx:
            self._post(
                [
                    {"account": self.cash, "debit": Decimal("100.00")},
                    {"account": self.revenue, "credit": Decimal("90.00")},
                ]
            )

        self.assertEqual(str(ctx.exception), "Debit and Credit must balance")
        self.assertFalse(JournalEntry.objects.exists())
        self.assertFalse(JournalEntryLine.objects.exists())
        self.assertEqual(self._account("1010").current_balance, Decimal("0.00"))

    def test_imbalance_after_rounding_is_rejected(self):
        # exact sums agree, stored 2dp amounts do not
        with self.assertRaises(ImbalanceError):
            self._post(
                [
                    {"account": self.cash, "debit": Decimal("0.005")},
                    {"account": self.cash, "debit": Decimal("0.005")},
                    {"account": self.revenue, "credit": Decimal("0.01")},
                ]
            )
        self.assertFalse(JournalEntry.objects.exists())

    def test_duplicate_reference_is_rejected(self):
        lines = [
            {"account": self.cash, "debit": 100},
            {"account": self.revenue, "credit": 100},
        ]
        self._post(lines)

        with self.assertRaises(DuplicateEntryError) as ctx:
            self._post(lines)

        self.assertEqual(ctx.exception.code, "DUPLICATE_ENTRY")
        self.assertEqual(JournalEntry.objects.count(), 1)
        self.assertEqual(self._account("1010").current_balance, Decimal("100.00"))

    def test_same_reference_allowed_in_another_company(self):
        other = make_company("Other Co")
        seed_standard_chart(other)
        other_ctx = make_context(other)

        self._post(
            [
                {"account": self.cash, "debit": 10},
                {"account": self.revenue, "credit": 10},
            ]
        )
        create_journal_entry(
            context=other_ctx,
            reference_number="JE-TEST-0001",
            entry_type=JournalEntry.EntryType.MANUAL,
            description="Other company entry",
            lines=[
                {"account": Account.objects.get(company=other, code="1010"), "debit": 10},
                {"account": Account.objects.get(company=other, code="4100"), "credit": 10},
            ],
        )

        self.assertEqual(JournalEntry.objects.count(), 2)

    def test_account_from_another_company_is_rejected(self):
        other = make_company("Other Co")
        seed_standard_chart(other)
        foreign_cash = Account.objects.get(company=other, code="1010")

        with self.assertRaises(JournalEntryCreationError):
            self._post(
                [
                    {"account": foreign_cash, "debit": 100},
                    {"account": self.revenue, "credit": 100},
                ]
            )
        self.assertFalse(JournalEntry.objects.exists())

    def test_inactive_account_is_rejected(self):
        Account.objects.filter(pk=self.revenue.pk).update(is_active=False)
        self.revenue.refresh_from_db()

        with self.assertRaises(JournalEntryCreationError):
            self._post(
                [
                    {"account": self.cash, "debit": 100},
                    {"account": self.revenue, "credit": 100},
                ]
            )

    def test_line_shape_errors(self):
        bad_line_sets = [
            [],
            [{"account": self.cash, "debit": 100, "credit": 100}],
            [{"account": self.cash}, {"account": self.revenue, "credit": 0}],
            [{"account": self.cash, "debit": -5}, {"account": self.revenue, "credit": -5}],
            [{"debit": 100}, {"account": self.revenue, "credit": 100}],
        ]
        for lines in bad_line_sets:
            with self.subTest(lines=lines):
                with self.assertRaises(JournalEntryCreationError):
                    self._post(lines)

        self.assertFalse(JournalEntry.objects.exists())

    def test_unknown_entry_type_is_rejected(self):
        with self.assertRaises(JournalEntryCreationError):
            self._post(
                [
                    {"account": self.cash, "debit": 100},
                    {"account": self.revenue, "credit": 100},
                ],
                entry_type="REFUND",
            )

    def test_entries_and_lines_are_immutable(self):
        entry = self._post(
            [
                {"account": self.cash, "debit": 100},
                {"account": self.revenue, "credit": 100},
            ]
        )
        line = entry.lines.first()

        entry.description = "Edited"
        with self.assertRaises(ValidationError):
            entry.save()
        with self.assertRaises(ValidationError):
            entry.delete()

        line.memo = "Edited"
        with self.assertRaises(ValidationError):
            line.save()
        with self.assertRaises(ValidationError):
            line.delete()

        entry.refresh_from_db()
        self.assertEqual(entry.description, "Test entry")
