# companies/tests/test_numbering.py

from datetime import date

from django.core.exceptions import ValidationError
from django.test import SimpleTestCase, TestCase

from backend.exceptions import NotFoundError
from companies.models import InvoiceSeries
from companies.services.numbering import format_document_number, reserve_document_number
from companies.tests.factories import make_company, make_series


class FormatDocumentNumberTests(SimpleTestCase):
    def test_zero_padded(self):
        self.assertEqual(format_document_number("SI", 2024, 1), "SI-2024-000001")

    def test_prefix_is_normalised(self):
        self.assertEqual(format_document_number(" po ", 2024, 1001), "PO-2024-001001")


class ReserveDocumentNumberTests(TestCase):
    def setUp(self):
        self.company = make_company()
        self.series = make_series(self.company, "SI")

    def test_sequential_numbers(self):
        on = date(2024, 3, 1)
        self.assertEqual(reserve_document_number(self.company, "SI", on_date=on), "SI-2024-000001")
        self.assertEqual(reserve_document_number(self.company, "SI", on_date=on), "SI-2024-000002")

        self.series.refresh_from_db()
        self.assertEqual(self.series.next_number, 3)

    def test_series_are_per_company(self):
        other = make_company("Other Co")
        make_series(other, "SI", next_number=50)

        on = date(2024, 1, 1)
        self.assertEqual(reserve_document_number(other, "SI", on_date=on), "SI-2024-000050")
        self.assertEqual(reserve_document_number(self.company, "SI", on_date=on), "SI-2024-000001")

    def test_missing_series_is_not_found(self):
        with self.assertRaises(NotFoundError):
            reserve_document_number(self.company, "CN")

    def test_prefix_cannot_contain_separator(self):
        with self.assertRaises(ValidationError):
            InvoiceSeries.objects.create(company=self.company, prefix="S-I")
