# companies/management/commands/seed_demo_company.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from accounting.services.chart_seed import seed_standard_chart
from companies.models import Company, CompanyMembership, InvoiceSeries
from products.models import Product, Stock, Warehouse
from products.services.inventory import increase_stock_on_purchase
from purchases.models import Vendor
from sales.models import Customer

User = get_user_model()

DEMO_PRODUCTS = [
    # sku, name, selling, cost, reorder level, opening stock
    ("LAP-001", "Laptop", Decimal("3500.00"), Decimal("2500.00"), 5, 20),
    ("DESK-001", "Office Desk", Decimal("800.00"), Decimal("500.00"), 3, 15),
]

DEMO_CUSTOMERS = [
    ("ABC Corporation", "accounts@abccorp.example", "Dubai"),
    ("XYZ Trading", "finance@xyztrading.example", "Sharjah"),
]


class Command(BaseCommand):
    help = "Seed a demo company with series, chart, warehouse, products, customers and a vendor (idempotent)"

    def add_arguments(self, parser):
        parser.add_argument("--name", default="Al Baraka Trading LLC", help="Company name")
        parser.add_argument("--username", default="", help="Existing user to attach as a member")

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING("Seeding demo company..."))

        company, created = Company.objects.get_or_create(
            name=options["name"],
            defaults={
                "trn": "100000000000003",
                "currency": "AED",
                "vat_rate": Decimal("5.00"),
                "vat_enabled": True,
            },
        )
        self.stdout.write(f"{'Created' if created else 'Found'} company {company.name} (id={company.pk})")

        username = (options["username"] or "").strip()
        if username:
            user = User.objects.filter(username=username).first()
            if user is None:
                raise CommandError(f"User '{username}' not found")
            CompanyMembership.objects.get_or_create(user=user, company=company)

        for prefix, description in (("SI", "Sales invoices"), ("PO", "Purchase orders")):
            InvoiceSeries.objects.get_or_create(
                company=company,
                prefix=prefix,
                defaults={"description": description, "next_number": 1001},
            )

        created_accounts, updated_accounts = seed_standard_chart(company)
        self.stdout.write(f"Chart: {created_accounts} new, {updated_accounts} updated")

        warehouse, _ = Warehouse.objects.get_or_create(
            company=company,
            name="Main Warehouse",
            defaults={"location": "Dubai"},
        )

        for sku, name, selling, cost, reorder_level, opening in DEMO_PRODUCTS:
            product, _ = Product.objects.get_or_create(
                company=company,
                sku=sku,
                defaults={
                    "name": name,
                    "selling_price": selling,
                    "cost_price": cost,
                    "reorder_level": reorder_level,
                },
            )
            if not Stock.objects.filter(product=product, warehouse=warehouse).exists():
                increase_stock_on_purchase(
                    product=product,
                    warehouse=warehouse,
                    quantity=opening,
                    reference="OPENING-STOCK",
                )

        for name, email, city in DEMO_CUSTOMERS:
            Customer.objects.get_or_create(
                company=company,
                name=name,
                defaults={"email": email, "city": city},
            )

        Vendor.objects.get_or_create(
            company=company,
            name="Global Supplies",
            defaults={"email": "orders@globalsupplies.example", "city": "Abu Dhabi"},
        )

        self.stdout.write(self.style.SUCCESS(f"Demo company ready (id={company.pk})."))
