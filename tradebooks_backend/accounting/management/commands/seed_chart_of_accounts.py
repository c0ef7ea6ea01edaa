# accounting/management/commands/seed_chart_of_accounts.py

from django.core.management.base import BaseCommand, CommandError

from accounting.services.chart_seed import seed_standard_chart
from companies.models import Company


class Command(BaseCommand):
    help = "Seed the standard chart of accounts for one company (idempotent)"

    def add_arguments(self, parser):
        parser.add_argument("--company", type=int, required=True, help="Company ID")

    def handle(self, *args, **options):
        company = Company.objects.filter(pk=options["company"]).first()
        if company is None:
            raise CommandError(f"Company {options['company']} not found")

        self.stdout.write(f"Seeding chart of accounts for {company.name}...")
        created, updated = seed_standard_chart(company)

        self.stdout.write(
            self.style.SUCCESS(
                f"Chart seeded for {company.name} ({created} new accounts, {updated} updated)."
            )
        )
