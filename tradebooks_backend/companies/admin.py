# companies/admin.py

from django.contrib import admin

from companies.models import Company, CompanyMembership, InvoiceSeries


class CompanyMembershipInline(admin.TabularInline):
    model = CompanyMembership
    extra = 0
    autocomplete_fields = ("user",)


class InvoiceSeriesInline(admin.TabularInline):
    model = InvoiceSeries
    extra = 0
    fields = ("prefix", "description", "next_number")


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ("name", "trn", "currency", "vat_rate", "vat_enabled", "is_active")
    list_filter = ("vat_enabled", "is_active", "currency")
    search_fields = ("name", "trn")
    readonly_fields = ("created_at", "updated_at")
    inlines = (CompanyMembershipInline, InvoiceSeriesInline)


@admin.register(InvoiceSeries)
class InvoiceSeriesAdmin(admin.ModelAdmin):
    list_display = ("company", "prefix", "next_number", "updated_at")
    list_filter = ("company",)
    search_fields = ("prefix", "company__name")
