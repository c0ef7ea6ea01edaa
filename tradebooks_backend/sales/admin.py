# sales/admin.py

from django.contrib import admin

from sales.models import Customer, Sale, SaleItem


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("name", "company", "email", "phone", "city", "is_active")
    list_filter = ("is_active", "company")
    search_fields = ("name", "email", "phone", "trn")


class SaleItemInline(admin.TabularInline):
    model = SaleItem
    extra = 0
    can_delete = False
    fields = ("product", "quantity", "unit_price", "tax_rate", "tax_amount", "line_total")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    """
    Sales are created by the sale service only. Admin is read-only.
    """

    list_display = (
        "invoice_number",
        "company",
        "invoice_date",
        "customer",
        "total_amount",
        "output_vat",
        "paid_amount",
        "payment_status",
        "status",
    )
    list_filter = ("status", "payment_status", "company", "invoice_date")
    search_fields = ("invoice_number", "customer__name")
    ordering = ("-invoice_date", "-created_at")
    inlines = (SaleItemInline,)

    readonly_fields = (
        "company",
        "invoice_number",
        "invoice_date",
        "customer",
        "warehouse",
        "subtotal",
        "discount_percent",
        "discount_amount",
        "tax_inclusive",
        "vat_rate",
        "output_vat",
        "total_amount",
        "paid_amount",
        "status",
        "payment_status",
        "notes",
        "created_by",
        "created_at",
    )

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
