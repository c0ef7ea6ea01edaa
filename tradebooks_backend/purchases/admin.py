# purchases/admin.py

from django.contrib import admin

from purchases.models import Purchase, PurchaseItem, Vendor


@admin.register(Vendor)
class VendorAdmin(admin.ModelAdmin):
    list_display = ("name", "company", "email", "phone", "city", "is_active")
    list_filter = ("is_active", "company")
    search_fields = ("name", "email", "trn")


class PurchaseItemInline(admin.TabularInline):
    model = PurchaseItem
    extra = 0
    can_delete = False
    fields = ("product", "quantity", "unit_cost", "tax_rate", "tax_amount", "line_total")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Purchase)
class PurchaseAdmin(admin.ModelAdmin):
    list_display = ("po_number", "company", "po_date", "vendor", "total_amount", "input_vat", "status")
    list_filter = ("status", "company", "po_date")
    search_fields = ("po_number", "vendor__name")
    inlines = (PurchaseItemInline,)
    readonly_fields = (
        "company",
        "po_number",
        "po_date",
        "vendor",
        "warehouse",
        "subtotal",
        "discount_percent",
        "discount_amount",
        "tax_inclusive",
        "vat_rate",
        "input_vat",
        "total_amount",
        "status",
        "notes",
        "created_by",
        "created_at",
    )

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
