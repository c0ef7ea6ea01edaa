# products/admin.py
"""
=====================================================
PATH: products/admin.py
=====================================================

Admin rules (audit-safe inventory):

- Products, categories and warehouses are editable master data.
- Stock levels are visible but read-only here; quantities change only
  through products.services.inventory (which writes StockMovement).
- StockMovement is append-only: no add / change / delete in admin.
"""

from django.contrib import admin

from products.models import Category, Product, Stock, StockMovement, Warehouse


class StockInline(admin.TabularInline):
    model = Stock
    extra = 0
    can_delete = False
    fields = ("warehouse", "quantity", "updated_at")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "company")
    list_filter = ("company",)
    search_fields = ("name",)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "sku",
        "name",
        "company",
        "category",
        "selling_price",
        "cost_price",
        "reorder_level",
        "total_stock",
        "is_active",
    )
    list_filter = ("is_active", "company", "category")
    search_fields = ("sku", "name", "barcode")
    ordering = ("company", "name")
    readonly_fields = ("created_at", "updated_at")
    inlines = (StockInline,)


@admin.register(Warehouse)
class WarehouseAdmin(admin.ModelAdmin):
    list_display = ("name", "company", "location", "is_active")
    list_filter = ("is_active", "company")
    search_fields = ("name", "location")


@admin.register(Stock)
class StockAdmin(admin.ModelAdmin):
    list_display = ("product", "warehouse", "quantity", "updated_at")
    list_filter = ("warehouse",)
    search_fields = ("product__sku", "product__name")
    readonly_fields = ("product", "warehouse", "quantity", "updated_at")

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(StockMovement)
class StockMovementAdmin(admin.ModelAdmin):
    list_display = (
        "created_at",
        "product",
        "warehouse",
        "movement_type",
        "quantity",
        "reference",
        "performed_by",
    )
    list_filter = ("movement_type", "warehouse")
    search_fields = ("product__sku", "reference", "notes")
    ordering = ("-created_at",)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
