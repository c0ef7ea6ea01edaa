# products/api/serializers.py

"""
PRODUCTS API SERIALIZERS

Rules:
- company is never client-supplied; views pass it via serializer context
- stock quantities are read-only here (inventory services own them)
"""

from rest_framework import serializers

from accounting.api.serializers.fields import money_field
from products.models import Category, Product, Stock, StockMovement, Warehouse
from products.services.inventory import reorder_status


class ProductSerializer(serializers.ModelSerializer):
    category = serializers.PrimaryKeyRelatedField(
        queryset=Category.objects.all(), required=False, allow_null=True
    )
    category_name = serializers.CharField(source="category.name", read_only=True, default="")
    total_stock = serializers.IntegerField(read_only=True)

    class Meta:
        model = Product
        fields = (
            "id",
            "sku",
            "name",
            "category",
            "category_name",
            "barcode",
            "unit",
            "selling_price",
            "cost_price",
            "reorder_level",
            "total_stock",
            "is_active",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("id", "category_name", "total_stock", "created_at", "updated_at")
        # (company, sku) uniqueness is checked in validate_sku
        validators = []

    def validate_sku(self, value):
        value = (value or "").strip().upper()
        if not value:
            raise serializers.ValidationError("SKU is required")
        company = self.context["company"]
        if Product.objects.filter(company=company, sku=value).exists():
            raise serializers.ValidationError("A product with this SKU already exists")
        return value

    def validate_category(self, value):
        if value is not None and value.company_id != self.context["company"].pk:
            raise serializers.ValidationError("Category belongs to another company")
        return value

    def validate_selling_price(self, value):
        if value < 0:
            raise serializers.ValidationError("Selling price must be non-negative")
        return value

    def validate_cost_price(self, value):
        if value < 0:
            raise serializers.ValidationError("Cost price must be non-negative")
        return value


class WarehouseSerializer(serializers.ModelSerializer):
    class Meta:
        model = Warehouse
        fields = ("id", "name", "location", "is_active", "created_at")
        read_only_fields = ("id", "created_at")
        validators = []

    def validate_name(self, value):
        value = (value or "").strip()
        if Warehouse.objects.filter(company=self.context["company"], name=value).exists():
            raise serializers.ValidationError("A warehouse with this name already exists")
        return value


class StockSerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(read_only=True)
    sku = serializers.CharField(source="product.sku", read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True)
    warehouse_id = serializers.IntegerField(read_only=True)
    warehouse_name = serializers.CharField(source="warehouse.name", read_only=True)
    status = serializers.SerializerMethodField()

    class Meta:
        model = Stock
        fields = (
            "id",
            "product_id",
            "sku",
            "product_name",
            "warehouse_id",
            "warehouse_name",
            "quantity",
            "status",
            "updated_at",
        )
        read_only_fields = fields

    def get_status(self, obj) -> str:
        return reorder_status(obj.quantity, obj.product.reorder_level)


class StockMovementSerializer(serializers.ModelSerializer):
    warehouse_name = serializers.CharField(source="warehouse.name", read_only=True)
    performed_by = serializers.SerializerMethodField()

    class Meta:
        model = StockMovement
        fields = (
            "id",
            "product",
            "warehouse",
            "warehouse_name",
            "movement_type",
            "quantity",
            "reference",
            "notes",
            "performed_by",
            "created_at",
        )
        read_only_fields = fields

    def get_performed_by(self, obj):
        user = obj.performed_by
        return user.get_username() if user else None


class StockAdjustmentInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    warehouse_id = serializers.IntegerField(min_value=1)
    quantity_delta = serializers.IntegerField()
    reason = serializers.CharField(max_length=500)

    def validate_quantity_delta(self, value):
        if value == 0:
            raise serializers.ValidationError("quantity_delta cannot be 0")
        return value


class LowStockItemSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    sku = serializers.CharField()
    name = serializers.CharField()
    total_quantity = serializers.IntegerField()
    reorder_level = serializers.IntegerField()
    status = serializers.CharField()


class InventoryReportRowSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    sku = serializers.CharField()
    name = serializers.CharField()
    total_quantity = serializers.IntegerField()
    reorder_level = serializers.IntegerField()
    cost_price = money_field()
    stock_value = money_field()
    status = serializers.CharField()
