# purchases/api/serializers.py

from rest_framework import serializers

from accounting.api.serializers.fields import money_field
from accounting.services.posting import purchase_reference
from purchases.models import Purchase, PurchaseItem, Vendor


class VendorSerializer(serializers.ModelSerializer):
    class Meta:
        model = Vendor
        fields = (
            "id",
            "name",
            "email",
            "phone",
            "address",
            "city",
            "trn",
            "is_active",
            "created_at",
        )
        read_only_fields = ("id", "created_at")


class PurchaseItemSerializer(serializers.ModelSerializer):
    sku = serializers.CharField(source="product.sku", read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True)

    class Meta:
        model = PurchaseItem
        fields = (
            "id",
            "product",
            "sku",
            "product_name",
            "quantity",
            "unit_cost",
            "tax_rate",
            "tax_amount",
            "line_total",
        )
        read_only_fields = fields


class PurchaseSerializer(serializers.ModelSerializer):
    vendor_name = serializers.CharField(source="vendor.name", read_only=True)
    warehouse_name = serializers.CharField(source="warehouse.name", read_only=True)
    journal_reference = serializers.SerializerMethodField()

    class Meta:
        model = Purchase
        fields = (
            "id",
            "po_number",
            "po_date",
            "vendor",
            "vendor_name",
            "warehouse",
            "warehouse_name",
            "subtotal",
            "discount_percent",
            "discount_amount",
            "tax_inclusive",
            "vat_rate",
            "input_vat",
            "total_amount",
            "status",
            "journal_reference",
            "notes",
            "created_by",
            "created_at",
        )
        read_only_fields = fields

    def get_journal_reference(self, obj) -> str:
        return purchase_reference(obj.po_number)


class PurchaseDetailSerializer(PurchaseSerializer):
    items = PurchaseItemSerializer(many=True, read_only=True)

    class Meta(PurchaseSerializer.Meta):
        fields = PurchaseSerializer.Meta.fields + ("items",)
        read_only_fields = fields


class PurchaseItemInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)
    unit_cost = money_field(min_value=0, required=False, allow_null=True, default=None)


class PurchaseCreateInputSerializer(serializers.Serializer):
    vendor_id = serializers.IntegerField(min_value=1)
    warehouse_id = serializers.IntegerField(min_value=1)
    items = PurchaseItemInputSerializer(many=True, allow_empty=False)
    discount_percent = serializers.DecimalField(max_digits=7, decimal_places=2, default=0)
    tax_inclusive = serializers.BooleanField(default=False)
    po_date = serializers.DateField(required=False, allow_null=True, default=None)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
