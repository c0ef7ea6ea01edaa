# sales/api/serializers.py

from rest_framework import serializers

from accounting.api.serializers.fields import money_field
from accounting.services.posting import sale_reference
from sales.models import Customer, Sale, SaleItem


class CustomerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
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


class SaleItemSerializer(serializers.ModelSerializer):
    sku = serializers.CharField(source="product.sku", read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True)

    class Meta:
        model = SaleItem
        fields = (
            "id",
            "product",
            "sku",
            "product_name",
            "quantity",
            "unit_price",
            "tax_rate",
            "tax_amount",
            "line_total",
        )
        read_only_fields = fields


class SaleSerializer(serializers.ModelSerializer):
    customer_name = serializers.CharField(source="customer.name", read_only=True, default=None)
    warehouse_name = serializers.CharField(source="warehouse.name", read_only=True)
    journal_reference = serializers.SerializerMethodField()

    class Meta:
        model = Sale
        fields = (
            "id",
            "invoice_number",
            "invoice_date",
            "customer",
            "customer_name",
            "warehouse",
            "warehouse_name",
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
            "journal_reference",
            "notes",
            "created_by",
            "created_at",
        )
        read_only_fields = fields

    def get_journal_reference(self, obj) -> str:
        return sale_reference(obj.invoice_number)


class SaleDetailSerializer(SaleSerializer):
    items = SaleItemSerializer(many=True, read_only=True)

    class Meta(SaleSerializer.Meta):
        fields = SaleSerializer.Meta.fields + ("items",)
        read_only_fields = fields


# ==========================================================
# INPUT
# ==========================================================


class SaleItemInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)
    unit_price = money_field(min_value=0, required=False, allow_null=True, default=None)


class SaleCreateInputSerializer(serializers.Serializer):
    customer_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    warehouse_id = serializers.IntegerField(min_value=1)
    items = SaleItemInputSerializer(many=True, allow_empty=False)
    discount_percent = serializers.DecimalField(max_digits=7, decimal_places=2, default=0)
    tax_inclusive = serializers.BooleanField(default=False)
    paid_amount = money_field(min_value=0, default=0)
    invoice_date = serializers.DateField(required=False, allow_null=True, default=None)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class CartLineInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField()
    unit_price = money_field(min_value=0, required=False, allow_null=True, default=None)


class CartPreviewInputSerializer(serializers.Serializer):
    items = CartLineInputSerializer(many=True, allow_empty=True)
    discount_percent = serializers.DecimalField(max_digits=7, decimal_places=2, default=0)
    tax_inclusive = serializers.BooleanField(default=False)
