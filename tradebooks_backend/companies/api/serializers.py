# companies/api/serializers.py

from rest_framework import serializers

from companies.models import Company, CompanyMembership, InvoiceSeries


class CompanySerializer(serializers.ModelSerializer):
    effective_vat_rate = serializers.DecimalField(
        max_digits=5, decimal_places=2, read_only=True
    )

    class Meta:
        model = Company
        fields = (
            "id",
            "name",
            "trn",
            "currency",
            "vat_rate",
            "vat_enabled",
            "effective_vat_rate",
            "is_active",
        )
        read_only_fields = fields


class MembershipSerializer(serializers.ModelSerializer):
    company = CompanySerializer(read_only=True)

    class Meta:
        model = CompanyMembership
        fields = ("id", "company", "is_active", "created_at")
        read_only_fields = fields


class InvoiceSeriesSerializer(serializers.ModelSerializer):
    class Meta:
        model = InvoiceSeries
        fields = ("id", "prefix", "description", "next_number", "created_at")
        read_only_fields = ("id", "created_at")

    def validate_prefix(self, value):
        value = (value or "").strip().upper()
        company = self.context["company"]
        if InvoiceSeries.objects.filter(company=company, prefix=value).exists():
            raise serializers.ValidationError("A series with this prefix already exists")
        return value

    def validate_next_number(self, value):
        if value < 1:
            raise serializers.ValidationError("next_number must be >= 1")
        return value
