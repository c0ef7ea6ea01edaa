# accounting/api/serializers/accounts.py

from rest_framework import serializers

from accounting.models.account import Account


class AccountListSerializer(serializers.ModelSerializer):
    """
    Read-only serializer for listing a company's accounts.
    UI needs: code, name, type, balance (and id for keys).
    """

    normal_side = serializers.CharField(read_only=True)

    class Meta:
        model = Account
        fields = (
            "id",
            "code",
            "name",
            "account_type",
            "normal_side",
            "current_balance",
            "is_active",
        )
        read_only_fields = fields


class AccountCreateSerializer(serializers.ModelSerializer):
    class Meta:
        model = Account
        fields = ("code", "name", "account_type", "is_active")

    def validate_code(self, value):
        value = (value or "").strip()
        company = self.context["company"]
        if Account.objects.filter(company=company, code=value).exists():
            raise serializers.ValidationError("An account with this code already exists")
        return value
