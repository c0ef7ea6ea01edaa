# accounting/api/serializers/journal_entries.py

from rest_framework import serializers

from accounting.api.serializers.fields import money_field
from accounting.models.journal import JournalEntry
from accounting.models.journal_line import JournalEntryLine


class JournalEntrySerializer(serializers.ModelSerializer):
    class Meta:
        model = JournalEntry
        fields = (
            "id",
            "reference_number",
            "entry_date",
            "entry_type",
            "description",
            "total_debit",
            "total_credit",
            "created_by",
            "created_at",
        )
        read_only_fields = fields


class JournalEntryLineSerializer(serializers.ModelSerializer):
    debit_account_code = serializers.CharField(source="debit_account.code", read_only=True, default=None)
    credit_account_code = serializers.CharField(source="credit_account.code", read_only=True, default=None)

    class Meta:
        model = JournalEntryLine
        fields = (
            "line_number",
            "debit_account",
            "debit_account_code",
            "debit_amount",
            "credit_account",
            "credit_account_code",
            "credit_amount",
            "memo",
        )
        read_only_fields = fields


class JournalEntryDetailSerializer(JournalEntrySerializer):
    lines = JournalEntryLineSerializer(many=True, read_only=True)

    class Meta(JournalEntrySerializer.Meta):
        fields = JournalEntrySerializer.Meta.fields + ("lines",)
        read_only_fields = fields


class ManualLineInputSerializer(serializers.Serializer):
    account_code = serializers.CharField(max_length=10)
    debit = money_field(required=False, allow_null=True, min_value=0)
    credit = money_field(required=False, allow_null=True, min_value=0)
    memo = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)

    def validate(self, attrs):
        debit = attrs.get("debit") or 0
        credit = attrs.get("credit") or 0
        if bool(debit) == bool(credit):
            raise serializers.ValidationError("Each line needs exactly one of debit or credit")
        return attrs


class ManualJournalEntryInputSerializer(serializers.Serializer):
    description = serializers.CharField()
    entry_type = serializers.ChoiceField(
        choices=[JournalEntry.EntryType.MANUAL, JournalEntry.EntryType.ADJUSTMENT],
        default=JournalEntry.EntryType.MANUAL,
    )
    entry_date = serializers.DateField(required=False, allow_null=True)
    reference_number = serializers.CharField(required=False, allow_blank=True, max_length=100)
    lines = ManualLineInputSerializer(many=True, allow_empty=False)
