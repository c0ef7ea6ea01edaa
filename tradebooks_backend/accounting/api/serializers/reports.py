# accounting/api/serializers/reports.py

"""
Output shapes for accounting reports (money rendered as 2dp strings).
"""

from rest_framework import serializers

from accounting.api.serializers.fields import money_field


class VatSummarySerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    output_vat = money_field()
    input_vat = money_field()
    vat_payable = money_field()
    net_position = money_field()


class TrialBalanceRowSerializer(serializers.Serializer):
    account_id = serializers.IntegerField()
    code = serializers.CharField()
    name = serializers.CharField()
    account_type = serializers.CharField()
    debit = money_field()
    credit = money_field()
    balance = money_field()
    side = serializers.CharField()


class TrialBalanceTotalsSerializer(serializers.Serializer):
    debit = money_field()
    credit = money_field()
    balanced = serializers.BooleanField()


class TrialBalanceSerializer(serializers.Serializer):
    as_of_date = serializers.DateField()
    accounts = TrialBalanceRowSerializer(many=True)
    totals = TrialBalanceTotalsSerializer()


class AccountAmountSerializer(serializers.Serializer):
    account_id = serializers.IntegerField()
    code = serializers.CharField()
    name = serializers.CharField()
    amount = money_field()


class StatementSectionSerializer(serializers.Serializer):
    accounts = AccountAmountSerializer(many=True)
    total = money_field()


class IncomeStatementSerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    revenue = StatementSectionSerializer()
    expenses = StatementSectionSerializer()
    net_profit = money_field()


class ReconciliationMismatchSerializer(serializers.Serializer):
    account_id = serializers.IntegerField()
    code = serializers.CharField()
    name = serializers.CharField()
    cached_balance = money_field()
    derived_balance = money_field()
    difference = money_field()


class PreviewLineInputSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)
    unit_price = money_field(min_value=0)


class TotalsPreviewInputSerializer(serializers.Serializer):
    items = PreviewLineInputSerializer(many=True, allow_empty=True)
    discount_percent = serializers.DecimalField(max_digits=7, decimal_places=2, default=0)
    tax_inclusive = serializers.BooleanField(default=False)


class LineTotalsSerializer(serializers.Serializer):
    quantity = serializers.DecimalField(max_digits=12, decimal_places=0)
    unit_price = money_field()
    tax_rate = money_field()
    line_total = money_field()
    tax_amount = money_field()


class DocumentTotalsSerializer(serializers.Serializer):
    subtotal = money_field()
    discount_percent = money_field()
    discount_amount = money_field()
    net_subtotal = money_field()
    vat_rate = money_field()
    vat_amount = money_field()
    total = money_field()
    tax_inclusive = serializers.BooleanField()
    lines = LineTotalsSerializer(many=True)
