# accounting/api/serializers/fields.py

from decimal import ROUND_HALF_UP

from rest_framework import serializers


def money_field(**kwargs) -> serializers.DecimalField:
    """2dp, ROUND_HALF_UP, rendered as a string."""
    kwargs.setdefault("max_digits", 18)
    kwargs.setdefault("decimal_places", 2)
    return serializers.DecimalField(rounding=ROUND_HALF_UP, **kwargs)
