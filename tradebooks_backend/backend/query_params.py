# backend/query_params.py

"""
Query-string parsing for API views. Bad input raises Django's
ValidationError keyed by the parameter name (-> HTTP 400).
"""

from __future__ import annotations

from datetime import date

from django.core.exceptions import ValidationError
from django.utils.dateparse import parse_date


def date_param(request, name: str, *, required: bool = False, default: date | None = None):
    raw = (request.query_params.get(name) or "").strip()
    if not raw:
        if required:
            raise ValidationError({name: f"{name} is required (YYYY-MM-DD)"})
        return default

    try:
        value = parse_date(raw)
    except ValueError:
        value = None
    if value is None:
        raise ValidationError({name: f"Invalid {name} (expected YYYY-MM-DD)"})
    return value


def int_param(request, name: str, *, required: bool = False):
    raw = (request.query_params.get(name) or "").strip()
    if not raw:
        if required:
            raise ValidationError({name: f"{name} is required"})
        return None

    try:
        return int(raw)
    except ValueError:
        raise ValidationError({name: f"{name} must be an integer"})
