# backend/exceptions.py

"""
DOMAIN ERRORS + API ERROR NORMALIZATION

Service layers raise:
- django.core.exceptions.ValidationError  (field-level input problems)
- DomainError subclasses                  (not found, imbalance, missing accounts, stock)

The DRF exception handler below turns them into one response shape:

    {"error": {"code": "...", "message": "...", "details": {...}}}

Anything else is left to DRF's default handler.
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class DomainError(Exception):
    """Base class for errors that are reported to the caller, never retried."""

    code = "DOMAIN_ERROR"
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "", *, details: dict | None = None):
        super().__init__(message)
        self.message = message or self.__class__.__doc__ or self.code
        self.details = details or {}

    def __str__(self):
        return self.message


class NotFoundError(DomainError):
    """Referenced record does not exist (or belongs to another company)."""

    code = "NOT_FOUND"
    http_status = status.HTTP_404_NOT_FOUND


def error_response(*, code: str, message: str, http_status: int, details=None):
    payload = {"code": code, "message": message}
    if details:
        payload["details"] = details
    return Response({"error": payload}, status=http_status)


def _validation_details(exc: DjangoValidationError) -> dict:
    if hasattr(exc, "error_dict"):
        return exc.message_dict
    return {"non_field_errors": exc.messages}


def domain_exception_handler(exc, context):
    if isinstance(exc, DjangoValidationError):
        details = _validation_details(exc)
        first = next(iter(details.values()), [""])
        message = first[0] if isinstance(first, list) and first else str(first)
        return error_response(
            code="VALIDATION_ERROR",
            message=message or "Invalid input",
            http_status=status.HTTP_400_BAD_REQUEST,
            details=details,
        )

    if isinstance(exc, DomainError):
        view = context.get("view")
        logger.warning(
            "%s in %s: %s",
            exc.code,
            view.__class__.__name__ if view is not None else "unknown view",
            exc.message,
        )
        return error_response(
            code=exc.code,
            message=exc.message,
            http_status=exc.http_status,
            details=exc.details,
        )

    return exception_handler(exc, context)
