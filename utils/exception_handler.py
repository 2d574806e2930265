"""
DRF exception handler producing the API error envelope.

Every error response has the shape ``{"error": <code>, "detail": <message>}``.
Unhandled exceptions become ``internal_error`` with the message redacted unless
DEBUG is on.
"""

import logging

from django.conf import settings
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

_STATUS_CODES = {
    status.HTTP_400_BAD_REQUEST: "validation_error",
    status.HTTP_401_UNAUTHORIZED: "not_authenticated",
    status.HTTP_403_FORBIDDEN: "permission_denied",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_429_TOO_MANY_REQUESTS: "throttled",
}


def _flatten_detail(detail):
    if isinstance(detail, list):
        return "; ".join(str(_flatten_detail(item)) for item in detail)
    if isinstance(detail, dict):
        return "; ".join(f"{key}: {_flatten_detail(value)}" for key, value in detail.items())
    return str(detail)


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)

    if response is not None:
        code = _STATUS_CODES.get(response.status_code, "error")
        data = response.data
        detail = data.get("detail", data) if isinstance(data, dict) else data
        payload = {"error": code, "detail": _flatten_detail(detail)}
        if isinstance(exc, exceptions.ValidationError):
            payload["fields"] = response.data
        response.data = payload
        return response

    view = context.get("view")
    logger.error(
        f"Unhandled exception in {view.__class__.__name__ if view else 'unknown view'}: {exc}",
        exc_info=exc,
    )
    detail = str(exc) if settings.DEBUG else "An unexpected error occurred. Please try again later."
    return Response({"error": "internal_error", "detail": detail}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
