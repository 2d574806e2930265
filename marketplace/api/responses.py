"""
Helpers turning service results into DRF responses.

Error bodies always have the shape ``{"error": <code>, "detail": <message>}``.
"""

from rest_framework import status
from rest_framework.response import Response

from marketplace.services.base import ErrorCodes, ServiceResult

NOT_FOUND_CODES = {
    ErrorCodes.PRODUCT_NOT_FOUND,
    ErrorCodes.VENDOR_NOT_FOUND,
    ErrorCodes.ORDER_NOT_FOUND,
    ErrorCodes.PAYMENT_NOT_FOUND,
    ErrorCodes.PAYOUT_NOT_FOUND,
    ErrorCodes.PAYMENT_ACCOUNT_NOT_FOUND,
    ErrorCodes.REVIEW_NOT_FOUND,
    ErrorCodes.REPORT_NOT_FOUND,
    ErrorCodes.BUG_REPORT_NOT_FOUND,
    ErrorCodes.USER_NOT_FOUND,
    ErrorCodes.ITEM_NOT_IN_CART,
}

FORBIDDEN_CODES = {
    ErrorCodes.PERMISSION_DENIED,
    ErrorCodes.NOT_LISTING_OWNER,
    ErrorCodes.VENDOR_NOT_VERIFIED,
}


def status_for(error: str) -> int:
    if error in NOT_FOUND_CODES:
        return status.HTTP_404_NOT_FOUND
    if error in FORBIDDEN_CODES:
        return status.HTTP_403_FORBIDDEN
    if error == ErrorCodes.INTERNAL_ERROR:
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


def error_response(result: ServiceResult, http_status: int = None) -> Response:
    return Response(
        {"error": result.error, "detail": result.error_detail},
        status=http_status or status_for(result.error),
    )


def error(code: str, detail: str, http_status: int = None) -> Response:
    return Response({"error": code, "detail": detail}, status=http_status or status_for(code))
