"""
Payment and vendor account views.

- Payment details of an order (owner or admin)
- Vendor payment account setup and masked details
- Vendor earnings and payout history
"""

import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from authentication.permissions import VendorRequired
from infrastructure.container import container
from marketplace.api.responses import error, error_response
from marketplace.models import Vendor
from marketplace.services.base import ErrorCodes
from payment_system.api.serializers import (
    ErrorResponseSerializer,
    OrderPaymentResponseSerializer,
    PaymentAccountResponseSerializer,
    PaymentAccountSetupRequestSerializer,
    PaymentSerializer,
    VendorEarningsResponseSerializer,
    VendorPayoutSerializer,
)


logger = logging.getLogger(__name__)


def _vendor_for(user):
    return Vendor.objects.filter(user=user).first()


def _vendor_missing():
    return error(ErrorCodes.VENDOR_NOT_FOUND, "Vendor profile not found")


@extend_schema(
    operation_id="payments_order_details",
    summary="Payment details for an order",
    description="Latest payment recorded for one of the caller's orders, with its vendor payouts.",
    responses={
        200: OpenApiResponse(response=OrderPaymentResponseSerializer, description="Payment details"),
        404: OpenApiResponse(response=ErrorResponseSerializer, description="Order or payment not found"),
    },
    tags=["Payments"],
)
@api_view(["GET"])
@permission_classes([IsAuthenticated])
def order_payment_details(request, order_id):
    result = container.payment_service().get_order_payment(request.user, order_id)
    if not result.ok:
        return error_response(result)

    order = result.value["order"]
    return Response(
        {
            "orderId": order.id,
            "orderStatus": order.status,
            "payment": PaymentSerializer(result.value["payment"]).data,
        }
    )


@extend_schema(
    operation_id="payments_vendor_account_details",
    summary="Vendor payment account",
    responses={
        200: OpenApiResponse(response=PaymentAccountResponseSerializer, description="Account, number masked"),
        404: OpenApiResponse(response=ErrorResponseSerializer, description="No account set up"),
    },
    tags=["Payments"],
)
@api_view(["GET"])
@permission_classes([VendorRequired])
def vendor_account_details(request):
    vendor = _vendor_for(request.user)
    if vendor is None:
        return _vendor_missing()

    result = container.payment_service().get_account(vendor)
    if not result.ok:
        return error_response(result)
    return Response(result.value)


@extend_schema(
    operation_id="payments_vendor_account_setup",
    summary="Create or update the vendor payment account",
    description="Changing any bank detail resets verification to pending.",
    request=PaymentAccountSetupRequestSerializer,
    responses={
        200: OpenApiResponse(response=PaymentAccountResponseSerializer, description="Account updated"),
        201: OpenApiResponse(response=PaymentAccountResponseSerializer, description="Account created"),
        400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation error"),
    },
    tags=["Payments"],
)
@api_view(["POST"])
@permission_classes([VendorRequired])
def vendor_account_setup(request):
    vendor = _vendor_for(request.user)
    if vendor is None:
        return _vendor_missing()

    serializer = PaymentAccountSetupRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    result = container.payment_service().setup_account(vendor, serializer.validated_data)
    if not result.ok:
        return error_response(result)

    logger.info(f"Vendor {vendor.id} saved payment account")
    return Response(
        result.value["account"],
        status=status.HTTP_201_CREATED if result.value["created"] else status.HTTP_200_OK,
    )


@extend_schema(
    operation_id="payments_vendor_earnings",
    summary="Vendor earnings and payout history",
    responses={
        200: OpenApiResponse(response=VendorEarningsResponseSerializer, description="Earnings summary"),
    },
    tags=["Payments"],
)
@api_view(["GET"])
@permission_classes([VendorRequired])
def vendor_earnings(request):
    vendor = _vendor_for(request.user)
    if vendor is None:
        return _vendor_missing()

    result = container.payout_service().vendor_earnings(vendor)
    if not result.ok:
        return error_response(result)

    return Response(
        {
            "summary": result.value["summary"],
            "payouts": VendorPayoutSerializer(result.value["payouts"], many=True).data,
        }
    )
