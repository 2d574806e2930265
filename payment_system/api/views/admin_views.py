import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from authentication.permissions import AdminRequired
from infrastructure.container import container
from marketplace.api.responses import error_response
from payment_system.api.serializers import (
    AccountVerificationRequestSerializer,
    ErrorResponseSerializer,
    PaymentAccountResponseSerializer,
    PayoutStatusRequestSerializer,
    VendorPayoutSerializer,
)


logger = logging.getLogger(__name__)


@extend_schema(
    operation_id="admin_payout_status",
    summary="Mark a vendor payout processed or failed",
    request=PayoutStatusRequestSerializer,
    responses={
        200: OpenApiResponse(response=VendorPayoutSerializer, description="Payout updated"),
        404: OpenApiResponse(response=ErrorResponseSerializer, description="Payout not found"),
    },
    tags=["Admin"],
)
@api_view(["POST"])
@permission_classes([AdminRequired])
def update_payout_status(request, payout_id):
    serializer = PayoutStatusRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    result = container.payout_service().update_status(payout_id, serializer.validated_data["status"])
    if not result.ok:
        return error_response(result)

    logger.info(f"Admin {request.user.id} set payout {payout_id} to {result.value.status}")
    return Response(VendorPayoutSerializer(result.value).data)


@extend_schema(
    operation_id="admin_payment_account_verification",
    summary="Verify or reject a vendor payment account",
    request=AccountVerificationRequestSerializer,
    responses={
        200: OpenApiResponse(response=PaymentAccountResponseSerializer, description="Account updated"),
        404: OpenApiResponse(response=ErrorResponseSerializer, description="Account not found"),
    },
    tags=["Admin"],
)
@api_view(["POST"])
@permission_classes([AdminRequired])
def payment_account_verification(request, account_id):
    serializer = AccountVerificationRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    result = container.payment_service().set_verification(
        account_id, serializer.validated_data["status"], serializer.validated_data.get("notes", "")
    )
    if not result.ok:
        return error_response(result)

    logger.info(f"Admin {request.user.id} set payment account {account_id} to {serializer.validated_data['status']}")
    return Response(result.value)
