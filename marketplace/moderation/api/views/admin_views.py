"""
Admin moderation endpoints.

- Platform dashboard statistics
- Vendor verification, rejection and deletion
- User accounts
- Report review
"""

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from authentication.permissions import AdminRequired
from infrastructure.container import container
from marketplace.api.responses import error_response
from marketplace.api.serializers import ErrorResponseSerializer, MessageResponseSerializer
from marketplace.catalog.api.views.product_views import UUID_PATTERN
from marketplace.moderation.api.serializers import (
    AdminUserListResponseSerializer,
    AdminUserSerializer,
    AdminVendorListResponseSerializer,
    AdminVendorSerializer,
    DashboardStatsSerializer,
    ReportActionRequestSerializer,
    ReportListResponseSerializer,
    ReportSerializer,
)
from marketplace.services import ModerationService


def _flag(value):
    """Parse an optional true/false query parameter; anything else means no filter."""
    if value is None:
        return None
    value = value.strip().lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    return None


class AdminViewSet(viewsets.ViewSet):
    permission_classes = [AdminRequired]

    def get_service(self) -> ModerationService:
        return container.moderation_service()

    @extend_schema(
        operation_id="admin_dashboard",
        summary="Platform statistics",
        responses={200: OpenApiResponse(response=DashboardStatsSerializer, description="Statistics")},
        tags=["Admin"],
    )
    @action(detail=False, methods=["get"])
    def dashboard(self, request):
        return Response(self.get_service().dashboard_stats().value)

    @extend_schema(
        operation_id="admin_vendors",
        summary="List vendors",
        parameters=[
            OpenApiParameter(name="verified", type=bool, description="Filter by verification"),
            OpenApiParameter(name="page", type=int, description="Page number (default: 1)"),
            OpenApiParameter(name="limit", type=int, description="Items per page (default: 10, max: 50)"),
        ],
        responses={200: OpenApiResponse(response=AdminVendorListResponseSerializer, description="Vendors")},
        tags=["Admin"],
    )
    @action(detail=False, methods=["get"])
    def vendors(self, request):
        params = request.query_params
        result = self.get_service().list_vendors(_flag(params.get("verified")), params.get("page"), params.get("limit"))
        return Response(
            {
                "vendors": AdminVendorSerializer(result.value["vendors"], many=True).data,
                "pagination": result.value["pagination"],
            }
        )

    @extend_schema(
        operation_id="admin_vendor_verify",
        summary="Verify a vendor",
        request=None,
        responses={
            200: OpenApiResponse(response=MessageResponseSerializer, description="Vendor verified"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Vendor not found"),
        },
        tags=["Admin"],
    )
    @action(detail=False, methods=["post"], url_path=rf"vendors/(?P<vendor_id>{UUID_PATTERN})/verify")
    def verify_vendor(self, request, vendor_id=None):
        result = self.get_service().verify_vendor(vendor_id)
        if not result.ok:
            return error_response(result)
        return Response({"message": f"Vendor {result.value.store_name} verified"})

    @extend_schema(
        operation_id="admin_vendor_reject",
        summary="Reject and remove a vendor",
        description="Deletes the vendor's listings, store profile and user. Vendors with order history are kept.",
        request=None,
        responses={
            200: OpenApiResponse(response=MessageResponseSerializer, description="Vendor removed"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Vendor has order history"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Vendor not found"),
        },
        tags=["Admin"],
    )
    @action(detail=False, methods=["post"], url_path=rf"vendors/(?P<vendor_id>{UUID_PATTERN})/reject")
    def reject_vendor(self, request, vendor_id=None):
        result = self.get_service().reject_vendor(vendor_id)
        if not result.ok:
            return error_response(result)
        return Response({"message": "Vendor rejected and removed"})

    @extend_schema(
        operation_id="admin_vendor_delete",
        summary="Delete a vendor",
        description="Removes any vendor with its listings and user account. Vendors with order history are kept.",
        responses={
            200: OpenApiResponse(response=MessageResponseSerializer, description="Vendor deleted"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Vendor has order history"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Vendor not found"),
        },
        tags=["Admin"],
    )
    @action(detail=False, methods=["delete"], url_path=rf"vendors/(?P<vendor_id>{UUID_PATTERN})")
    def delete_vendor(self, request, vendor_id=None):
        result = self.get_service().delete_vendor(vendor_id)
        if not result.ok:
            return error_response(result)
        return Response({"message": "Vendor deleted successfully"})

    @extend_schema(
        operation_id="admin_users",
        summary="List users",
        parameters=[
            OpenApiParameter(name="role", type=str, description="customer, vendor or admin"),
            OpenApiParameter(name="page", type=int, description="Page number (default: 1)"),
            OpenApiParameter(name="limit", type=int, description="Items per page (default: 10, max: 50)"),
        ],
        responses={200: OpenApiResponse(response=AdminUserListResponseSerializer, description="Users")},
        tags=["Admin"],
    )
    @action(detail=False, methods=["get"])
    def users(self, request):
        params = request.query_params
        result = self.get_service().list_users(params.get("role"), params.get("page"), params.get("limit"))
        return Response(
            {
                "users": AdminUserSerializer(result.value["users"], many=True).data,
                "pagination": result.value["pagination"],
            }
        )

    @extend_schema(
        operation_id="admin_user_delete",
        summary="Delete a user",
        description="A vendor's store profile and listings are removed with the account.",
        responses={
            200: OpenApiResponse(response=MessageResponseSerializer, description="User deleted"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="User has order history"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Own account"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="User not found"),
        },
        tags=["Admin"],
    )
    @action(detail=False, methods=["delete"], url_path=rf"users/(?P<user_id>{UUID_PATTERN})")
    def delete_user(self, request, user_id=None):
        result = self.get_service().delete_user(request.user, user_id)
        if not result.ok:
            return error_response(result)
        return Response({"message": "User deleted successfully"})


    @extend_schema(
        operation_id="admin_reports",
        summary="List reports",
        parameters=[
            OpenApiParameter(name="handled", type=bool, description="Filter by handled flag"),
            OpenApiParameter(name="page", type=int, description="Page number (default: 1)"),
            OpenApiParameter(name="limit", type=int, description="Items per page (default: 10, max: 50)"),
        ],
        responses={200: OpenApiResponse(response=ReportListResponseSerializer, description="Reports")},
        tags=["Admin"],
    )
    @action(detail=False, methods=["get"])
    def reports(self, request):
        params = request.query_params
        result = self.get_service().list_reports(_flag(params.get("handled")), params.get("page"), params.get("limit"))
        return Response(
            {
                "reports": ReportSerializer(result.value["reports"], many=True).data,
                "pagination": result.value["pagination"],
            }
        )

    @extend_schema(
        operation_id="admin_report_action",
        summary="Action a report",
        request=ReportActionRequestSerializer,
        responses={
            200: OpenApiResponse(response=ReportSerializer, description="Report handled"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Report not found"),
        },
        tags=["Admin"],
    )
    @action(detail=False, methods=["post"], url_path=rf"reports/(?P<report_id>{UUID_PATTERN})/action")
    def action_report(self, request, report_id=None):
        serializer = ReportActionRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().action_report(request.user, report_id, serializer.validated_data["actionTaken"])
        if not result.ok:
            return error_response(result)
        return Response(ReportSerializer(result.value).data)
