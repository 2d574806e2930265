from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.responses import error_response
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.moderation.api.serializers import ReportCreateRequestSerializer, ReportSerializer
from marketplace.services import ModerationService


class ReportViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    def get_service(self) -> ModerationService:
        return container.moderation_service()

    @extend_schema(
        operation_id="reports_mine",
        summary="List own reports",
        responses={200: OpenApiResponse(response=ReportSerializer(many=True), description="Reports filed by caller")},
        tags=["Marketplace - Reports"],
    )
    def list(self, request):
        result = self.get_service().user_reports(request.user)
        return Response(ReportSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="reports_create",
        summary="Report a vendor",
        description="""
        **What it receives:**
        - vendorId, optional listingId of that vendor
        - reason (at least 5 characters) and optional details

        **What it returns:**
        - The created report
        - 400 report_exists when an open report for the same vendor and listing exists
        """,
        request=ReportCreateRequestSerializer,
        responses={
            201: OpenApiResponse(response=ReportSerializer, description="Report filed"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Duplicate or invalid report"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Vendor not found"),
        },
        tags=["Marketplace - Reports"],
    )
    def create(self, request):
        serializer = ReportCreateRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = self.get_service().file_report(
            request.user,
            data["vendorId"],
            data["reason"],
            details=data["details"],
            listing_id=data.get("listingId"),
        )
        if not result.ok:
            return error_response(result)
        return Response(ReportSerializer(result.value).data, status=status.HTTP_201_CREATED)
