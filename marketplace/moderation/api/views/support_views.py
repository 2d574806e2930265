"""
Support endpoints for platform bug reports.

Submitting is open to anyone; the report list and status updates are for
admins. A signed-in reporter can read their own report.
"""

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from authentication.permissions import AdminRequired
from infrastructure.container import container
from marketplace.api.responses import error_response
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.catalog.api.views.product_views import UUID_PATTERN
from marketplace.moderation.api.serializers import (
    BugReportCreateRequestSerializer,
    BugReportListResponseSerializer,
    BugReportSerializer,
    BugReportSubmittedSerializer,
    BugReportUpdateRequestSerializer,
)
from marketplace.services import SupportService


class SupportViewSet(viewsets.ViewSet):
    def get_permissions(self):
        if self.action == "submit_bug_report":
            return [permissions.AllowAny()]
        if self.action in ("bug_reports", "update_bug_report"):
            return [AdminRequired()]
        return [permissions.IsAuthenticated()]

    def get_service(self) -> SupportService:
        return container.support_service()

    @extend_schema(
        operation_id="support_bug_report_submit",
        summary="Submit a bug report",
        description="""
        **What it receives:**
        - email, name, title (5-200 chars), description (10-2000 chars)
        - category and priority (optional)
        - userAgent, url, screenResolution (optional browser context)

        Works without signing in. Signed-in reports are linked to the account.
        """,
        request=BugReportCreateRequestSerializer,
        responses={
            201: OpenApiResponse(response=BugReportSubmittedSerializer, description="Report stored"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation error"),
        },
        tags=["Support"],
    )
    @action(detail=False, methods=["post"], url_path="bug-report")
    def submit_bug_report(self, request):
        serializer = BugReportCreateRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().submit_bug_report(request.user, serializer.validated_data)
        return Response(
            {"message": "Bug report submitted successfully", "reportId": result.value.id},
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        operation_id="support_bug_reports",
        summary="List bug reports",
        parameters=[
            OpenApiParameter(name="status", type=str, description="Filter by status"),
            OpenApiParameter(name="category", type=str, description="Filter by category"),
            OpenApiParameter(name="priority", type=str, description="Filter by priority"),
            OpenApiParameter(name="page", type=int, description="Page number (default: 1)"),
            OpenApiParameter(name="limit", type=int, description="Items per page (default: 10, max: 50)"),
        ],
        responses={200: OpenApiResponse(response=BugReportListResponseSerializer, description="Bug reports")},
        tags=["Support"],
    )
    @action(detail=False, methods=["get"], url_path="bug-reports")
    def bug_reports(self, request):
        params = request.query_params
        result = self.get_service().list_bug_reports(
            status=params.get("status"),
            category=params.get("category"),
            priority=params.get("priority"),
            page=params.get("page"),
            limit=params.get("limit"),
        )
        return Response(
            {
                "bugReports": BugReportSerializer(result.value["bugReports"], many=True).data,
                "pagination": result.value["pagination"],
            }
        )

    @extend_schema(
        operation_id="support_bug_report_detail",
        summary="Get a bug report",
        responses={
            200: BugReportSerializer,
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the reporter"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Bug report not found"),
        },
        tags=["Support"],
    )
    @action(detail=False, methods=["get"], url_path=rf"bug-reports/(?P<report_id>{UUID_PATTERN})")
    def bug_report_detail(self, request, report_id=None):
        result = self.get_service().get_bug_report(request.user, report_id)
        if not result.ok:
            return error_response(result)
        return Response(BugReportSerializer(result.value).data)

    @extend_schema(
        operation_id="support_bug_report_update",
        summary="Update a bug report",
        description="Resolving or closing a report stamps `resolved_at`.",
        request=BugReportUpdateRequestSerializer,
        responses={
            200: BugReportSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Bug report not found"),
        },
        tags=["Support"],
    )
    @bug_report_detail.mapping.put
    def update_bug_report(self, request, report_id=None):
        serializer = BugReportUpdateRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = self.get_service().update_bug_report(
            request.user,
            report_id,
            status=data.get("status"),
            priority=data.get("priority"),
            admin_notes=data.get("adminNotes"),
        )
        if not result.ok:
            return error_response(result)
        return Response(BugReportSerializer(result.value).data)
