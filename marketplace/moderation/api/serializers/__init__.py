from .report_serializers import (
    AdminUserListResponseSerializer,
    AdminUserSerializer,
    AdminVendorListResponseSerializer,
    AdminVendorSerializer,
    DashboardStatsSerializer,
    ReportActionRequestSerializer,
    ReportCreateRequestSerializer,
    ReportListResponseSerializer,
    ReportSerializer,
)
from .support_serializers import (
    BugReportCreateRequestSerializer,
    BugReportListResponseSerializer,
    BugReportSerializer,
    BugReportSubmittedSerializer,
    BugReportUpdateRequestSerializer,
)
