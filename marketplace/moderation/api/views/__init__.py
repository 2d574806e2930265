from .admin_views import AdminViewSet
from .report_views import ReportViewSet
from .support_views import SupportViewSet

__all__ = ["AdminViewSet", "ReportViewSet", "SupportViewSet"]
