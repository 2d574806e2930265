"""
SupportService - Platform bug reports

Anyone, signed in or not, can submit a bug report. Admins triage the reports;
a reporter may read their own report back, matched by account or by email.
"""

from typing import Any, Dict, Optional

from django.utils import timezone

from marketplace.infra.observability.metrics import bug_reports_submitted_total
from marketplace.moderation.domain.models.bug_report import BugReport
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from marketplace.services.pagination import paginate
from utils.rbac import is_admin


class SupportService(BaseService):
    @BaseService.log_performance
    def submit_bug_report(self, user, data: Dict[str, Any]) -> ServiceResult[BugReport]:
        reporter = user if getattr(user, "is_authenticated", False) else None

        bug_report = BugReport.objects.create(
            user=reporter,
            email=data["email"],
            name=data["name"],
            title=data["title"],
            description=data["description"],
            category=data.get("category") or "bug",
            priority=data.get("priority") or "medium",
            user_agent=data.get("userAgent", ""),
            page_url=data.get("url", ""),
            screen_resolution=data.get("screenResolution", ""),
        )

        bug_reports_submitted_total.labels(category=bug_report.category).inc()
        self.logger.info(f"Bug report {bug_report.id} submitted ({bug_report.category})")
        return service_ok(bug_report)

    @BaseService.log_performance
    def list_bug_reports(
        self,
        status: Optional[str] = None,
        category: Optional[str] = None,
        priority: Optional[str] = None,
        page=None,
        limit=None,
    ) -> ServiceResult[Dict[str, Any]]:
        reports = BugReport.objects.select_related("user")
        if status:
            reports = reports.filter(status=status)
        if category:
            reports = reports.filter(category=category)
        if priority:
            reports = reports.filter(priority=priority)

        items, pagination = paginate(reports.order_by("-created_at"), page, limit, total_key="totalBugReports")
        return service_ok({"bugReports": items, "pagination": pagination})

    def get_bug_report(self, user, report_id) -> ServiceResult[BugReport]:
        bug_report = BugReport.objects.select_related("user").filter(pk=report_id).first()
        if bug_report is None:
            return service_err(ErrorCodes.BUG_REPORT_NOT_FOUND, "Bug report not found")

        own_report = bug_report.user_id == user.id or bug_report.email.lower() == (user.email or "").lower()
        if not own_report and not is_admin(user):
            return service_err(ErrorCodes.PERMISSION_DENIED, "Access denied")
        return service_ok(bug_report)

    @BaseService.log_performance
    def update_bug_report(
        self,
        admin,
        report_id,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        admin_notes: Optional[str] = None,
    ) -> ServiceResult[BugReport]:
        bug_report = BugReport.objects.filter(pk=report_id).first()
        if bug_report is None:
            return service_err(ErrorCodes.BUG_REPORT_NOT_FOUND, "Bug report not found")

        if status:
            bug_report.status = status
            if status in BugReport.FINISHED_STATUSES:
                bug_report.resolved_at = timezone.now()
        if priority:
            bug_report.priority = priority
        if admin_notes:
            bug_report.admin_notes = admin_notes
        bug_report.save()

        self.logger.info(f"Admin {admin.id} updated bug report {bug_report.id} to {bug_report.status}")
        return service_ok(bug_report)
