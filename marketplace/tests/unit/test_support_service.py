from django.contrib.auth.models import AnonymousUser
from django.test import TestCase

from marketplace.models import BugReport
from marketplace.services import ErrorCodes, SupportService
from marketplace.tests.factories import AdminFactory, BugReportFactory, UserFactory


def bug_payload(**overrides):
    payload = {
        "email": "asha@example.com",
        "name": "Asha",
        "title": "Cart badge stays at zero",
        "description": "Adding an item does not update the header badge.",
        "category": "ui-issue",
        "priority": "low",
        "userAgent": "Mozilla/5.0",
        "url": "/cart",
        "screenResolution": "1920x1080",
    }
    payload.update(overrides)
    return payload


class SubmitBugReportTest(TestCase):
    def setUp(self):
        self.service = SupportService()

    def test_anonymous_submission(self):
        result = self.service.submit_bug_report(AnonymousUser(), bug_payload())

        self.assertTrue(result.ok)
        report = result.value
        self.assertIsNone(report.user)
        self.assertEqual(report.status, BugReport.STATUS_OPEN)
        self.assertEqual(report.category, "ui-issue")
        self.assertEqual(report.page_url, "/cart")
        self.assertEqual(report.screen_resolution, "1920x1080")

    def test_signed_in_submission_linked_to_account(self):
        user = UserFactory()

        report = self.service.submit_bug_report(user, bug_payload(category=None, priority=None)).value

        self.assertEqual(report.user, user)
        self.assertEqual(report.category, "bug")
        self.assertEqual(report.priority, "medium")


class BugReportAccessTest(TestCase):
    def setUp(self):
        self.service = SupportService()
        self.reporter = UserFactory()
        self.report = BugReportFactory(user=self.reporter, email=self.reporter.email)

    def test_reporter_reads_own_report(self):
        self.assertTrue(self.service.get_bug_report(self.reporter, self.report.id).ok)

    def test_email_match_grants_access(self):
        anonymous_report = BugReportFactory(email=self.reporter.email.upper())
        self.assertTrue(self.service.get_bug_report(self.reporter, anonymous_report.id).ok)

    def test_stranger_denied(self):
        result = self.service.get_bug_report(UserFactory(), self.report.id)
        self.assertEqual(result.error, ErrorCodes.PERMISSION_DENIED)

    def test_admin_reads_any_report(self):
        self.assertTrue(self.service.get_bug_report(AdminFactory(), self.report.id).ok)

    def test_unknown_report(self):
        result = self.service.get_bug_report(self.reporter, "00000000-0000-0000-0000-000000000000")
        self.assertEqual(result.error, ErrorCodes.BUG_REPORT_NOT_FOUND)


class BugReportTriageTest(TestCase):
    def setUp(self):
        self.service = SupportService()
        self.admin = AdminFactory()

    def test_list_filters(self):
        critical = BugReportFactory(category="security", priority="critical")
        BugReportFactory(category="security")
        BugReportFactory(status="closed", priority="critical")

        result = self.service.list_bug_reports(status="open", category="security", priority="critical")

        self.assertEqual([report.id for report in result.value["bugReports"]], [critical.id])
        self.assertEqual(result.value["pagination"]["totalBugReports"], 1)

    def test_resolving_stamps_resolved_at(self):
        report = BugReportFactory()

        result = self.service.update_bug_report(self.admin, report.id, status="resolved", admin_notes="Fixed")

        report.refresh_from_db()
        self.assertTrue(result.ok)
        self.assertEqual(report.status, "resolved")
        self.assertEqual(report.admin_notes, "Fixed")
        self.assertIsNotNone(report.resolved_at)

    def test_in_progress_leaves_resolved_at_empty(self):
        report = BugReportFactory()

        self.service.update_bug_report(self.admin, report.id, status="in-progress", priority="high")

        report.refresh_from_db()
        self.assertEqual(report.priority, "high")
        self.assertIsNone(report.resolved_at)

    def test_update_unknown_report(self):
        result = self.service.update_bug_report(self.admin, "00000000-0000-0000-0000-000000000000", status="closed")
        self.assertEqual(result.error, ErrorCodes.BUG_REPORT_NOT_FOUND)
