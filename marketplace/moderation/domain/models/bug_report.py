import uuid

from django.conf import settings
from django.db import models


class BugReport(models.Model):
    """Support ticket about the platform itself. Text only; no attachments are stored."""

    CATEGORY_CHOICES = [
        ("bug", "Bug"),
        ("feature-request", "Feature request"),
        ("ui-issue", "UI issue"),
        ("performance", "Performance"),
        ("security", "Security"),
        ("other", "Other"),
    ]
    PRIORITY_CHOICES = [
        ("low", "Low"),
        ("medium", "Medium"),
        ("high", "High"),
        ("critical", "Critical"),
    ]
    STATUS_OPEN = "open"
    STATUS_RESOLVED = "resolved"
    STATUS_CLOSED = "closed"
    STATUS_CHOICES = [
        (STATUS_OPEN, "Open"),
        ("in-progress", "In progress"),
        (STATUS_RESOLVED, "Resolved"),
        (STATUS_CLOSED, "Closed"),
        ("duplicate", "Duplicate"),
    ]
    FINISHED_STATUSES = (STATUS_RESOLVED, STATUS_CLOSED)

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="bug_reports"
    )
    email = models.EmailField()
    name = models.CharField(max_length=100)

    title = models.CharField(max_length=200)
    description = models.TextField(max_length=2000)
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES, default="bug")
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default="medium")
    status = models.CharField(max_length=15, choices=STATUS_CHOICES, default=STATUS_OPEN)

    # Browser context sent by the client
    user_agent = models.CharField(max_length=500, blank=True)
    page_url = models.CharField(max_length=500, blank=True)
    screen_resolution = models.CharField(max_length=50, blank=True)

    admin_notes = models.TextField(max_length=1000, blank=True)
    resolved_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["status", "-created_at"], name="bugreport_status_created_idx"),
        ]

    def __str__(self):
        return f"[{self.status}] {self.title}"
