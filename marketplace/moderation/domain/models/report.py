import uuid

from django.conf import settings
from django.core.validators import MinLengthValidator
from django.db import models


class Report(models.Model):
    """A user's complaint about a vendor, optionally about one of its listings."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    reporter = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="reports_filed")
    vendor = models.ForeignKey("marketplace.Vendor", on_delete=models.CASCADE, related_name="reports")
    listing = models.ForeignKey(
        "marketplace.Listing", on_delete=models.SET_NULL, null=True, blank=True, related_name="reports"
    )

    reason = models.CharField(max_length=200, validators=[MinLengthValidator(5)])
    details = models.TextField(max_length=2000, blank=True)

    handled = models.BooleanField(default=False)
    action_taken = models.TextField(max_length=1000, blank=True)
    handled_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="reports_handled"
    )
    handled_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["handled", "-created_at"], name="report_handled_created_idx"),
            models.Index(fields=["reporter", "vendor"], name="report_reporter_vendor_idx"),
        ]

    def __str__(self):
        return f"Report on {self.vendor_id}: {self.reason[:40]}"
