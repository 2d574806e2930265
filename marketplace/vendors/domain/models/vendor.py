import uuid

from django.conf import settings
from django.db import models


class Vendor(models.Model):
    """Store profile of a vendor user. Only verified vendors may publish listings."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="vendor_profile")

    company_name = models.CharField(max_length=200)
    store_name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    images = models.JSONField(default=list, blank=True, help_text="Store image URLs")

    # Location
    address = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    pincode = models.CharField(max_length=12, blank=True)

    verified = models.BooleanField(default=False)
    verified_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["store_name"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["verified"], name="vendor_verified_idx"),
        ]

    def __str__(self):
        return self.store_name

    @property
    def location(self) -> dict:
        return {"address": self.address, "city": self.city, "state": self.state, "pincode": self.pincode}
