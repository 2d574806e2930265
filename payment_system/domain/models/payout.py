import uuid

from django.db import models


class VendorPayout(models.Model):
    """
    Amount owed to one vendor for its share of a paid order.

    Amounts are written once; only ``status`` and ``processed_at`` change afterwards.
    """

    STATUS_CHOICES = [
        ("pending", "Pending"),
        ("processed", "Processed"),
        ("failed", "Failed"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    payment = models.ForeignKey("payment_system.Payment", on_delete=models.CASCADE, related_name="vendor_payouts")
    vendor = models.ForeignKey("marketplace.Vendor", on_delete=models.PROTECT, related_name="payouts")

    gross_amount = models.DecimalField(max_digits=12, decimal_places=2)
    commission = models.DecimalField(max_digits=12, decimal_places=2)
    net_amount = models.DecimalField(max_digits=12, decimal_places=2)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending")
    processed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "payment_system"
        constraints = [
            models.UniqueConstraint(fields=["payment", "vendor"], name="unique_payout_per_payment_vendor"),
        ]
        indexes = [
            models.Index(fields=["vendor", "status"], name="payout_vendor_status_idx"),
        ]

    def __str__(self):
        return f"Payout {self.net_amount} to {self.vendor_id} ({self.status})"
