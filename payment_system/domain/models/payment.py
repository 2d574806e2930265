import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models


class Payment(models.Model):
    """
    One confirmed payment attempt against an order.

    Owns the per-vendor payout rows computed when the payment was confirmed.
    """

    STATUS_CHOICES = [
        ("created", "Created"),
        ("paid", "Paid"),
        ("failed", "Failed"),
    ]

    PAYOUT_STATUS_CHOICES = [
        ("pending", "Pending"),  # Not computed yet
        ("computed", "Computed"),
        ("failed", "Failed"),  # Computation failed, reconciliation queued
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey("marketplace.Order", on_delete=models.CASCADE, related_name="payments")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="payments")

    payment_mode = models.CharField(max_length=10, help_text="gateway or demo")
    gateway_order_id = models.CharField(max_length=100, db_index=True)
    gateway_payment_id = models.CharField(max_length=100, unique=True)
    gateway_signature = models.CharField(max_length=256, blank=True)

    amount = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3, default="INR")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="created")

    commission_rate = models.DecimalField(
        max_digits=5, decimal_places=2, default=Decimal("1.00"), help_text="Platform commission in percent"
    )
    payout_status = models.CharField(max_length=20, choices=PAYOUT_STATUS_CHOICES, default="pending")
    payout_error = models.TextField(blank=True)

    paid_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "payment_system"
        indexes = [
            models.Index(fields=["payout_status"], name="payment_payout_status_idx"),
        ]

    def __str__(self):
        return f"Payment {self.gateway_payment_id} for order {self.order_id}"
