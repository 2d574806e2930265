import uuid
from decimal import Decimal

from django.core.validators import RegexValidator
from django.db import models

ifsc_validator = RegexValidator(r"^[A-Z]{4}0[A-Z0-9]{6}$", "Enter a valid IFSC code.")


class VendorPaymentAccount(models.Model):
    """Bank details a vendor is paid out to."""

    VERIFICATION_CHOICES = [
        ("pending", "Pending"),
        ("verified", "Verified"),
        ("rejected", "Rejected"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    vendor = models.OneToOneField("marketplace.Vendor", on_delete=models.CASCADE, related_name="payment_account")

    account_holder_name = models.CharField(max_length=200)
    account_number = models.CharField(max_length=34)
    ifsc_code = models.CharField(max_length=11, validators=[ifsc_validator])
    bank_name = models.CharField(max_length=200)
    branch_name = models.CharField(max_length=200, blank=True)
    upi_id = models.CharField(max_length=100, blank=True)
    pan_number = models.CharField(max_length=10, blank=True)
    gst_number = models.CharField(max_length=15, blank=True)

    commission_rate = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("1.00"))
    verification_status = models.CharField(max_length=20, choices=VERIFICATION_CHOICES, default="pending")
    verification_notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "payment_system"

    def __str__(self):
        return f"{self.bank_name} account of {self.vendor_id}"
