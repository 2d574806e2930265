import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("marketplace", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Payment",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("payment_mode", models.CharField(help_text="gateway or demo", max_length=10)),
                ("gateway_order_id", models.CharField(db_index=True, max_length=100)),
                ("gateway_payment_id", models.CharField(max_length=100, unique=True)),
                ("gateway_signature", models.CharField(blank=True, max_length=256)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("currency", models.CharField(default="INR", max_length=3)),
                (
                    "status",
                    models.CharField(
                        choices=[("created", "Created"), ("paid", "Paid"), ("failed", "Failed")],
                        default="created",
                        max_length=20,
                    ),
                ),
                (
                    "commission_rate",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("1.00"),
                        help_text="Platform commission in percent",
                        max_digits=5,
                    ),
                ),
                (
                    "payout_status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("computed", "Computed"), ("failed", "Failed")],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("payout_error", models.TextField(blank=True)),
                ("paid_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="payments",
                        to="marketplace.order",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="payments",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["payout_status"], name="payment_payout_status_idx")],
            },
        ),
        migrations.CreateModel(
            name="VendorPayout",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("gross_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("commission", models.DecimalField(decimal_places=2, max_digits=12)),
                ("net_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("processed", "Processed"), ("failed", "Failed")],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("processed_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "payment",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="vendor_payouts",
                        to="payment_system.payment",
                    ),
                ),
                (
                    "vendor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payouts",
                        to="marketplace.vendor",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["vendor", "status"], name="payout_vendor_status_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("payment", "vendor"), name="unique_payout_per_payment_vendor"),
                ],
            },
        ),
        migrations.CreateModel(
            name="VendorPaymentAccount",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("account_holder_name", models.CharField(max_length=200)),
                ("account_number", models.CharField(max_length=34)),
                (
                    "ifsc_code",
                    models.CharField(
                        max_length=11,
                        validators=[
                            django.core.validators.RegexValidator(
                                "^[A-Z]{4}0[A-Z0-9]{6}$", "Enter a valid IFSC code."
                            )
                        ],
                    ),
                ),
                ("bank_name", models.CharField(max_length=200)),
                ("branch_name", models.CharField(blank=True, max_length=200)),
                ("upi_id", models.CharField(blank=True, max_length=100)),
                ("pan_number", models.CharField(blank=True, max_length=10)),
                ("gst_number", models.CharField(blank=True, max_length=15)),
                ("commission_rate", models.DecimalField(decimal_places=2, default=Decimal("1.00"), max_digits=5)),
                (
                    "verification_status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("verified", "Verified"), ("rejected", "Rejected")],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("verification_notes", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "vendor",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="payment_account",
                        to="marketplace.vendor",
                    ),
                ),
            ],
        ),
    ]
