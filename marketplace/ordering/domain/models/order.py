import uuid

from django.conf import settings
from django.db import models


class Order(models.Model):
    STATUS_PENDING = "pending"
    STATUS_PAID = "paid"
    STATUS_SHIPPED = "shipped"
    STATUS_DELIVERED = "delivered"
    STATUS_CANCELLED = "cancelled"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),  # Created at checkout, awaiting payment
        (STATUS_PAID, "Paid"),  # Payment confirmed, stock committed
        (STATUS_SHIPPED, "Shipped"),
        (STATUS_DELIVERED, "Delivered"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    # Forward-only lifecycle; cancellation allowed before shipping
    TRANSITIONS = {
        STATUS_PENDING: {STATUS_PAID, STATUS_CANCELLED},
        STATUS_PAID: {STATUS_SHIPPED, STATUS_CANCELLED},
        STATUS_SHIPPED: {STATUS_DELIVERED},
        STATUS_DELIVERED: set(),
        STATUS_CANCELLED: set(),
    }

    # Statuses that prove a completed purchase
    PURCHASED_STATUSES = (STATUS_PAID, STATUS_SHIPPED, STATUS_DELIVERED)

    PAYMENT_MODE_CHOICES = [
        ("gateway", "Payment Gateway"),
        ("demo", "Demo"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="orders")

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3, default="INR")

    # Payment correlation
    payment_mode = models.CharField(max_length=10, choices=PAYMENT_MODE_CHOICES)
    gateway_order_id = models.CharField(max_length=100, db_index=True)
    confirmation_id = models.CharField(max_length=100, blank=True, null=True, unique=True)
    paid_at = models.DateTimeField(null=True, blank=True)

    shipping_address = models.JSONField(default=dict, blank=True)
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    shipped_at = models.DateTimeField(null=True, blank=True)
    delivered_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["user", "-created_at"], name="order_user_created_idx"),
            models.Index(fields=["status"], name="order_status_idx"),
        ]

    def __str__(self):
        return f"Order {str(self.id)[:8]} ({self.status})"

    def can_transition_to(self, new_status: str) -> bool:
        return new_status in self.TRANSITIONS.get(self.status, set())

    @property
    def is_pending(self) -> bool:
        return self.status == self.STATUS_PENDING


class OrderItem(models.Model):
    """Immutable snapshot of one purchased listing."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    listing = models.ForeignKey(
        "marketplace.Listing", on_delete=models.SET_NULL, null=True, related_name="order_items"
    )
    product = models.ForeignKey("marketplace.Product", on_delete=models.PROTECT, related_name="order_items")
    vendor = models.ForeignKey("marketplace.Vendor", on_delete=models.PROTECT, related_name="order_items")

    # Snapshot fields
    product_name = models.CharField(max_length=200)
    store_name = models.CharField(max_length=200, blank=True)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField()

    class Meta:
        ordering = ["product_name"]
        app_label = "marketplace"
        constraints = [
            models.CheckConstraint(condition=models.Q(quantity__gte=1), name="order_item_quantity_positive"),
        ]

    def __str__(self):
        return f"{self.quantity} x {self.product_name}"

    @property
    def line_total(self):
        return self.unit_price * self.quantity
