import uuid

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Review(models.Model):
    """One rating per purchased line item, keyed by (user, order, product)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="reviews")
    order = models.ForeignKey("marketplace.Order", on_delete=models.CASCADE, related_name="reviews")
    product = models.ForeignKey("marketplace.Product", on_delete=models.CASCADE, related_name="reviews")
    vendor = models.ForeignKey("marketplace.Vendor", on_delete=models.CASCADE, related_name="reviews")
    listing = models.ForeignKey(
        "marketplace.Listing", on_delete=models.SET_NULL, null=True, blank=True, related_name="reviews"
    )

    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    comment = models.TextField(max_length=500, blank=True)
    is_verified = models.BooleanField(default=True)
    helpful_count = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        constraints = [
            models.UniqueConstraint(fields=["user", "order", "product"], name="unique_review_per_order_product"),
            models.CheckConstraint(condition=models.Q(rating__gte=1, rating__lte=5), name="review_rating_range"),
        ]
        indexes = [
            models.Index(fields=["product", "-created_at"], name="review_product_created_idx"),
            models.Index(fields=["vendor", "-created_at"], name="review_vendor_created_idx"),
        ]

    def __str__(self):
        return f"Review {self.rating}/5 for {self.product_id} by {self.user_id}"
