import uuid

from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q
from django.utils.text import slugify


class Product(models.Model):
    """Master catalog entry shared by every vendor listing of the same item."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, unique=True, blank=True)
    category = models.CharField(max_length=100, db_index=True)
    description = models.TextField(blank=True)
    images = models.JSONField(default=list, blank=True, help_text="Image URLs")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["name"], name="product_name_idx"),
        ]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = self._unique_slug()
        super().save(*args, **kwargs)

    def _unique_slug(self) -> str:
        base = slugify(self.name)[:200] or "product"
        slug = base
        suffix = 1
        while Product.objects.filter(slug=slug).exclude(pk=self.pk).exists():
            suffix += 1
            slug = f"{base}-{suffix}"
        return slug


class Listing(models.Model):
    """A vendor's priced, stocked offer of a catalog product."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="listings")
    vendor = models.ForeignKey("marketplace.Vendor", on_delete=models.CASCADE, related_name="listings")

    company_name = models.CharField(max_length=200, blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    currency = models.CharField(max_length=3, default="INR")
    stock = models.PositiveIntegerField(default=0)
    images = models.JSONField(default=list, blank=True, help_text="Image URLs")
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["vendor", "is_active"], name="listing_vendor_active_idx"),
            models.Index(fields=["product", "is_active"], name="listing_product_active_idx"),
            models.Index(fields=["price"], name="listing_price_idx"),
        ]
        constraints = [
            models.CheckConstraint(condition=Q(stock__gte=0), name="listing_stock_non_negative"),
            models.CheckConstraint(condition=Q(is_active=False) | Q(price__gt=0), name="listing_active_price_positive"),
        ]

    def __str__(self):
        return f"{self.product.name} by {self.vendor.store_name}"

    @property
    def is_in_stock(self) -> bool:
        return self.stock > 0
