from rest_framework import serializers

from marketplace.api.serializers import PaginationSerializer
from marketplace.models import Listing, Product, Vendor


class VendorBriefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Vendor
        fields = ["id", "store_name", "company_name", "verified", "city", "state"]
        read_only_fields = fields


class ProductBriefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = ["id", "name", "slug", "category", "description", "images"]
        read_only_fields = fields


class ProductListSerializer(serializers.ModelSerializer):
    """Product with aggregates over its active listings (see CatalogService.product_queryset)."""

    min_price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    max_price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    total_stock = serializers.IntegerField(read_only=True)
    listing_count = serializers.IntegerField(read_only=True)
    average_rating = serializers.SerializerMethodField()
    review_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "slug",
            "category",
            "description",
            "images",
            "min_price",
            "max_price",
            "total_stock",
            "listing_count",
            "average_rating",
            "review_count",
        ]
        read_only_fields = fields

    def get_average_rating(self, obj) -> float:
        value = getattr(obj, "average_rating", None)
        return round(float(value), 1) if value is not None else 0.0


class ListingSerializer(serializers.ModelSerializer):
    product = ProductBriefSerializer(read_only=True)
    vendor = VendorBriefSerializer(read_only=True)

    class Meta:
        model = Listing
        fields = [
            "id",
            "product",
            "vendor",
            "company_name",
            "price",
            "currency",
            "stock",
            "images",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProductListingSerializer(serializers.ModelSerializer):
    """Listing as shown under its product."""

    vendor = VendorBriefSerializer(read_only=True)

    class Meta:
        model = Listing
        fields = ["id", "vendor", "company_name", "price", "currency", "stock", "images"]
        read_only_fields = fields


class RatingSummarySerializer(serializers.Serializer):
    averageRating = serializers.FloatField()
    reviewCount = serializers.IntegerField()


class ProductDetailResponseSerializer(serializers.Serializer):
    product = ProductBriefSerializer()
    listings = ProductListingSerializer(many=True)
    rating = RatingSummarySerializer()


class ProductPaginationSerializer(PaginationSerializer):
    totalProducts = serializers.IntegerField()


class ProductListResponseSerializer(serializers.Serializer):
    products = ProductListSerializer(many=True)
    pagination = ProductPaginationSerializer()
