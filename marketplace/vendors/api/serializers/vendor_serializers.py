from decimal import Decimal

from rest_framework import serializers

from marketplace.api.serializers import PaginationSerializer
from marketplace.catalog.api.serializers import ProductListingSerializer
from marketplace.models import Vendor


class VendorSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(source="user.email", read_only=True)

    class Meta:
        model = Vendor
        fields = [
            "id",
            "email",
            "company_name",
            "store_name",
            "description",
            "images",
            "address",
            "city",
            "state",
            "pincode",
            "verified",
            "verified_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "email", "verified", "verified_at", "created_at", "updated_at"]


class VendorProfileUpdateSerializer(serializers.ModelSerializer):
    """Partial profile update; only the given fields change."""

    images = serializers.ListField(child=serializers.URLField(), required=False)

    class Meta:
        model = Vendor
        fields = ["company_name", "store_name", "description", "images", "address", "city", "state", "pincode"]
        extra_kwargs = {field: {"required": False} for field in fields}


class VendorStatsSerializer(serializers.Serializer):
    totalListings = serializers.IntegerField()
    activeListings = serializers.IntegerField()
    outOfStockListings = serializers.IntegerField()
    totalStock = serializers.IntegerField()
    totalOrders = serializers.IntegerField()
    unitsSold = serializers.IntegerField()
    totalRevenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    averageRating = serializers.FloatField()
    reviewCount = serializers.IntegerField()


class VendorDashboardResponseSerializer(serializers.Serializer):
    vendor = VendorSerializer()
    stats = VendorStatsSerializer()


class ListingCreateRequestSerializer(serializers.Serializer):
    """
    A listing either points at an existing master product (product_id) or
    creates one from name and category.
    """

    product_id = serializers.UUIDField(required=False)
    name = serializers.CharField(max_length=200, required=False)
    category = serializers.CharField(max_length=100, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.01"))
    stock = serializers.IntegerField(min_value=0, default=0)
    images = serializers.ListField(child=serializers.URLField(), required=False, default=list)
    is_active = serializers.BooleanField(required=False, default=True)

    def validate(self, attrs):
        if not attrs.get("product_id") and not (attrs.get("name") and attrs.get("category")):
            raise serializers.ValidationError("Provide product_id or both name and category")
        return attrs


class ListingUpdateRequestSerializer(serializers.Serializer):
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.01"), required=False)
    stock = serializers.IntegerField(min_value=0, required=False)
    images = serializers.ListField(child=serializers.URLField(), required=False)
    is_active = serializers.BooleanField(required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Nothing to update")
        return attrs


class StoreSerializer(serializers.ModelSerializer):
    """Public store card; no contact details."""

    class Meta:
        model = Vendor
        fields = [
            "id",
            "store_name",
            "company_name",
            "description",
            "images",
            "city",
            "state",
            "verified",
            "created_at",
        ]
        read_only_fields = fields


class StoreListItemSerializer(StoreSerializer):
    listing_count = serializers.IntegerField(read_only=True)

    class Meta(StoreSerializer.Meta):
        fields = StoreSerializer.Meta.fields + ["listing_count"]
        read_only_fields = fields


class StorePaginationSerializer(PaginationSerializer):
    totalStores = serializers.IntegerField()


class StoreListResponseSerializer(serializers.Serializer):
    stores = StoreListItemSerializer(many=True)
    pagination = StorePaginationSerializer()


class StoreDetailResponseSerializer(serializers.Serializer):
    store = StoreSerializer()
    listings = ProductListingSerializer(many=True)
    rating = serializers.DictField()
