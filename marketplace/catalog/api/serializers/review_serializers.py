from rest_framework import serializers

from marketplace.api.serializers import PaginationSerializer
from marketplace.models import Review


class ReviewSerializer(serializers.ModelSerializer):
    user_name = serializers.SerializerMethodField()
    product_name = serializers.CharField(source="product.name", read_only=True)
    store_name = serializers.CharField(source="vendor.store_name", read_only=True)

    class Meta:
        model = Review
        fields = [
            "id",
            "order",
            "product",
            "product_name",
            "vendor",
            "store_name",
            "listing",
            "user_name",
            "rating",
            "comment",
            "is_verified",
            "helpful_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_user_name(self, obj) -> str:
        user = obj.user
        return user.get_full_name() or user.email.split("@")[0]


class ReviewCreateRequestSerializer(serializers.Serializer):
    orderId = serializers.UUIDField()
    productId = serializers.UUIDField()
    vendorId = serializers.UUIDField()
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(max_length=500, required=False, allow_blank=True, trim_whitespace=True)


class ReviewUpdateRequestSerializer(serializers.Serializer):
    rating = serializers.IntegerField(min_value=1, max_value=5, required=False)
    comment = serializers.CharField(max_length=500, required=False, allow_blank=True, trim_whitespace=True)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Provide rating or comment")
        return attrs


class ReviewPaginationSerializer(PaginationSerializer):
    totalReviews = serializers.IntegerField()


class ProductReviewsResponseSerializer(serializers.Serializer):
    reviews = ReviewSerializer(many=True)
    averageRating = serializers.FloatField()
    totalReviews = serializers.IntegerField()
    ratingDistribution = serializers.DictField(child=serializers.IntegerField())
    pagination = ReviewPaginationSerializer()


class VendorReviewsResponseSerializer(serializers.Serializer):
    reviews = ReviewSerializer(many=True)
    averageRating = serializers.FloatField()
    totalReviews = serializers.IntegerField()
    pagination = ReviewPaginationSerializer()
