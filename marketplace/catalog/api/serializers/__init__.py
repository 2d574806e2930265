from .product_serializers import (
    ListingSerializer,
    ProductBriefSerializer,
    ProductDetailResponseSerializer,
    ProductListingSerializer,
    ProductListResponseSerializer,
    ProductListSerializer,
    VendorBriefSerializer,
)
from .review_serializers import (
    ProductReviewsResponseSerializer,
    ReviewCreateRequestSerializer,
    ReviewSerializer,
    ReviewUpdateRequestSerializer,
    VendorReviewsResponseSerializer,
)
