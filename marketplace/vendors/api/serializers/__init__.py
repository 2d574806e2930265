from .vendor_serializers import (
    ListingCreateRequestSerializer,
    ListingUpdateRequestSerializer,
    StoreDetailResponseSerializer,
    StoreListItemSerializer,
    StoreListResponseSerializer,
    StoreSerializer,
    VendorDashboardResponseSerializer,
    VendorProfileUpdateSerializer,
    VendorSerializer,
)
