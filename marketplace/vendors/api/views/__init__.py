from .vendor_views import StoreViewSet, VendorViewSet

__all__ = ["StoreViewSet", "VendorViewSet"]
