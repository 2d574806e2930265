from .vendor_service import VendorService

__all__ = ["VendorService"]
