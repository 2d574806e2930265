"""
Marketplace Service Layer

Business logic for the marketplace app, organized into domain services. Views
get them from the service container so collaborators (payment providers,
response caches) are injected.

Services:
- CatalogService: Product browsing and master search
- VendorService: Store profile, vendor listings, dashboard, public stores
- CartService: Session cart operations
- OrderService: Checkout, payment confirmation, order lifecycle
- ReviewService: Verified purchase reviews
- ModerationService: Reports and admin operations
- SupportService: Platform bug reports

Usage:
    from infrastructure.container import container

    result = container.order_service().create_order(user, cart_lines)
    if result.ok:
        order = result.value["order"]
    else:
        error = result.error
"""

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from marketplace.cart.domain.services.cart_service import CartService
from marketplace.catalog.domain.services.catalog_service import CatalogService
from marketplace.catalog.domain.services.review_service import ReviewService
from marketplace.moderation.domain.services.moderation_service import ModerationService
from marketplace.moderation.domain.services.support_service import SupportService
from marketplace.ordering.domain.services.order_service import OrderService
from marketplace.vendors.domain.services.vendor_service import VendorService

__all__ = [
    # Base classes
    "BaseService",
    "ServiceResult",
    # Helper functions
    "service_ok",
    "service_err",
    # Error codes
    "ErrorCodes",
    # Services
    "CatalogService",
    "CartService",
    "ModerationService",
    "OrderService",
    "ReviewService",
    "SupportService",
    "VendorService",
]
