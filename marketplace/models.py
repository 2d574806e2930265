from marketplace.catalog.domain.models import Listing, Product, Review
from marketplace.moderation.domain.models import BugReport, Report
from marketplace.ordering.domain.models import Order, OrderItem
from marketplace.vendors.domain.models import Vendor


__all__ = [
    "Product",
    "Listing",
    "Review",
    "Vendor",
    "Order",
    "OrderItem",
    "Report",
    "BugReport",
]
