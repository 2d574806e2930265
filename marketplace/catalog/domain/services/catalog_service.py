"""
CatalogService - Product Browsing & Search

Read side of the catalog: product list with filters, product and listing
detail, and the master product search vendors use when creating listings.
Listing writes live in VendorService.
"""

from typing import Any, Dict, Optional

from django.db.models import Avg, Count, IntegerField, Max, Min, OuterRef, Q, Subquery, Sum
from django.db.models.functions import Coalesce

from infrastructure.observability.tracing import tracer
from marketplace.catalog.domain.models.catalog import Listing, Product
from marketplace.catalog.domain.models.interaction import Review
from marketplace.filters import ProductFilter
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from marketplace.services.pagination import paginate

MASTER_SEARCH_LIMIT = 10


def rating_summary(reviews) -> Dict[str, Any]:
    """Average rating (1 decimal) and count over a review queryset."""
    stats = reviews.aggregate(average=Avg("rating"), count=Count("id"))
    average = stats["average"]
    return {
        "averageRating": round(float(average), 1) if average is not None else 0.0,
        "reviewCount": stats["count"],
    }


class CatalogService(BaseService):
    """
    Service for catalog reads.

    Responsibilities:
    - List products that have at least one active listing
    - Product detail with active listings and rating summary
    - Listing detail
    - Master product search
    """

    def __init__(self, cache_invalidator=None):
        super().__init__()
        self.cache_invalidator = cache_invalidator

    @staticmethod
    def product_queryset():
        active = Q(listings__is_active=True)
        reviews = Review.objects.filter(product=OuterRef("pk")).order_by().values("product")
        return Product.objects.annotate(
            min_price=Min("listings__price", filter=active),
            max_price=Max("listings__price", filter=active),
            total_stock=Coalesce(Sum("listings__stock", filter=active), 0),
            listing_count=Count("listings", filter=active, distinct=True),
            average_rating=Subquery(reviews.annotate(value=Avg("rating")).values("value")[:1]),
            review_count=Coalesce(
                Subquery(reviews.annotate(value=Count("id")).values("value")[:1], output_field=IntegerField()), 0
            ),
        ).filter(listing_count__gt=0)

    @BaseService.log_performance
    def list_products(self, params=None, page=None, limit=None) -> ServiceResult[Dict[str, Any]]:
        """
        List products with filtering and pagination.

        Args:
            params: Query parameters understood by ProductFilter
            page: Page number (1-indexed)
            limit: Items per page (capped)
        """
        with tracer.start_as_current_span("catalog_list_products") as span:
            filterset = ProductFilter(params or {}, queryset=self.product_queryset().order_by("-created_at"))
            if not filterset.is_valid():
                return service_err(ErrorCodes.VALIDATION_ERROR, str(filterset.errors))

            products, pagination = paginate(filterset.qs, page, limit, total_key="totalProducts")
            span.set_attribute("results.count", len(products))
            return service_ok({"products": products, "pagination": pagination})

    @BaseService.log_performance
    def get_product(self, product_id) -> ServiceResult[Dict[str, Any]]:
        try:
            product = Product.objects.get(pk=product_id)
        except Product.DoesNotExist:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Product not found")

        listings = list(
            Listing.objects.filter(product=product, is_active=True).select_related("vendor").order_by("price")
        )
        return service_ok(
            {
                "product": product,
                "listings": listings,
                "rating": rating_summary(Review.objects.filter(product=product)),
            }
        )

    @BaseService.log_performance
    def get_listing(self, listing_id) -> ServiceResult[Listing]:
        try:
            listing = Listing.objects.select_related("product", "vendor").get(pk=listing_id)
        except Listing.DoesNotExist:
            return service_err(ErrorCodes.LISTING_NOT_FOUND, "Listing not found")
        return service_ok(listing)

    def search_master(self, query: Optional[str]) -> ServiceResult[list]:
        """Master catalog lookup by name; an empty query returns no results."""
        query = (query or "").strip()
        if not query:
            return service_ok([])
        return service_ok(list(Product.objects.filter(name__icontains=query).order_by("name")[:MASTER_SEARCH_LIMIT]))
