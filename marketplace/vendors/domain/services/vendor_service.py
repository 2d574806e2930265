"""
VendorService - Store Profile, Listings & Public Stores

Vendors manage their own store profile and listings; only verified vendors may
publish listings. Every write invalidates the product caches and the vendor's
own cached views.
"""

from decimal import Decimal
from typing import Any, Dict, Optional

from django.db import transaction
from django.db.models import Count, DecimalField, ExpressionWrapper, F, Q, Sum
from django.db.models.functions import Coalesce

from marketplace.catalog.domain.models.catalog import Listing, Product
from marketplace.catalog.domain.models.interaction import Review
from marketplace.catalog.domain.services.catalog_service import rating_summary
from marketplace.ordering.domain.models.order import Order, OrderItem
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from marketplace.services.pagination import paginate
from marketplace.vendors.domain.models.vendor import Vendor

PROFILE_FIELDS = ("company_name", "store_name", "description", "images", "address", "city", "state", "pincode")
LISTING_FIELDS = ("price", "stock", "images", "is_active")


class VendorService(BaseService):
    """
    Service for vendor-side operations.

    Responsibilities:
    - Store profile read/update
    - Dashboard aggregates
    - Listing create/update/delete (owner only, verified vendors only for create)
    - Public store directory
    """

    def __init__(self, cache_invalidator=None):
        super().__init__()
        self.cache_invalidator = cache_invalidator

    def get_vendor(self, user) -> ServiceResult[Vendor]:
        vendor = Vendor.objects.filter(user=user).first()
        if vendor is None:
            return service_err(ErrorCodes.VENDOR_NOT_FOUND, "Vendor profile not found")
        return service_ok(vendor)

    @BaseService.log_performance
    def update_profile(self, user, data: Dict[str, Any]) -> ServiceResult[Vendor]:
        result = self.get_vendor(user)
        if not result.ok:
            return result

        vendor = result.value
        changed = [field for field in PROFILE_FIELDS if field in data]
        for field in changed:
            setattr(vendor, field, data[field])
        vendor.save(update_fields=changed + ["updated_at"])

        # Store and company names are shown on listings and store pages
        if {"company_name", "store_name"} & set(changed):
            Listing.objects.filter(vendor=vendor).update(company_name=vendor.company_name)
        self._invalidate(vendor)
        return service_ok(vendor)

    @BaseService.log_performance
    def dashboard(self, user) -> ServiceResult[Dict[str, Any]]:
        result = self.get_vendor(user)
        if not result.ok:
            return result

        vendor = result.value
        listings = Listing.objects.filter(vendor=vendor).aggregate(
            total=Count("id"),
            active=Count("id", filter=Q(is_active=True)),
            out_of_stock=Count("id", filter=Q(is_active=True, stock=0)),
            total_stock=Coalesce(Sum("stock", filter=Q(is_active=True)), 0),
        )

        sold = OrderItem.objects.filter(vendor=vendor, order__status__in=Order.PURCHASED_STATUSES)
        line_total = ExpressionWrapper(
            F("unit_price") * F("quantity"), output_field=DecimalField(max_digits=12, decimal_places=2)
        )
        sales = sold.aggregate(
            revenue=Sum(line_total),
            units=Coalesce(Sum("quantity"), 0),
            orders=Count("order", distinct=True),
        )
        rating = rating_summary(Review.objects.filter(vendor=vendor))

        return service_ok(
            {
                "vendor": vendor,
                "stats": {
                    "totalListings": listings["total"],
                    "activeListings": listings["active"],
                    "outOfStockListings": listings["out_of_stock"],
                    "totalStock": listings["total_stock"],
                    "totalOrders": sales["orders"],
                    "unitsSold": sales["units"],
                    "totalRevenue": (sales["revenue"] or Decimal("0")).quantize(Decimal("0.01")),
                    "averageRating": rating["averageRating"],
                    "reviewCount": rating["reviewCount"],
                },
            }
        )

    def list_listings(self, user) -> ServiceResult[list]:
        result = self.get_vendor(user)
        if not result.ok:
            return result
        return service_ok(list(Listing.objects.filter(vendor=result.value).select_related("product", "vendor")))

    @BaseService.log_performance
    @transaction.atomic
    def create_listing(self, user, data: Dict[str, Any]) -> ServiceResult[Listing]:
        """
        Publish a listing for an existing master product (``product_id``) or a
        new one (``name``, ``category``, optional ``description``).
        """
        result = self.get_vendor(user)
        if not result.ok:
            return result

        vendor = result.value
        if not vendor.verified:
            return service_err(ErrorCodes.VENDOR_NOT_VERIFIED, "Vendor account not verified")

        product_id = data.get("product_id")
        if product_id:
            product = Product.objects.filter(pk=product_id).first()
            if product is None:
                return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Product not found")
        elif data.get("name") and data.get("category"):
            product = Product.objects.create(
                name=data["name"],
                category=data["category"],
                description=data.get("description", ""),
                images=data.get("images", []),
            )
            self.logger.info(f"Vendor {vendor.id} created master product {product.id}")
        else:
            return service_err(ErrorCodes.INVALID_PRODUCT_DATA, "Product ID or product details required")

        listing = Listing.objects.create(
            product=product,
            vendor=vendor,
            company_name=vendor.company_name,
            price=data["price"],
            stock=data.get("stock", 0),
            images=data.get("images", []),
            is_active=data.get("is_active", True),
        )
        transaction.on_commit(lambda: self._invalidate(vendor))
        return service_ok(listing)

    @BaseService.log_performance
    def update_listing(self, user, listing_id, data: Dict[str, Any]) -> ServiceResult[Listing]:
        result = self._owned_listing(user, listing_id)
        if not result.ok:
            return result

        listing = result.value
        changed = [field for field in LISTING_FIELDS if field in data]
        for field in changed:
            setattr(listing, field, data[field])
        listing.save(update_fields=changed + ["updated_at"])

        self._invalidate(listing.vendor)
        return service_ok(listing)

    @BaseService.log_performance
    def delete_listing(self, user, listing_id) -> ServiceResult[None]:
        result = self._owned_listing(user, listing_id)
        if not result.ok:
            return result

        listing = result.value
        vendor = listing.vendor
        listing.delete()
        self._invalidate(vendor)
        return service_ok(None)

    @BaseService.log_performance
    def list_stores(self, query: Optional[str] = None, page=None, limit=None) -> ServiceResult[Dict[str, Any]]:
        stores = Vendor.objects.filter(verified=True).annotate(
            listing_count=Count("listings", filter=Q(listings__is_active=True))
        )
        if query:
            stores = stores.filter(Q(store_name__icontains=query) | Q(city__icontains=query))

        items, pagination = paginate(stores.order_by("store_name"), page, limit, total_key="totalStores")
        return service_ok({"stores": items, "pagination": pagination})

    @BaseService.log_performance
    def get_store(self, vendor_id) -> ServiceResult[Dict[str, Any]]:
        vendor = Vendor.objects.filter(pk=vendor_id, verified=True).first()
        if vendor is None:
            return service_err(ErrorCodes.VENDOR_NOT_FOUND, "Store not found")

        listings = list(vendor.listings.filter(is_active=True).select_related("product", "vendor"))
        return service_ok(
            {"store": vendor, "listings": listings, "rating": rating_summary(Review.objects.filter(vendor=vendor))}
        )

    def _owned_listing(self, user, listing_id) -> ServiceResult[Listing]:
        listing = Listing.objects.select_related("vendor", "product").filter(pk=listing_id).first()
        if listing is None:
            return service_err(ErrorCodes.LISTING_NOT_FOUND, "Listing not found")
        if listing.vendor.user_id != user.id:
            return service_err(ErrorCodes.NOT_LISTING_OWNER, "You can only manage your own listings")
        return service_ok(listing)

    def _invalidate(self, vendor: Vendor) -> None:
        if not self.cache_invalidator:
            return
        self.cache_invalidator.products()
        self.cache_invalidator.user(vendor.user_id)
