"""
ReviewService - Verified Purchase Reviews

A review can only be written for a (product, vendor) pair that appears in one
of the caller's paid (or later) orders, once per (user, order, product).
"""

from typing import Any, Dict, Optional

from django.db import IntegrityError, transaction
from django.db.models import Count

from marketplace.catalog.domain.models.interaction import Review
from marketplace.infra.observability.metrics import reviews_created_total
from marketplace.ordering.domain.models.order import Order
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from marketplace.services.pagination import paginate

from .catalog_service import rating_summary

SORT_ORDERS = {
    "newest": ("-created_at",),
    "oldest": ("created_at",),
    "highest": ("-rating", "-created_at"),
    "lowest": ("rating", "-created_at"),
    "helpful": ("-helpful_count", "-created_at"),
}


class ReviewService(BaseService):
    def __init__(self, cache_invalidator=None):
        super().__init__()
        self.cache_invalidator = cache_invalidator

    @BaseService.log_performance
    def create_review(
        self, user, order_id, product_id, vendor_id, rating: int, comment: str = ""
    ) -> ServiceResult[Review]:
        """
        Create a review after checking proof of purchase.

        Errors:
            ORDER_NOT_ELIGIBLE: order missing, not owned, or not paid yet
            PRODUCT_NOT_IN_ORDER: the order has no line for (product, vendor)
            REVIEW_EXISTS: the caller already reviewed this product for this order
        """
        order = Order.objects.filter(pk=order_id, user=user).first()
        if order is None or order.status not in Order.PURCHASED_STATUSES:
            return service_err(ErrorCodes.ORDER_NOT_ELIGIBLE, "Order not found or not paid")

        item = order.items.filter(product_id=product_id, vendor_id=vendor_id).select_related("vendor").first()
        if item is None:
            return service_err(ErrorCodes.PRODUCT_NOT_IN_ORDER, "Product not found in this order")

        try:
            with transaction.atomic():
                review = Review.objects.create(
                    user=user,
                    order=order,
                    product_id=product_id,
                    vendor_id=vendor_id,
                    listing_id=item.listing_id,
                    rating=rating,
                    comment=comment or "",
                )
        except IntegrityError:
            return service_err(ErrorCodes.REVIEW_EXISTS, "Review already exists for this product")

        reviews_created_total.inc()
        self._invalidate(product_id, item.vendor.user_id)
        self.logger.info(f"User {user.id} reviewed product {product_id} from order {order.id}")
        return service_ok(review)

    @BaseService.log_performance
    def list_product_reviews(
        self, product_id, sort: Optional[str] = None, page=None, limit=None
    ) -> ServiceResult[Dict[str, Any]]:
        reviews = Review.objects.filter(product_id=product_id).select_related("user", "vendor")
        ordering = SORT_ORDERS.get(sort or "newest")
        if ordering is None:
            return service_err(
                ErrorCodes.VALIDATION_ERROR, f"sort must be one of: {', '.join(SORT_ORDERS)}"
            )

        items, pagination = paginate(reviews.order_by(*ordering), page, limit, total_key="totalReviews")
        summary = rating_summary(reviews)

        distribution = {str(star): 0 for star in range(1, 6)}
        for row in reviews.order_by().values("rating").annotate(count=Count("id")):
            distribution[str(row["rating"])] = row["count"]

        return service_ok(
            {
                "reviews": items,
                "averageRating": summary["averageRating"],
                "totalReviews": summary["reviewCount"],
                "ratingDistribution": distribution,
                "pagination": pagination,
            }
        )

    @BaseService.log_performance
    def vendor_reviews(self, vendor, page=None, limit=None) -> ServiceResult[Dict[str, Any]]:
        reviews = Review.objects.filter(vendor=vendor).select_related("user", "product", "order")
        items, pagination = paginate(reviews.order_by("-created_at"), page, limit, total_key="totalReviews")
        summary = rating_summary(reviews)
        return service_ok(
            {
                "reviews": items,
                "averageRating": summary["averageRating"],
                "totalReviews": summary["reviewCount"],
                "pagination": pagination,
            }
        )

    def user_reviews(self, user) -> ServiceResult[list]:
        return service_ok(
            list(Review.objects.filter(user=user).select_related("product", "vendor", "order").order_by("-created_at"))
        )

    @BaseService.log_performance
    def update_review(self, user, review_id, data: Dict[str, Any]) -> ServiceResult[Review]:
        """Only the author may update; anyone else gets REVIEW_NOT_FOUND."""
        review = Review.objects.filter(pk=review_id, user=user).select_related("vendor").first()
        if review is None:
            return service_err(ErrorCodes.REVIEW_NOT_FOUND, "Review not found")

        update_fields = ["updated_at"]
        for field in ("rating", "comment"):
            if field in data:
                setattr(review, field, data[field])
                update_fields.append(field)
        review.save(update_fields=update_fields)

        self._invalidate(review.product_id, review.vendor.user_id)
        return service_ok(review)

    @BaseService.log_performance
    def delete_review(self, user, review_id) -> ServiceResult[None]:
        review = Review.objects.filter(pk=review_id, user=user).select_related("vendor").first()
        if review is None:
            return service_err(ErrorCodes.REVIEW_NOT_FOUND, "Review not found")

        product_id, vendor_user_id = review.product_id, review.vendor.user_id
        review.delete()
        self._invalidate(product_id, vendor_user_id)
        return service_ok(None)

    def _invalidate(self, product_id, vendor_user_id) -> None:
        if not self.cache_invalidator:
            return
        self.cache_invalidator.reviews(product_id)
        self.cache_invalidator.products()
        self.cache_invalidator.user(vendor_user_id)
