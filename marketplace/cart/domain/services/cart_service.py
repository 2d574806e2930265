"""
CartService - Session Cart

The cart lives in the Django session as an ordered list of lines, one per
listing. Lines snapshot the price and names at the time they were added; the
order pipeline re-reads listings before creating an order.
"""

from decimal import Decimal
from typing import Any, Dict, List

from marketplace.catalog.domain.models.catalog import Listing
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

SESSION_KEY = "cart"


class CartService(BaseService):
    """
    Service for session cart operations.

    Session values must stay JSON serializable, so ids and prices are stored
    as strings.
    """

    def lines(self, session) -> List[Dict[str, Any]]:
        return list(session.get(SESSION_KEY, []))

    def _save(self, session, lines: List[Dict[str, Any]]) -> None:
        session[SESSION_KEY] = lines
        session.modified = True

    def get_cart(self, session) -> ServiceResult[Dict[str, Any]]:
        lines = self.lines(session)
        total = sum((Decimal(line["price"]) * line["quantity"] for line in lines), Decimal("0"))
        return service_ok(
            {
                "items": lines,
                "total": total.quantize(Decimal("0.01")),
                "itemCount": sum(line["quantity"] for line in lines),
            }
        )

    @BaseService.log_performance
    def add_item(self, session, listing_id, quantity: int = 1) -> ServiceResult[Dict[str, Any]]:
        """Add a listing, merging with an existing line for the same listing."""
        if quantity < 1:
            return service_err(ErrorCodes.INVALID_QUANTITY, "Quantity must be at least 1")

        listing = Listing.objects.select_related("product", "vendor").filter(pk=listing_id, is_active=True).first()
        if listing is None:
            return service_err(ErrorCodes.LISTING_NOT_FOUND, "Product not found")

        lines = self.lines(session)
        line = next((line for line in lines if line["listingId"] == str(listing.id)), None)
        requested = quantity + (line["quantity"] if line else 0)
        if requested > listing.stock:
            return service_err(
                ErrorCodes.INSUFFICIENT_STOCK,
                f"Insufficient stock for {listing.product.name}. Available: {listing.stock}",
            )

        if line:
            line["quantity"] = requested
        else:
            lines.append(
                {
                    "listingId": str(listing.id),
                    "productId": str(listing.product_id),
                    "vendorId": str(listing.vendor_id),
                    "productName": listing.product.name,
                    "storeName": listing.vendor.store_name,
                    "price": str(listing.price),
                    "quantity": quantity,
                    "image": (listing.images or listing.product.images or [None])[0],
                }
            )

        self._save(session, lines)
        return self.get_cart(session)

    @BaseService.log_performance
    def update_item(self, session, listing_id, quantity: int) -> ServiceResult[Dict[str, Any]]:
        """Set a line's quantity; zero or less removes the line."""
        lines = self.lines(session)
        if not lines:
            return service_err(ErrorCodes.EMPTY_CART, "Cart is empty")

        line = next((line for line in lines if line["listingId"] == str(listing_id)), None)
        if line is None:
            return service_err(ErrorCodes.ITEM_NOT_IN_CART, "Item not found in cart")

        if quantity <= 0:
            lines.remove(line)
        else:
            stock = Listing.objects.filter(pk=listing_id, is_active=True).values_list("stock", flat=True).first()
            if stock is None:
                return service_err(ErrorCodes.LISTING_NOT_FOUND, f"Product {line['productName']} not found")
            if quantity > stock:
                return service_err(
                    ErrorCodes.INSUFFICIENT_STOCK,
                    f"Insufficient stock for {line['productName']}. Available: {stock}",
                )
            line["quantity"] = quantity

        self._save(session, lines)
        return self.get_cart(session)

    def remove_item(self, session, listing_id) -> ServiceResult[Dict[str, Any]]:
        lines = self.lines(session)
        if not lines:
            return service_err(ErrorCodes.EMPTY_CART, "Cart is empty")

        self._save(session, [line for line in lines if line["listingId"] != str(listing_id)])
        return self.get_cart(session)

    def clear(self, session) -> None:
        self._save(session, [])
