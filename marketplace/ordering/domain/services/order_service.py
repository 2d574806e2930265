"""
OrderService - Checkout & Order Lifecycle

Turns a cart into a pending order, confirms its payment exactly once, and moves
confirmed orders through shipping and delivery.

Confirmation is one database transaction: the order row is locked, its status
must still be pending, and every line decrements stock with a conditional
update (``stock >= quantity``). If any line falls short the whole transaction
rolls back and the order stays pending. Vendor payouts are written in a
savepoint; a payout failure is reconciled later and never undoes the payment.
"""

import time
import uuid
from collections import OrderedDict
from decimal import Decimal
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import F, Prefetch
from django.utils import timezone

from infrastructure.observability.metrics import gateway_fallbacks_total
from infrastructure.observability.tracing import tracer
from infrastructure.payments import (
    GatewayUnavailableError,
    PaymentFactory,
    PaymentMode,
    PaymentVerificationError,
)
from marketplace.cart.domain.services.cart_service import CartService
from marketplace.catalog.domain.models.catalog import Listing
from marketplace.infra.observability.metrics import (
    order_confirmation_duration,
    order_confirmation_failures_total,
    order_value,
    orders_cancelled_total,
    orders_confirmed_total,
    orders_created_total,
    stock_decrement_conflicts_total,
)
from marketplace.ordering.domain.models.order import Order, OrderItem
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from marketplace.services.pagination import paginate
from payment_system.domain.exceptions import PayoutComputationError, StockConflictError
from payment_system.domain.services.payout_calculator import quantize_money
from payment_system.domain.services.payout_service import PayoutService, default_commission_rate
from payment_system.infra.observability.metrics import payment_volume_total, payments_recorded_total
from payment_system.models import Payment
from utils.rbac import is_admin

User = get_user_model()

VENDOR_STATUS_UPDATES = (Order.STATUS_SHIPPED, Order.STATUS_DELIVERED)


def _receipt() -> str:
    return f"order_{int(time.time() * 1000)}"


class OrderService(BaseService):
    """
    Service for the checkout pipeline and order lifecycle.
    """

    def __init__(
        self,
        cart_service: CartService = None,
        payout_service: PayoutService = None,
        payment_providers=None,
        cache_invalidator=None,
    ):
        """
        Initialize OrderService.

        Args:
            cart_service: Session cart operations (injected)
            payout_service: Vendor payout persistence (injected)
            payment_providers: Providers keyed by PaymentMode (injected)
            cache_invalidator: Response cache invalidation (injected)
        """
        super().__init__()
        self.cart_service = cart_service or CartService()
        self.payout_service = payout_service or PayoutService(cache_invalidator=cache_invalidator)
        self.payment_providers = payment_providers or PaymentFactory.create_all()
        self.cache_invalidator = cache_invalidator

    # ------------------------------------------------------------------
    # Checkout
    # ------------------------------------------------------------------

    @BaseService.log_performance
    def create_order(
        self,
        user: User,
        cart_lines: List[Dict[str, Any]],
        shipping_address: Optional[Dict[str, Any]] = None,
        notes: str = "",
    ) -> ServiceResult[Dict[str, Any]]:
        """
        Create a pending order from cart lines.

        Every listing is re-read: prices come from the listing now, not from
        the cart snapshot. Nothing is persisted when validation fails, and
        stock is not touched until payment is confirmed.

        Returns:
            ServiceResult with {"order": Order, "gateway_order": GatewayOrder}
        """
        with tracer.start_as_current_span("order_create") as span:
            span.set_attribute("user.id", str(user.id))

            if not cart_lines:
                return service_err(ErrorCodes.EMPTY_CART, "Cart is empty")

            # Merge quantities per listing, keeping cart order
            quantities = OrderedDict()
            names = {}
            for line in cart_lines:
                listing_id = _as_uuid(line.get("listingId"))
                if listing_id is None:
                    return service_err(ErrorCodes.LISTING_NOT_FOUND, f"Product {line.get('productName')} not found")
                quantities[listing_id] = quantities.get(listing_id, 0) + int(line["quantity"])
                names[listing_id] = line.get("productName") or listing_id

            listings = Listing.objects.select_related("product", "vendor").in_bulk(list(quantities))
            items = []
            total = Decimal("0")
            for listing_id, quantity in quantities.items():
                listing = listings.get(listing_id)
                if listing is None or not listing.is_active:
                    return service_err(ErrorCodes.LISTING_NOT_FOUND, f"Product {names[listing_id]} not found")
                if quantity < 1:
                    return service_err(ErrorCodes.INVALID_QUANTITY, "Quantity must be at least 1")
                if quantity > listing.stock:
                    return service_err(
                        ErrorCodes.INSUFFICIENT_STOCK,
                        f"Insufficient stock for {listing.product.name}. Available: {listing.stock}",
                    )
                total += listing.price * quantity
                items.append((listing, quantity))

            total = quantize_money(total)
            currency = settings.MARKETPLACE.get("CURRENCY", "INR")
            gateway_order = self._open_payment_order(total, currency, {"user_id": str(user.id)})

            with transaction.atomic():
                order = Order.objects.create(
                    user=user,
                    status=Order.STATUS_PENDING,
                    total_amount=total,
                    currency=currency,
                    payment_mode=gateway_order.mode.value,
                    gateway_order_id=gateway_order.order_id,
                    shipping_address=shipping_address or {},
                    notes=notes or "",
                )
                OrderItem.objects.bulk_create(
                    [
                        OrderItem(
                            order=order,
                            listing=listing,
                            product=listing.product,
                            vendor=listing.vendor,
                            product_name=listing.product.name,
                            store_name=listing.vendor.store_name,
                            unit_price=listing.price,
                            quantity=quantity,
                        )
                        for listing, quantity in items
                    ]
                )

            orders_created_total.labels(mode=order.payment_mode).inc()
            order_value.observe(float(total))
            span.set_attribute("order.id", str(order.id))
            span.set_attribute("order.mode", order.payment_mode)

            self.logger.info(
                f"Created {order.payment_mode} order {order.id} for user {user.id}: "
                f"{len(items)} lines, total {total} {currency}"
            )
            return service_ok({"order": order, "gateway_order": gateway_order})

    def _open_payment_order(self, total: Decimal, currency: str, notes: Dict[str, Any]):
        gateway = self.payment_providers[PaymentMode.GATEWAY]
        receipt = _receipt()

        if gateway.is_available():
            try:
                return gateway.create_order(total, currency, receipt, notes)
            except GatewayUnavailableError as e:
                self.logger.warning(f"Payment gateway unavailable, falling back to demo mode: {e}")
                gateway_fallbacks_total.labels(reason="error").inc()
        else:
            gateway_fallbacks_total.labels(reason="unconfigured").inc()

        return self.payment_providers[PaymentMode.DEMO].create_order(total, currency, receipt, notes)

    @BaseService.log_performance
    def confirm_payment(
        self,
        order_id,
        user: User,
        mode: str,
        payload: Optional[Dict[str, Any]] = None,
        session=None,
    ) -> ServiceResult[Dict[str, Any]]:
        """
        Confirm payment for a pending order and commit its stock.

        Args:
            order_id: Order to confirm; must belong to ``user``
            mode: "gateway" or "demo"; must match the mode recorded on the order
            payload: Gateway proof (order id, payment id, signature)
            session: Session whose cart is cleared after a successful confirmation

        Returns:
            ServiceResult with {"order": Order, "payment": Payment}
        """
        with tracer.start_as_current_span("order_confirm_payment") as span:
            span.set_attribute("order.id", str(order_id))
            span.set_attribute("payment.mode", str(mode))

            order = Order.objects.filter(pk=order_id, user=user).first()
            if order is None:
                return service_err(ErrorCodes.ORDER_NOT_FOUND, "Order not found")
            if order.payment_mode != mode:
                order_confirmation_failures_total.labels(mode=mode, reason="provider_mismatch").inc()
                return service_err(
                    ErrorCodes.PROVIDER_MISMATCH, f"Order was created for {order.payment_mode} payment"
                )
            if not order.is_pending:
                return service_err(ErrorCodes.ORDER_NOT_PENDING, f"Order is already {order.status}")

            provider = self.payment_providers[PaymentMode(mode)]
            try:
                confirmation = provider.verify_payment(order.gateway_order_id, payload or {})
            except PaymentVerificationError as e:
                order_confirmation_failures_total.labels(mode=mode, reason="invalid_signature").inc()
                self.logger.warning(f"Payment verification failed for order {order.id}: {e}")
                return service_err(ErrorCodes.INVALID_SIGNATURE, str(e))

            started = time.monotonic()
            try:
                result = self._commit_payment(order.pk, user, confirmation)
            except StockConflictError as e:
                stock_decrement_conflicts_total.inc()
                order_confirmation_failures_total.labels(mode=mode, reason="insufficient_stock").inc()
                self.logger.warning(f"Stock conflict confirming order {order.id}: {e}")
                return service_err(ErrorCodes.INSUFFICIENT_STOCK, str(e))
            finally:
                order_confirmation_duration.observe(time.monotonic() - started)

            if not result.ok:
                return result

            order, payment = result.value["order"], result.value["payment"]
            if session is not None:
                self.cart_service.clear(session)
            self._invalidate_order(order)

            orders_confirmed_total.labels(mode=mode).inc()
            payments_recorded_total.labels(mode=mode).inc()
            payment_volume_total.labels(currency=payment.currency, mode=mode).inc(float(payment.amount))
            span.set_attribute("payment.id", str(payment.id))
            self.logger.info(f"Order {order.id} paid ({confirmation.payment_id})")
            return result

    def _commit_payment(self, order_pk, user: User, confirmation) -> ServiceResult[Dict[str, Any]]:
        """
        The confirmation transaction.

        Raises:
            StockConflictError: A line could not be decremented; everything is rolled back
        """
        with transaction.atomic():
            order = Order.objects.select_for_update().get(pk=order_pk)
            if not order.is_pending:
                return service_err(ErrorCodes.ORDER_NOT_PENDING, f"Order is already {order.status}")

            with tracer.start_as_current_span("commit_stock"):
                for item in order.items.all():
                    updated = 0
                    if item.listing_id is not None:
                        updated = Listing.objects.filter(pk=item.listing_id, stock__gte=item.quantity).update(
                            stock=F("stock") - item.quantity, updated_at=timezone.now()
                        )
                    if not updated:
                        available = (
                            Listing.objects.filter(pk=item.listing_id).values_list("stock", flat=True).first() or 0
                        )
                        raise StockConflictError(item.product_name, item.quantity, available)

            now = timezone.now()
            order.status = Order.STATUS_PAID
            order.confirmation_id = confirmation.payment_id
            order.paid_at = now
            order.save(update_fields=["status", "confirmation_id", "paid_at", "updated_at"])

            payment = Payment.objects.create(
                order=order,
                user=user,
                payment_mode=confirmation.mode.value,
                gateway_order_id=confirmation.gateway_order_id,
                gateway_payment_id=confirmation.payment_id,
                gateway_signature=confirmation.signature,
                amount=order.total_amount,
                currency=order.currency,
                status="paid",
                commission_rate=default_commission_rate(),
                paid_at=now,
            )

            try:
                with transaction.atomic():
                    self.payout_service.record_payouts(payment)
            except PayoutComputationError as e:
                self.payout_service.mark_failed(payment, e)
                transaction.on_commit(lambda: _enqueue_reconciliation(payment.id))

        return service_ok({"order": order, "payment": payment})

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @BaseService.log_performance
    def list_orders(self, user: User, page=None, limit=None) -> ServiceResult[Dict[str, Any]]:
        orders = Order.objects.filter(user=user).prefetch_related("items").order_by("-created_at")
        items, pagination = paginate(orders, page, limit, total_key="totalOrders")
        return service_ok({"orders": items, "pagination": pagination})

    @BaseService.log_performance
    def list_vendor_orders(self, vendor, page=None, limit=None) -> ServiceResult[Dict[str, Any]]:
        """Confirmed orders containing the vendor's lines; only those lines are attached."""
        orders = (
            Order.objects.filter(items__vendor=vendor)
            .exclude(status=Order.STATUS_PENDING)
            .distinct()
            .select_related("user")
            .prefetch_related(
                Prefetch("items", queryset=OrderItem.objects.filter(vendor=vendor), to_attr="vendor_items")
            )
            .order_by("-created_at")
        )
        items, pagination = paginate(orders, page, limit, total_key="totalOrders")
        return service_ok({"orders": items, "pagination": pagination})

    @BaseService.log_performance
    def get_order(self, user: User, order_id) -> ServiceResult[Order]:
        """Visible to the owner, to admins, and to vendors with lines in the order (their lines only)."""
        order = Order.objects.filter(pk=order_id).select_related("user").first()
        if order is None:
            return service_err(ErrorCodes.ORDER_NOT_FOUND, "Order not found")

        if order.user_id == user.id or is_admin(user):
            return service_ok(order)

        vendor_items = list(order.items.filter(vendor__user=user))
        if vendor_items:
            order.vendor_items = vendor_items
            return service_ok(order)

        return service_err(ErrorCodes.ORDER_NOT_FOUND, "Order not found")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @BaseService.log_performance
    def update_status(self, user: User, order_id, new_status: str) -> ServiceResult[Order]:
        """Vendors with lines in the order, or admins, move it paid -> shipped -> delivered."""
        if new_status not in VENDOR_STATUS_UPDATES:
            return service_err(
                ErrorCodes.INVALID_TRANSITION, f"Status must be one of: {', '.join(VENDOR_STATUS_UPDATES)}"
            )

        with transaction.atomic():
            order = Order.objects.select_for_update().filter(pk=order_id).first()
            if order is None:
                return service_err(ErrorCodes.ORDER_NOT_FOUND, "Order not found")

            if not is_admin(user) and not order.items.filter(vendor__user=user).exists():
                return service_err(ErrorCodes.PERMISSION_DENIED, "Only vendors in this order can update it")

            if not order.can_transition_to(new_status):
                return service_err(
                    ErrorCodes.INVALID_TRANSITION, f"Cannot change order status from {order.status} to {new_status}"
                )

            order.status = new_status
            update_fields = ["status", "updated_at"]
            if new_status == Order.STATUS_SHIPPED:
                order.shipped_at = timezone.now()
                update_fields.append("shipped_at")
            else:
                order.delivered_at = timezone.now()
                update_fields.append("delivered_at")
            order.save(update_fields=update_fields)

        self._invalidate_vendors(order)
        self.logger.info(f"Order {order.id} moved to {new_status} by user {user.id}")
        return service_ok(order)

    @BaseService.log_performance
    def cancel_order(self, user: User, order_id) -> ServiceResult[Order]:
        """
        Cancel a pending or paid order (owner or admin).

        Stock is not restored; a paid cancellation needs a manual refund.
        """
        with transaction.atomic():
            order = Order.objects.select_for_update().filter(pk=order_id).first()
            if order is None or (order.user_id != user.id and not is_admin(user)):
                return service_err(ErrorCodes.ORDER_NOT_FOUND, "Order not found")

            if not order.can_transition_to(Order.STATUS_CANCELLED):
                return service_err(ErrorCodes.INVALID_TRANSITION, f"Cannot cancel an order that is {order.status}")

            previous = order.status
            order.status = Order.STATUS_CANCELLED
            order.cancelled_at = timezone.now()
            order.save(update_fields=["status", "cancelled_at", "updated_at"])

        orders_cancelled_total.labels(from_status=previous).inc()
        if previous == Order.STATUS_PAID:
            self.logger.warning(
                f"Paid order {order.id} cancelled by user {user.id}; refund of {order.total_amount} "
                f"{order.currency} requires manual follow-up"
            )
        self._invalidate_vendors(order)
        return service_ok(order)

    # ------------------------------------------------------------------

    def _invalidate_order(self, order: Order) -> None:
        if not self.cache_invalidator:
            return
        self.cache_invalidator.products()
        self._invalidate_vendors(order)

    def _invalidate_vendors(self, order: Order) -> None:
        if not self.cache_invalidator:
            return
        self.cache_invalidator.users(order.items.values_list("vendor__user_id", flat=True))


def _as_uuid(value) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def _enqueue_reconciliation(payment_id) -> None:
    from payment_system.tasks import reconcile_payouts_task

    reconcile_payouts_task.delay(str(payment_id))
