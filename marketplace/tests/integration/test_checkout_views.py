from decimal import Decimal
from unittest.mock import patch

from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from infrastructure.payments import GatewayProvider, compute_signature
from marketplace.models import Listing, Order
from marketplace.tests.factories import ListingFactory, OrderFactory, OrderItemFactory, UserFactory, VendorFactory
from payment_system.models import Payment, VendorPayout


class CartViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.listing = ListingFactory(price=Decimal("100.00"), stock=5)

        self.cart_list_url = reverse("marketplace:cart-list")
        self.cart_add_item_url = reverse("marketplace:cart-add-item")
        self.cart_update_item_url = reverse("marketplace:cart-update-item")
        self.cart_remove_item_url = reverse("marketplace:cart-remove-item")
        self.cart_clear_url = reverse("marketplace:cart-clear")

    def add(self, listing, quantity=1):
        return self.client.post(
            self.cart_add_item_url, {"listingId": str(listing.id), "quantity": quantity}, format="json"
        )

    def test_anonymous_session_keeps_cart(self):
        self.assertEqual(self.add(self.listing, 2).status_code, status.HTTP_200_OK)

        response = self.client.get(self.cart_list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["itemCount"], 2)
        self.assertEqual(response.data["total"], Decimal("200.00"))

    def test_add_missing_listing_is_404(self):
        self.listing.is_active = False
        self.listing.save()

        response = self.add(self.listing)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "listing_not_found")

    def test_add_beyond_stock(self):
        response = self.add(self.listing, 6)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "insufficient_stock")

    def test_add_requires_positive_quantity(self):
        response = self.add(self.listing, 0)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_remove_and_clear(self):
        other = ListingFactory(price=Decimal("10.00"))
        self.add(self.listing)
        self.add(other)

        updated = self.client.post(
            self.cart_update_item_url, {"listingId": str(self.listing.id), "quantity": 3}, format="json"
        )
        self.assertEqual(updated.data["itemCount"], 4)

        removed = self.client.post(self.cart_remove_item_url, {"listingId": str(other.id)}, format="json")
        self.assertEqual(len(removed.data["items"]), 1)

        cleared = self.client.post(self.cart_clear_url)
        self.assertEqual(cleared.data, {"message": "Cart cleared"})
        self.assertEqual(self.client.get(self.cart_list_url).data["items"], [])

    def test_update_line_not_in_cart(self):
        self.add(self.listing)

        response = self.client.post(
            self.cart_update_item_url, {"listingId": str(ListingFactory().id), "quantity": 1}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "item_not_in_cart")


class CheckoutIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = UserFactory()
        self.client.force_authenticate(user=self.user)
        self.vendor = VendorFactory()
        self.listing = ListingFactory(vendor=self.vendor, price=Decimal("100.00"), stock=5)

        self.create_order_url = reverse("marketplace:order-create-order")
        self.demo_checkout_url = reverse("marketplace:order-demo-checkout")
        self.verify_payment_url = reverse("marketplace:order-verify-payment")

    def add_to_cart(self, listing, quantity):
        response = self.client.post(
            reverse("marketplace:cart-add-item"), {"listingId": str(listing.id), "quantity": quantity}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def checkout(self):
        response = self.client.post(self.create_order_url, {"notes": "Leave at door"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        return response

    def test_demo_checkout_end_to_end(self):
        self.add_to_cart(self.listing, 2)
        created = self.checkout()

        self.assertTrue(created.data["demoMode"])
        self.assertEqual(created.data["amount"], Decimal("200.00"))
        self.listing.refresh_from_db()
        self.assertEqual(self.listing.stock, 5)

        response = self.client.post(self.demo_checkout_url, {"orderId": str(created.data["orderId"])}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Payment confirmed")
        self.assertEqual(response.data["order"]["status"], "paid")
        self.listing.refresh_from_db()
        self.assertEqual(self.listing.stock, 3)

        payout = VendorPayout.objects.get(vendor=self.vendor)
        self.assertEqual(
            (payout.gross_amount, payout.commission, payout.net_amount),
            (Decimal("200.00"), Decimal("2.00"), Decimal("198.00")),
        )
        self.assertEqual(self.client.get(reverse("marketplace:cart-list")).data["items"], [])

    def test_double_confirmation_is_rejected(self):
        self.add_to_cart(self.listing, 2)
        order_id = str(self.checkout().data["orderId"])
        self.client.post(self.demo_checkout_url, {"orderId": order_id}, format="json")

        response = self.client.post(self.demo_checkout_url, {"orderId": order_id}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "order_not_pending")
        self.listing.refresh_from_db()
        self.assertEqual(self.listing.stock, 3)
        self.assertEqual(Payment.objects.count(), 1)

    def test_price_change_does_not_alter_order(self):
        self.add_to_cart(self.listing, 1)
        order_id = self.checkout().data["orderId"]
        Listing.objects.filter(pk=self.listing.pk).update(price=Decimal("250.00"))

        response = self.client.post(self.demo_checkout_url, {"orderId": str(order_id)}, format="json")

        self.assertEqual(response.data["order"]["total_amount"], "100.00")

    def test_oversell_rejected_before_order_exists(self):
        self.add_to_cart(self.listing, 5)
        Listing.objects.filter(pk=self.listing.pk).update(stock=2)

        response = self.client.post(self.create_order_url, {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "insufficient_stock")
        self.assertFalse(Order.objects.exists())

    def test_empty_cart(self):
        response = self.client.post(self.create_order_url, {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "empty_cart")

    def test_competing_orders_only_one_confirms(self):
        self.listing.stock = 4
        self.listing.save()
        self.add_to_cart(self.listing, 3)
        first_id = str(self.checkout().data["orderId"])

        rival = APIClient()
        rival.force_authenticate(user=UserFactory())
        rival.post(reverse("marketplace:cart-add-item"), {"listingId": str(self.listing.id), "quantity": 3}, format="json")
        second_id = str(rival.post(self.create_order_url, {}, format="json").data["orderId"])

        first = self.client.post(self.demo_checkout_url, {"orderId": first_id}, format="json")
        second = rival.post(self.demo_checkout_url, {"orderId": second_id}, format="json")

        self.assertEqual(first.status_code, status.HTTP_200_OK)
        self.assertEqual(second.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(second.data["error"], "insufficient_stock")
        self.assertEqual(Order.objects.get(pk=second_id).status, Order.STATUS_PENDING)
        self.listing.refresh_from_db()
        self.assertEqual(self.listing.stock, 1)

    def test_checkout_requires_login(self):
        anonymous = APIClient()
        response = anonymous.post(self.create_order_url, {}, format="json")
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

    @override_settings(PAYMENT_PROVIDER="razorpay")
    def test_gateway_checkout_and_verification(self):
        self.add_to_cart(self.listing, 1)
        with patch.object(GatewayProvider, "_create_order_api", return_value={"id": "order_live42"}):
            created = self.checkout()

        self.assertEqual(created.data["razorpayOrderId"], "order_live42")
        self.assertEqual(created.data["key"], "rzp_test_key")

        response = self.client.post(
            self.verify_payment_url,
            {
                "orderId": str(created.data["orderId"]),
                "razorpay_order_id": "order_live42",
                "razorpay_payment_id": "pay_live42",
                "razorpay_signature": compute_signature("test_secret", "order_live42", "pay_live42"),
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["paymentId"], "pay_live42")

    def test_wrong_signature_leaves_order_pending(self):
        order = OrderFactory(user=self.user, payment_mode="gateway", gateway_order_id="order_x1")
        OrderItemFactory(order=order, listing=self.listing)

        response = self.client.post(
            self.verify_payment_url,
            {
                "orderId": str(order.id),
                "razorpay_order_id": "order_x1",
                "razorpay_payment_id": "pay_x1",
                "razorpay_signature": "deadbeef",
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "invalid_signature")
        order.refresh_from_db()
        self.assertEqual(order.status, Order.STATUS_PENDING)

    def test_demo_checkout_on_gateway_order(self):
        order = OrderFactory(user=self.user, payment_mode="gateway", gateway_order_id="order_x2")

        response = self.client.post(self.demo_checkout_url, {"orderId": str(order.id)}, format="json")

        self.assertEqual(response.data["error"], "provider_mismatch")


class OrderViewsIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = UserFactory()
        self.vendor = VendorFactory()
        listing = ListingFactory(vendor=self.vendor)
        self.order = OrderFactory(user=self.user, status=Order.STATUS_PAID, total_amount=Decimal("100.00"))
        OrderItemFactory(order=self.order, listing=listing)
        OrderItemFactory(order=self.order, listing=ListingFactory())
        OrderFactory(user=self.user)

    def test_my_orders(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.get(reverse("marketplace:order-my-orders"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["pagination"]["totalOrders"], 2)

    def test_vendor_orders_show_own_lines(self):
        self.client.force_authenticate(user=self.vendor.user)

        response = self.client.get(reverse("marketplace:order-vendor-orders"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["orders"]), 1)
        self.assertEqual(len(response.data["orders"][0]["items"]), 1)

    def test_customer_cannot_list_vendor_orders(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.get(reverse("marketplace:order-vendor-orders"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_order_detail_hidden_from_strangers(self):
        self.client.force_authenticate(user=UserFactory())

        response = self.client.get(reverse("marketplace:order-detail", args=[self.order.id]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_vendor_ships_order(self):
        self.client.force_authenticate(user=self.vendor.user)

        response = self.client.post(
            reverse("marketplace:order-update-status", args=[self.order.id]), {"status": "shipped"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "shipped")

    def test_customer_cannot_ship(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.post(
            reverse("marketplace:order-update-status", args=[self.order.id]), {"status": "shipped"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["error"], "permission_denied")

    def test_owner_cancels(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.post(reverse("marketplace:order-cancel", args=[self.order.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "cancelled")
