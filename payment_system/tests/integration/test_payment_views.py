from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from marketplace.models import Order
from marketplace.tests.factories import (
    AdminFactory,
    ListingFactory,
    OrderFactory,
    OrderItemFactory,
    PaymentFactory,
    UserFactory,
    VendorFactory,
    VendorPaymentAccountFactory,
    VendorPayoutFactory,
)
from payment_system.models import VendorPaymentAccount


class OrderPaymentDetailsTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = UserFactory()
        self.order = OrderFactory(user=self.user, status=Order.STATUS_PAID, total_amount=Decimal("200.00"))
        self.vendor = VendorFactory()
        OrderItemFactory(order=self.order, listing=ListingFactory(vendor=self.vendor), quantity=2)
        self.payment = PaymentFactory(order=self.order)
        VendorPayoutFactory(
            payment=self.payment,
            vendor=self.vendor,
            gross_amount=Decimal("200.00"),
            commission=Decimal("2.00"),
            net_amount=Decimal("198.00"),
        )
        self.url = reverse("payment_system:order_payment_details", args=[self.order.id])

    def test_owner_sees_payment_and_payouts(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["orderStatus"], "paid")
        payouts = response.data["payment"]["vendor_payouts"]
        self.assertEqual(len(payouts), 1)
        self.assertEqual(payouts[0]["net_amount"], "198.00")

    def test_other_customer_gets_404(self):
        self.client.force_authenticate(user=UserFactory())

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "order_not_found")

    def test_admin_sees_any_order(self):
        self.client.force_authenticate(user=AdminFactory())

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_order_without_payment(self):
        order = OrderFactory(user=self.user)
        self.client.force_authenticate(user=self.user)

        response = self.client.get(reverse("payment_system:order_payment_details", args=[order.id]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "payment_not_found")

    def test_requires_authentication(self):
        response = self.client.get(self.url)
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))


class VendorPaymentAccountTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.vendor = VendorFactory()
        self.client.force_authenticate(user=self.vendor.user)
        self.payload = {
            "account_holder_name": "Asha Rao",
            "account_number": "123456789012",
            "ifsc_code": "hdfc0001234",
            "bank_name": "HDFC Bank",
            "pan_number": "abcde1234f",
        }

    def test_setup_creates_account(self):
        response = self.client.post(reverse("payment_system:vendor_account_setup"), self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["accountNumber"], "********9012")
        self.assertEqual(response.data["ifscCode"], "HDFC0001234")
        self.assertEqual(response.data["panNumber"], "ABCDE1234F")
        self.assertEqual(response.data["verificationStatus"], "pending")

    def test_changing_bank_details_resets_verification(self):
        account = VendorPaymentAccountFactory(vendor=self.vendor, verification_status="verified")
        self.payload["account_number"] = "999988887777"

        response = self.client.post(reverse("payment_system:vendor_account_setup"), self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        account.refresh_from_db()
        self.assertEqual(account.verification_status, "pending")
        self.assertEqual(account.account_number, "999988887777")

    def test_invalid_account_number(self):
        self.payload["account_number"] = "12AB"

        response = self.client.post(reverse("payment_system:vendor_account_setup"), self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "validation_error")
        self.assertFalse(VendorPaymentAccount.objects.exists())

    def test_details_masks_number(self):
        VendorPaymentAccountFactory(vendor=self.vendor)

        response = self.client.get(reverse("payment_system:vendor_account_details"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["accountNumber"], "********9012")

    def test_details_without_account(self):
        response = self.client.get(reverse("payment_system:vendor_account_details"))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "payment_account_not_found")

    def test_customer_cannot_set_up_account(self):
        self.client.force_authenticate(user=UserFactory())

        response = self.client.post(reverse("payment_system:vendor_account_setup"), self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class VendorEarningsTest(TestCase):
    def test_earnings_summary(self):
        vendor = VendorFactory()
        VendorPayoutFactory(vendor=vendor)
        VendorPayoutFactory(vendor=vendor, status="processed")
        client = APIClient()
        client.force_authenticate(user=vendor.user)

        response = client.get(reverse("payment_system:vendor_earnings"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["summary"]["totalNet"], Decimal("198.00"))
        self.assertEqual(response.data["summary"]["pendingAmount"], Decimal("99.00"))
        self.assertEqual(len(response.data["payouts"]), 2)


class AdminPaymentViewsTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(user=AdminFactory())

    def test_mark_payout_processed(self):
        payout = VendorPayoutFactory()

        response = self.client.post(
            reverse("payment_admin:payout_status", args=[payout.id]), {"status": "processed"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        payout.refresh_from_db()
        self.assertEqual(payout.status, "processed")
        self.assertIsNotNone(payout.processed_at)

    def test_unknown_payout(self):
        response = self.client.post(
            reverse("payment_admin:payout_status", args=["00000000-0000-0000-0000-000000000000"]),
            {"status": "processed"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_verify_payment_account(self):
        account = VendorPaymentAccountFactory()

        response = self.client.post(
            reverse("payment_admin:payment_account_verification", args=[account.id]),
            {"status": "verified", "notes": "Checked cancelled cheque"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["verificationStatus"], "verified")

    def test_non_admin_forbidden(self):
        self.client.force_authenticate(user=VendorFactory().user)
        payout = VendorPayoutFactory()

        response = self.client.post(
            reverse("payment_admin:payout_status", args=[payout.id]), {"status": "processed"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
