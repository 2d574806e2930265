from decimal import Decimal
from unittest.mock import MagicMock, patch

from django.db import transaction
from django.test import TestCase

from marketplace.models import Order
from marketplace.services import ErrorCodes
from marketplace.tests.factories import (
    ListingFactory,
    OrderFactory,
    OrderItemFactory,
    PaymentFactory,
    VendorFactory,
    VendorPaymentAccountFactory,
    VendorPayoutFactory,
)
from payment_system.domain.exceptions import PayoutComputationError
from payment_system.domain.services import PayoutService
from payment_system.models import Payment, VendorPayout


class PayoutServiceTest(TestCase):
    def setUp(self):
        self.invalidator = MagicMock()
        self.service = PayoutService(cache_invalidator=self.invalidator)

        self.vendor_a = VendorFactory()
        self.vendor_b = VendorFactory()
        self.order = OrderFactory(status=Order.STATUS_PAID, total_amount=Decimal("250.00"))
        OrderItemFactory(
            order=self.order, listing=ListingFactory(vendor=self.vendor_a, price=Decimal("100.00")), quantity=2
        )
        OrderItemFactory(
            order=self.order, listing=ListingFactory(vendor=self.vendor_b, price=Decimal("50.00")), quantity=1
        )
        self.payment = PaymentFactory(order=self.order)

    def test_record_payouts_per_vendor(self):
        with transaction.atomic():
            payouts = self.service.record_payouts(self.payment)

        by_vendor = {payout.vendor_id: payout for payout in payouts}
        self.assertEqual(by_vendor[self.vendor_a.id].gross_amount, Decimal("200.00"))
        self.assertEqual(by_vendor[self.vendor_a.id].commission, Decimal("2.00"))
        self.assertEqual(by_vendor[self.vendor_a.id].net_amount, Decimal("198.00"))
        self.assertEqual(by_vendor[self.vendor_b.id].net_amount, Decimal("49.50"))

        self.payment.refresh_from_db()
        self.assertEqual(self.payment.payout_status, "computed")

    def test_record_payouts_is_idempotent(self):
        with transaction.atomic():
            first = self.service.record_payouts(self.payment)
        with transaction.atomic():
            second = self.service.record_payouts(self.payment)

        self.assertEqual({p.id for p in first}, {p.id for p in second})
        self.assertEqual(VendorPayout.objects.filter(payment=self.payment).count(), 2)

    @patch("payment_system.domain.services.payout_service.compute_payouts")
    def test_computation_error_is_wrapped(self, mock_compute):
        mock_compute.side_effect = ValueError("bad rate")

        with self.assertRaises(PayoutComputationError):
            with transaction.atomic():
                self.service.record_payouts(self.payment)

        self.assertFalse(VendorPayout.objects.filter(payment=self.payment).exists())

    def test_mark_failed(self):
        self.service.mark_failed(self.payment, PayoutComputationError("boom"))

        self.payment.refresh_from_db()
        self.assertEqual(self.payment.payout_status, "failed")
        self.assertIn("boom", self.payment.payout_error)
        self.assertEqual(self.service.failed_payment_ids(), [self.payment.id])

    def test_reconcile_computes_missing_payouts(self):
        Payment.objects.filter(pk=self.payment.pk).update(payout_status="failed", payout_error="boom")

        result = self.service.reconcile(self.payment.id)

        self.assertTrue(result.ok)
        self.assertEqual(len(result.value), 2)
        self.payment.refresh_from_db()
        self.assertEqual(self.payment.payout_status, "computed")
        self.assertEqual(self.payment.payout_error, "")
        self.invalidator.users.assert_called_once()

    def test_reconcile_unknown_payment(self):
        result = self.service.reconcile("00000000-0000-0000-0000-000000000000")

        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorCodes.PAYMENT_NOT_FOUND)

    def test_update_status_processed(self):
        payout = VendorPayoutFactory(payment=self.payment, vendor=self.vendor_a)

        result = self.service.update_status(payout.id, "processed")

        self.assertTrue(result.ok)
        payout.refresh_from_db()
        self.assertEqual(payout.status, "processed")
        self.assertIsNotNone(payout.processed_at)
        self.assertEqual(payout.net_amount, Decimal("99.00"))

    def test_update_status_rejects_pending(self):
        payout = VendorPayoutFactory(payment=self.payment, vendor=self.vendor_a)

        result = self.service.update_status(payout.id, "pending")

        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorCodes.VALIDATION_ERROR)

    def test_update_status_unknown_payout(self):
        result = self.service.update_status("00000000-0000-0000-0000-000000000000", "processed")
        self.assertEqual(result.error, ErrorCodes.PAYOUT_NOT_FOUND)

    def test_vendor_earnings_summary(self):
        VendorPayoutFactory(
            payment=self.payment,
            vendor=self.vendor_a,
            gross_amount=Decimal("200.00"),
            commission=Decimal("2.00"),
            net_amount=Decimal("198.00"),
        )
        VendorPayoutFactory(
            payment=PaymentFactory(),
            vendor=self.vendor_a,
            gross_amount=Decimal("100.00"),
            commission=Decimal("1.00"),
            net_amount=Decimal("99.00"),
            status="processed",
        )
        VendorPaymentAccountFactory(vendor=self.vendor_a, commission_rate=Decimal("1.50"))

        result = self.service.vendor_earnings(self.vendor_a)

        summary = result.value["summary"]
        self.assertEqual(summary["totalGross"], Decimal("300.00"))
        self.assertEqual(summary["totalCommission"], Decimal("3.00"))
        self.assertEqual(summary["totalNet"], Decimal("297.00"))
        self.assertEqual(summary["pendingAmount"], Decimal("198.00"))
        self.assertEqual(summary["processedAmount"], Decimal("99.00"))
        self.assertEqual(summary["payoutCount"], 2)
        self.assertEqual(summary["commissionRate"], Decimal("1.50"))
        self.assertEqual(len(result.value["payouts"]), 2)

    def test_vendor_earnings_without_payouts(self):
        result = self.service.vendor_earnings(self.vendor_b)

        self.assertEqual(result.value["summary"]["totalNet"], Decimal("0.00"))
        self.assertEqual(result.value["summary"]["commissionRate"], Decimal("1.0"))
        self.assertEqual(result.value["payouts"], [])
