from decimal import Decimal
from io import StringIO
from unittest.mock import patch

from django.core.management import call_command
from django.test import TestCase

from marketplace.models import Order
from marketplace.tests.factories import ListingFactory, OrderFactory, OrderItemFactory, PaymentFactory
from payment_system.models import Payment, VendorPayout
from payment_system.tasks import reconcile_failed_payouts_task, reconcile_payouts_task


class ReconcilePayoutsTaskTest(TestCase):
    def setUp(self):
        self.order = OrderFactory(status=Order.STATUS_PAID, total_amount=Decimal("300.00"))
        OrderItemFactory(order=self.order, listing=ListingFactory(price=Decimal("100.00")), quantity=3)
        self.payment = PaymentFactory(order=self.order, payout_status="failed", payout_error="db hiccup")

    def test_reconcile_writes_payouts(self):
        outcome = reconcile_payouts_task(str(self.payment.id))

        self.assertEqual(outcome["status"], "computed")
        self.assertEqual(outcome["payouts"], 1)
        payout = VendorPayout.objects.get(payment=self.payment)
        self.assertEqual(payout.gross_amount, Decimal("300.00"))
        self.assertEqual(payout.commission, Decimal("3.00"))
        self.assertEqual(payout.net_amount, Decimal("297.00"))

    def test_reconcile_twice_keeps_one_set(self):
        reconcile_payouts_task(str(self.payment.id))
        reconcile_payouts_task(str(self.payment.id))

        self.assertEqual(VendorPayout.objects.filter(payment=self.payment).count(), 1)

    def test_reconcile_missing_payment(self):
        outcome = reconcile_payouts_task("00000000-0000-0000-0000-000000000000")
        self.assertEqual(outcome["status"], "payment_not_found")

    @patch("payment_system.tasks.reconcile_payouts_task.delay")
    def test_sweep_queues_failed_payments(self, mock_delay):
        PaymentFactory(payout_status="computed")

        message = reconcile_failed_payouts_task()

        mock_delay.assert_called_once_with(str(self.payment.id))
        self.assertEqual(message, "Queued 1 payments")

    def test_sweep_runs_eagerly(self):
        reconcile_failed_payouts_task()

        self.payment.refresh_from_db()
        self.assertEqual(self.payment.payout_status, "computed")
        self.assertFalse(Payment.objects.filter(payout_status="failed").exists())


class ReconcilePayoutsCommandTest(TestCase):
    def setUp(self):
        self.order = OrderFactory(status=Order.STATUS_PAID, total_amount=Decimal("100.00"))
        OrderItemFactory(order=self.order, listing=ListingFactory(price=Decimal("100.00")))
        self.payment = PaymentFactory(order=self.order, payout_status="failed")

    def test_reconciles_failed_payments(self):
        out = StringIO()

        call_command("reconcile_payouts", stdout=out)

        self.assertIn("Reconciled 1 payments, 0 errors.", out.getvalue())
        self.payment.refresh_from_db()
        self.assertEqual(self.payment.payout_status, "computed")

    def test_reports_unknown_payment(self):
        out = StringIO()

        call_command("reconcile_payouts", payment=["00000000-0000-0000-0000-000000000000"], stdout=out)

        self.assertIn("0 payments, 1 errors", out.getvalue())

    def test_nothing_to_do(self):
        self.payment.payout_status = "computed"
        self.payment.save()
        out = StringIO()

        call_command("reconcile_payouts", stdout=out)

        self.assertIn("No payments need payout reconciliation.", out.getvalue())
