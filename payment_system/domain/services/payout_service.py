"""
PayoutService - Vendor Payout Settlement

Persists the per-vendor payouts of confirmed payments, reconciles payments
whose payout computation failed, and reports vendor earnings.
"""

from decimal import Decimal
from typing import Any, Dict, List

from django.conf import settings
from django.db import transaction
from django.db.models import Count, Q, Sum
from django.utils import timezone

from infrastructure.observability.tracing import tracer
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from payment_system.domain.exceptions import PayoutComputationError
from payment_system.domain.services.payout_calculator import compute_payouts, quantize_money
from payment_system.infra.observability.metrics import (
    payout_computation_failures_total,
    payout_volume_total,
    payouts_computed_total,
)
from payment_system.models import Payment, VendorPayout, VendorPaymentAccount

ZERO = Decimal("0.00")


def default_commission_rate() -> Decimal:
    return Decimal(str(settings.MARKETPLACE.get("COMMISSION_RATE", "1.0")))


class PayoutService(BaseService):
    """
    Service for vendor payouts.

    Responsibilities:
    - Write payout rows for a payment (idempotent per payment)
    - Reconcile payments whose payout computation failed
    - Admin payout status changes
    - Vendor earnings summary
    """

    PAYOUT_STATUSES = ("processed", "failed")

    def __init__(self, cache_invalidator=None):
        super().__init__()
        self.cache_invalidator = cache_invalidator

    def record_payouts(self, payment: Payment) -> List[VendorPayout]:
        """
        Compute and persist payouts for a confirmed payment.

        Must run inside a transaction. Returns the existing rows when the
        payment already has payouts.

        Raises:
            PayoutComputationError: If the payouts cannot be computed or written
        """
        with tracer.start_as_current_span("compute_vendor_payouts") as span:
            span.set_attribute("payment.id", str(payment.id))

            existing = list(payment.vendor_payouts.all())
            if existing:
                return existing

            lines = list(payment.order.items.all())
            try:
                entries = compute_payouts(lines, payment.commission_rate)
                payouts = [
                    VendorPayout.objects.create(
                        payment=payment,
                        vendor_id=entry.vendor_id,
                        gross_amount=entry.gross_amount,
                        commission=entry.commission,
                        net_amount=entry.net_amount,
                        status=entry.status,
                    )
                    for entry in entries
                ]
            except Exception as e:
                raise PayoutComputationError(f"Payout computation failed for payment {payment.id}: {e}") from e

            payment.payout_status = "computed"
            payment.payout_error = ""
            payment.save(update_fields=["payout_status", "payout_error", "updated_at"])

            span.set_attribute("payouts.count", len(payouts))
            payouts_computed_total.inc(len(payouts))
            for payout in payouts:
                payout_volume_total.labels(currency=payment.currency, status="pending").inc(float(payout.net_amount))

            self.logger.info(f"Recorded {len(payouts)} vendor payouts for payment {payment.id}")
            return payouts

    def mark_failed(self, payment: Payment, error: Exception) -> None:
        """Flag a payment whose payout computation failed so the reconciler picks it up."""
        payout_computation_failures_total.inc()
        Payment.objects.filter(pk=payment.pk).update(
            payout_status="failed", payout_error=str(error)[:1000], updated_at=timezone.now()
        )
        payment.payout_status = "failed"
        self.logger.error(f"Payout computation failed for payment {payment.id}: {error}")

    @BaseService.log_performance
    def reconcile(self, payment_id) -> ServiceResult[List[VendorPayout]]:
        """
        Recompute payouts for a payment flagged as failed.

        No-op when payouts already exist. Unexpected errors propagate so the
        calling task can retry.
        """
        with transaction.atomic():
            try:
                payment = Payment.objects.select_for_update().select_related("order").get(pk=payment_id)
            except Payment.DoesNotExist:
                return service_err(ErrorCodes.PAYMENT_NOT_FOUND, f"Payment {payment_id} not found")

            payouts = self.record_payouts(payment)

        self._invalidate_vendors(payouts)
        return service_ok(payouts)

    def failed_payment_ids(self) -> List:
        return list(Payment.objects.filter(payout_status="failed").values_list("id", flat=True))

    @BaseService.log_performance
    def update_status(self, payout_id, status: str) -> ServiceResult[VendorPayout]:
        """Admin: mark a payout processed or failed. Amounts never change."""
        if status not in self.PAYOUT_STATUSES:
            return service_err(
                ErrorCodes.VALIDATION_ERROR, f"Status must be one of: {', '.join(self.PAYOUT_STATUSES)}"
            )

        try:
            payout = VendorPayout.objects.select_related("payment", "vendor").get(pk=payout_id)
        except VendorPayout.DoesNotExist:
            return service_err(ErrorCodes.PAYOUT_NOT_FOUND, "Payout not found")

        payout.status = status
        payout.processed_at = timezone.now() if status == "processed" else None
        payout.save(update_fields=["status", "processed_at"])

        payout_volume_total.labels(currency=payout.payment.currency, status=status).inc(float(payout.net_amount))
        self._invalidate_vendors([payout])
        self.logger.info(f"Payout {payout.id} marked {status}")
        return service_ok(payout)

    @BaseService.log_performance
    def vendor_earnings(self, vendor) -> ServiceResult[Dict[str, Any]]:
        payouts = VendorPayout.objects.filter(vendor=vendor).select_related("payment")
        totals = payouts.aggregate(
            total_gross=Sum("gross_amount"),
            total_commission=Sum("commission"),
            total_net=Sum("net_amount"),
            pending=Sum("net_amount", filter=Q(status="pending")),
            processed=Sum("net_amount", filter=Q(status="processed")),
            payout_count=Count("id"),
        )

        account = VendorPaymentAccount.objects.filter(vendor=vendor).first()
        commission_rate = account.commission_rate if account else default_commission_rate()

        return service_ok(
            {
                "summary": {
                    "totalGross": quantize_money(totals["total_gross"] or ZERO),
                    "totalCommission": quantize_money(totals["total_commission"] or ZERO),
                    "totalNet": quantize_money(totals["total_net"] or ZERO),
                    "pendingAmount": quantize_money(totals["pending"] or ZERO),
                    "processedAmount": quantize_money(totals["processed"] or ZERO),
                    "payoutCount": totals["payout_count"],
                    "commissionRate": commission_rate,
                },
                "payouts": list(payouts.order_by("-created_at")[:50]),
            }
        )

    def _invalidate_vendors(self, payouts) -> None:
        if not self.cache_invalidator:
            return
        user_ids = {payout.vendor.user_id for payout in payouts}
        self.cache_invalidator.users(user_ids)
