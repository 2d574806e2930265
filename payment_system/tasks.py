"""
Celery Tasks for Payment System

Payout reconciliation for payments whose payout computation failed during
confirmation.
"""

import logging

from celery import shared_task

from payment_system.domain.exceptions import PayoutComputationError


logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    name="payment_system.tasks.reconcile_payouts_task",
    autoretry_for=(PayoutComputationError,),
    retry_backoff=True,
    retry_backoff_max=600,
    max_retries=5,
)
def reconcile_payouts_task(self, payment_id):
    """
    Recompute and persist payouts for one payment.

    Idempotent: a payment that already has payouts is left as is.
    """
    from infrastructure.container import container

    logger.info(f"Reconciling payouts for payment {payment_id} (attempt {self.request.retries + 1})")
    result = container.payout_service().reconcile(payment_id)

    if not result.ok:
        logger.error(f"Payout reconciliation for payment {payment_id} failed: {result.error_detail}")
        return {"payment_id": str(payment_id), "status": result.error}

    return {"payment_id": str(payment_id), "status": "computed", "payouts": len(result.value)}


@shared_task(name="payment_system.tasks.reconcile_failed_payouts_task")
def reconcile_failed_payouts_task():
    """Periodic sweep: queue reconciliation for every payment flagged payout_status=failed."""
    from infrastructure.container import container

    payment_ids = container.payout_service().failed_payment_ids()
    for payment_id in payment_ids:
        reconcile_payouts_task.delay(str(payment_id))

    if payment_ids:
        logger.info(f"Queued payout reconciliation for {len(payment_ids)} payments")
    return f"Queued {len(payment_ids)} payments"
