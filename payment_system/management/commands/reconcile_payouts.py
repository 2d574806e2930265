import logging

from django.core.management.base import BaseCommand

from infrastructure.container import container


logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Recomputes vendor payouts for payments whose payout computation failed."

    def add_arguments(self, parser):
        parser.add_argument(
            "--payment",
            action="append",
            dest="payments",
            default=[],
            help="Reconcile only this payment id (repeatable). Default: every payment flagged failed.",
        )

    def handle(self, *args, **options):
        payout_service = container.payout_service()
        payment_ids = options["payments"] or payout_service.failed_payment_ids()

        if not payment_ids:
            self.stdout.write(self.style.SUCCESS("No payments need payout reconciliation."))
            return

        self.stdout.write(f"Reconciling payouts for {len(payment_ids)} payments.")

        reconciled_count = 0
        error_count = 0
        for payment_id in payment_ids:
            result = payout_service.reconcile(payment_id)
            if result.ok:
                reconciled_count += 1
                self.stdout.write(self.style.SUCCESS(f"  {payment_id}: {len(result.value)} payouts"))
            else:
                error_count += 1
                self.stdout.write(self.style.ERROR(f"  {payment_id}: {result.error_detail}"))

        self.stdout.write(self.style.SUCCESS(f"Reconciled {reconciled_count} payments, {error_count} errors."))
