from .payment_service import PaymentService
from .payout_calculator import PayoutEntry, compute_payouts, quantize_money
from .payout_service import PayoutService

__all__ = ["PaymentService", "PayoutEntry", "PayoutService", "compute_payouts", "quantize_money"]
