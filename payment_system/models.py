from .domain.models.payment import Payment
from .domain.models.payout import VendorPayout
from .domain.models.vendor_account import VendorPaymentAccount


__all__ = [
    "Payment",
    "VendorPayout",
    "VendorPaymentAccount",
]
