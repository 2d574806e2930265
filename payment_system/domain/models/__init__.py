from .payment import Payment
from .payout import VendorPayout
from .vendor_account import VendorPaymentAccount

__all__ = ["Payment", "VendorPayout", "VendorPaymentAccount"]
