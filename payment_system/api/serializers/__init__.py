from .payment_serializers import PaymentSerializer, VendorPayoutSerializer
from .request_serializers import (
    AccountVerificationRequestSerializer,
    PaymentAccountSetupRequestSerializer,
    PayoutStatusRequestSerializer,
)
from .response_serializers import (
    EarningsSummarySerializer,
    ErrorResponseSerializer,
    OrderPaymentResponseSerializer,
    PaymentAccountResponseSerializer,
    VendorEarningsResponseSerializer,
)

__all__ = [
    "AccountVerificationRequestSerializer",
    "EarningsSummarySerializer",
    "ErrorResponseSerializer",
    "OrderPaymentResponseSerializer",
    "PaymentAccountResponseSerializer",
    "PaymentAccountSetupRequestSerializer",
    "PaymentSerializer",
    "PayoutStatusRequestSerializer",
    "VendorEarningsResponseSerializer",
    "VendorPayoutSerializer",
]
