"""
Payment Service Abstraction Layer
==================================

Unified interface over the Razorpay gateway and the demo payment path.
"""

from .demo_provider import DemoProvider
from .factory import PaymentFactory
from .interface import (
    GatewayOrder,
    GatewayUnavailableError,
    PaymentConfirmation,
    PaymentException,
    PaymentMode,
    PaymentProviderInterface,
    PaymentVerificationError,
    to_minor_units,
)
from .razorpay_provider import GatewayProvider, compute_signature

__all__ = [
    "PaymentProviderInterface",
    "PaymentMode",
    "GatewayOrder",
    "PaymentConfirmation",
    "PaymentException",
    "GatewayUnavailableError",
    "PaymentVerificationError",
    "GatewayProvider",
    "DemoProvider",
    "PaymentFactory",
    "compute_signature",
    "to_minor_units",
]
