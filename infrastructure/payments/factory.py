"""
Payment Provider Factory
=========================

Factory for creating payment provider instances by payment mode.
"""

import logging

from .demo_provider import DemoProvider
from .interface import PaymentMode, PaymentProviderInterface
from .razorpay_provider import GatewayProvider

logger = logging.getLogger(__name__)


class PaymentFactory:
    """
    Factory for creating payment provider instances.

    Usage:
        provider = PaymentFactory.create(PaymentMode.GATEWAY)
        providers = PaymentFactory.create_all()
    """

    @staticmethod
    def create(mode: PaymentMode | str) -> PaymentProviderInterface:
        """
        Create a payment provider instance.

        Raises:
            ValueError: If mode is not a known payment mode
        """
        mode = PaymentMode(mode)
        logger.debug(f"Creating payment provider for mode: {mode.value}")

        if mode == PaymentMode.GATEWAY:
            return GatewayProvider()
        return DemoProvider()

    @staticmethod
    def create_all() -> dict:
        """Providers keyed by mode, as consumed by OrderService."""
        return {mode: PaymentFactory.create(mode) for mode in PaymentMode}
