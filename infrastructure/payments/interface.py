"""
Payment Provider Interface
===========================

Abstract base class defining the contract for checkout payments.

Two variants exist: ``GatewayProvider`` (Razorpay) and ``DemoProvider``. The
variant is chosen once when an order is created and its ``mode`` is recorded on
the order, so confirmation dispatches to the same variant later.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Dict, Optional


class PaymentMode(str, Enum):
    """Payment mode recorded on an order."""

    GATEWAY = "gateway"
    DEMO = "demo"


@dataclass
class GatewayOrder:
    """
    Represents a payment order opened for a checkout.

    Attributes:
        order_id: Gateway order id, or a locally generated id in demo mode
        amount: Amount in the smallest currency unit (paise)
        currency: ISO currency code (e.g., 'INR')
        mode: Which provider variant opened it
        receipt: Merchant receipt reference
        key_id: Public key the client needs to open the gateway checkout
    """

    order_id: str
    amount: int
    currency: str
    mode: PaymentMode
    receipt: str
    key_id: Optional[str] = None
    notes: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PaymentConfirmation:
    """
    Proof that a payment for a gateway order succeeded.

    Attributes:
        payment_id: Gateway payment id (or generated demo payment id)
        gateway_order_id: Gateway order the payment settles
        signature: Client supplied signature, empty in demo mode
        mode: Which provider variant confirmed it
    """

    payment_id: str
    gateway_order_id: str
    mode: PaymentMode
    signature: str = ""


def to_minor_units(amount: Decimal) -> int:
    """Convert a major-unit Decimal amount (rupees) to minor units (paise)."""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class PaymentProviderInterface(ABC):
    """
    Abstract interface for payment provider operations.

    Concrete implementations:
        - GatewayProvider: Razorpay orders with HMAC signature verification
        - DemoProvider: simulated payments confirmed by the owning session
    """

    mode: PaymentMode

    @abstractmethod
    def is_available(self) -> bool:
        """Return True when the provider can open orders with the current configuration."""
        pass

    @abstractmethod
    def create_order(
        self,
        amount: Decimal,
        currency: str,
        receipt: str,
        notes: Optional[Dict[str, Any]] = None,
    ) -> GatewayOrder:
        """
        Open a payment order.

        Args:
            amount: Payment amount in major currency unit
            currency: ISO currency code
            receipt: Merchant receipt reference
            notes: Custom data to attach to the order

        Returns:
            GatewayOrder with the provider's order id

        Raises:
            GatewayUnavailableError: If the provider cannot be reached or rejects the call
        """
        pass

    @abstractmethod
    def verify_payment(self, gateway_order_id: str, payload: Dict[str, Any]) -> PaymentConfirmation:
        """
        Verify client-supplied payment proof for a previously opened order.

        Args:
            gateway_order_id: Order id recorded when the order was opened
            payload: Client data (payment id, signature, ...)

        Returns:
            PaymentConfirmation

        Raises:
            PaymentVerificationError: If the proof does not authenticate the payment
        """
        pass


class PaymentException(Exception):
    """Base exception for payment operations."""

    pass


class GatewayUnavailableError(PaymentException):
    """The gateway is unconfigured, unreachable or refused the request."""

    pass


class PaymentVerificationError(PaymentException):
    """Payment proof could not be verified."""

    pass
