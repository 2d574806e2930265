"""
Demo Payment Provider
======================

Simulated payments for environments without gateway credentials. The order id
is generated locally and the payment is confirmed by an explicit call from the
session that owns the order.

Ids look like ``demo_<ms>_<hex>``: the millisecond timestamp keeps them readable
and sortable, the random suffix keeps them unique across worker processes.
"""

import logging
import time
import uuid
from decimal import Decimal
from typing import Any, Dict, Optional

from .interface import GatewayOrder, PaymentConfirmation, PaymentMode, PaymentProviderInterface, to_minor_units

logger = logging.getLogger(__name__)


def generate_demo_id(prefix: str) -> str:
    return f"{prefix}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:12]}"


class DemoProvider(PaymentProviderInterface):
    mode = PaymentMode.DEMO

    def is_available(self) -> bool:
        return True

    def create_order(
        self,
        amount: Decimal,
        currency: str,
        receipt: str,
        notes: Optional[Dict[str, Any]] = None,
    ) -> GatewayOrder:
        order_id = generate_demo_id("demo")
        logger.info(f"Opened demo payment order {order_id} for receipt {receipt}")
        return GatewayOrder(
            order_id=order_id,
            amount=to_minor_units(amount),
            currency=currency,
            mode=self.mode,
            receipt=receipt,
            notes=notes or {},
        )

    def verify_payment(self, gateway_order_id: str, payload: Dict[str, Any]) -> PaymentConfirmation:
        # Ownership of the order is checked by the caller; the call itself is the confirmation.
        return PaymentConfirmation(
            payment_id=generate_demo_id("demo_payment"),
            gateway_order_id=gateway_order_id,
            mode=self.mode,
        )
