"""
Razorpay Payment Provider
==========================

Concrete implementation of PaymentProviderInterface using Razorpay orders and
HMAC-SHA256 checkout signatures.
"""

import hashlib
import hmac
import logging
from decimal import Decimal
from typing import Any, Dict, Optional

import razorpay
import requests
from django.conf import settings
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from .interface import (
    GatewayOrder,
    GatewayUnavailableError,
    PaymentConfirmation,
    PaymentMode,
    PaymentProviderInterface,
    PaymentVerificationError,
    to_minor_units,
)

logger = logging.getLogger(__name__)


def compute_signature(secret: str, gateway_order_id: str, payment_id: str) -> str:
    """Hex HMAC-SHA256 of ``orderId|paymentId`` keyed by the gateway secret."""
    message = f"{gateway_order_id}|{payment_id}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


class GatewayProvider(PaymentProviderInterface):
    """
    Razorpay payment provider implementation.

    Configuration (in settings.py):
        PAYMENT_PROVIDER: must be 'razorpay' for orders to be opened at the gateway
        RAZORPAY_KEY_ID: public key id, also returned to the client
        RAZORPAY_KEY_SECRET: secret used for API auth and signature verification
    """

    mode = PaymentMode.GATEWAY

    def __init__(self, key_id: Optional[str] = None, key_secret: Optional[str] = None, timeout: int = 10):
        self.key_id = key_id if key_id is not None else getattr(settings, "RAZORPAY_KEY_ID", "")
        self.key_secret = key_secret if key_secret is not None else getattr(settings, "RAZORPAY_KEY_SECRET", "")
        self.timeout = timeout
        self._client = None

        if not self.key_id or not self.key_secret:
            logger.warning("Razorpay credentials not configured; checkouts will use demo mode")

    @property
    def client(self) -> razorpay.Client:
        if self._client is None:
            self._client = razorpay.Client(auth=(self.key_id, self.key_secret))
        return self._client

    def is_available(self) -> bool:
        if getattr(settings, "PAYMENT_PROVIDER", "razorpay") != "razorpay":
            return False
        placeholder = getattr(settings, "RAZORPAY_PLACEHOLDER_KEY", "rzp_test_demo_key")
        return bool(self.key_id and self.key_secret and self.key_id != placeholder)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        retry=retry_if_exception_type(
            (
                razorpay.errors.ServerError,
                requests.exceptions.ConnectionError,
                requests.exceptions.Timeout,
            )
        ),
        reraise=True,
    )
    def _create_order_api(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Internal method to create the gateway order with retries."""
        return self.client.order.create(data=payload, timeout=self.timeout)

    def create_order(
        self,
        amount: Decimal,
        currency: str,
        receipt: str,
        notes: Optional[Dict[str, Any]] = None,
    ) -> GatewayOrder:
        if not self.is_available():
            raise GatewayUnavailableError("Razorpay is not configured")

        amount_minor = to_minor_units(amount)
        payload = {
            "amount": amount_minor,
            "currency": currency,
            "receipt": receipt,
            "notes": notes or {},
        }

        try:
            response = self._create_order_api(payload)
        except (razorpay.errors.BadRequestError, razorpay.errors.GatewayError, razorpay.errors.ServerError) as e:
            logger.warning(f"Razorpay rejected order creation for receipt {receipt}: {e}")
            raise GatewayUnavailableError(str(e)) from e
        except requests.exceptions.RequestException as e:
            logger.warning(f"Razorpay unreachable for receipt {receipt}: {e}")
            raise GatewayUnavailableError(str(e)) from e

        logger.info(f"Created Razorpay order {response['id']} for receipt {receipt}")
        return GatewayOrder(
            order_id=response["id"],
            amount=amount_minor,
            currency=currency,
            mode=self.mode,
            receipt=receipt,
            key_id=self.key_id,
            notes=payload["notes"],
        )

    def verify_payment(self, gateway_order_id: str, payload: Dict[str, Any]) -> PaymentConfirmation:
        """
        Check the checkout signature returned to the client by Razorpay.

        Expected payload keys: razorpay_order_id, razorpay_payment_id, razorpay_signature.
        """
        supplied_order_id = payload.get("razorpay_order_id") or ""
        payment_id = payload.get("razorpay_payment_id") or ""
        signature = payload.get("razorpay_signature") or ""

        if not payment_id or not signature:
            raise PaymentVerificationError("Payment id and signature are required")
        if supplied_order_id != gateway_order_id:
            raise PaymentVerificationError("Payment does not belong to this order")
        if not self.key_secret:
            raise PaymentVerificationError("Gateway secret is not configured")

        expected = compute_signature(self.key_secret, gateway_order_id, payment_id)
        if not hmac.compare_digest(expected, signature):
            logger.warning(f"Invalid payment signature for gateway order {gateway_order_id}")
            raise PaymentVerificationError("Invalid payment signature")

        return PaymentConfirmation(
            payment_id=payment_id,
            gateway_order_id=gateway_order_id,
            mode=self.mode,
            signature=signature,
        )
