# barberqueue/payments.py

"""
Payment gate: turns a verified Razorpay payment into exactly one queue join.

Signatures are checked locally against the key secret. Nothing reaches the
queue unless the signature matches.
"""

import hashlib
import hmac
import logging
import time

import razorpay
from sqlalchemy.exc import SQLAlchemyError

from .config import RAZORPAY_KEY_ID, RAZORPAY_KEY_SECRET, PAYMENT_CURRENCY
from .errors import (
    InvalidSignature,
    PaymentCapturedJoinFailed,
    PaymentError,
    QueueAppError,
    ValidationFailed,
)

logger = logging.getLogger(__name__)


class RazorpayOrderClient:
    """Thin adapter over the Razorpay SDK order API."""

    def __init__(self, key_id: str = RAZORPAY_KEY_ID, key_secret: str = RAZORPAY_KEY_SECRET):
        self.client = None
        if not key_id or not key_secret:
            logger.warning("Razorpay keys are not configured; payment endpoints will fail")
        else:
            self.client = razorpay.Client(auth=(key_id, key_secret))

    def is_available(self) -> bool:
        return self.client is not None

    def create_order(self, amount: int, currency: str) -> dict:
        if self.client is None:
            raise PaymentError("Payment gateway not configured (missing keys)")
        try:
            return self.client.order.create(
                data={
                    "amount": amount,
                    "currency": currency,
                    "receipt": f"receipt_{int(time.time() * 1000)}",
                    "payment_capture": 1,
                }
            )
        except Exception as e:
            logger.error("Razorpay order creation failed: %s", e)
            raise PaymentError("Failed to create order") from e


def compute_signature(secret: str, order_id: str, payment_id: str) -> str:
    """Hex HMAC-SHA256 of ``order_id|payment_id``."""
    payload = f"{order_id}|{payment_id}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()


def verify_signature(secret: str, order_id: str, payment_id: str, signature: str) -> bool:
    if not secret or not order_id or not payment_id or not signature:
        return False
    expected = compute_signature(secret, order_id, payment_id)
    return hmac.compare_digest(expected, signature)


class PaymentGate:
    def __init__(self, order_client, queue_manager, key_secret: str = RAZORPAY_KEY_SECRET, currency: str = PAYMENT_CURRENCY):
        self.order_client = order_client
        self.queue_manager = queue_manager
        self.key_secret = key_secret
        self.currency = currency

    def create_order(self, amount_in_smallest_unit: int) -> dict:
        if amount_in_smallest_unit <= 0:
            raise ValidationFailed("Invalid 'amount' value")
        order = self.order_client.create_order(amount_in_smallest_unit, self.currency)
        logger.info("Created order %s for %s %s", order.get("id"), order.get("amount"), order.get("currency"))
        return {"id": order["id"], "amount": order["amount"], "currency": order["currency"]}

    def verify_and_join(self, order_id, payment_id, signature, barber_id, user_id, service) -> dict:
        """
        Check the payment signature, then join the queue once.

        Raises:
            PaymentError: no key secret configured
            InvalidSignature: signature does not match, queue untouched
            PaymentCapturedJoinFailed: signature matched but the join failed
        """
        if not self.key_secret:
            raise PaymentError("Payment verification not configured (missing secret)")

        if not verify_signature(self.key_secret, order_id, payment_id, signature):
            logger.warning("Rejected payment signature for order %s (user %s)", order_id, user_id)
            raise InvalidSignature()

        try:
            slot = self.queue_manager.join_queue(barber_id, user_id, service)
        except (QueueAppError, SQLAlchemyError) as exc:
            logger.error(
                "Payment captured but queue join failed: order=%s payment=%s barber=%s user=%s error=%s",
                order_id,
                payment_id,
                barber_id,
                user_id,
                exc,
            )
            raise PaymentCapturedJoinFailed() from exc

        logger.info("Payment %s verified, user %s joined barber %s", payment_id, user_id, barber_id)
        return slot
