"""
Payment creation, approval hand-off and execution.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional
from urllib.parse import quote

from .config import GatewayConfig
from .errors import CreationError, ExecutionError
from .models import AccessToken, PaymentRecord
from .payloads import Number, build_execute_body, build_payment_intent
from .tokens import bearer_headers
from .transport import Transport, decode_json

__all__ = [
    "APPROVAL_REL",
    "PAYMENT_PATH",
    "create_payment",
    "execute_payment",
    "resolve_approval_url",
]

PAYMENT_PATH = "/v1/payments/payment"
APPROVAL_REL = "approval_url"


def create_payment(
    transport: Transport,
    config: GatewayConfig,
    token: AccessToken,
    subtotal: Number,
    tax: Number,
    shipping: Number,
    currency: str,
    description: str,
    return_url: str,
    cancel_url: str,
    *,
    timeout: Optional[float] = None,
    cancel: Optional[threading.Event] = None,
) -> PaymentRecord:
    """
    Create a ``sale`` payment paid through a PayPal account.

    Amount signs and consistency are left for the gateway to validate.
    Anything but ``201 Created`` raises :class:`CreationError` carrying the
    gateway's error document verbatim.
    """
    intent = build_payment_intent(
        subtotal, tax, shipping, currency, description, return_url, cancel_url
    )
    url = config.endpoint(PAYMENT_PATH)
    logging.info(
        "Creating payment of %s %s at %s",
        intent.transactions[0].amount.total,
        currency,
        url,
    )
    response = transport.send(
        "POST",
        url,
        headers=bearer_headers(token),
        json_body=intent.to_dict(),
        timeout=timeout,
        cancel=cancel,
    )
    if response.status_code != 201:
        logging.error("Payment creation rejected with %s", response.status_code)
        raise CreationError(response.status_code, response.body)

    record = PaymentRecord.from_response(decode_json(response, "payment"))
    logging.info("Created payment %s in state %s", record.id, record.state)
    return record


def resolve_approval_url(record: PaymentRecord) -> str:
    """Return the URL the payer must be redirected to in order to approve."""
    return record.find_link(APPROVAL_REL).href


def execute_payment(
    transport: Transport,
    config: GatewayConfig,
    token: AccessToken,
    payment_id: str,
    payer_id: str,
    *,
    timeout: Optional[float] = None,
    cancel: Optional[threading.Event] = None,
) -> PaymentRecord:
    """
    Execute an approved payment; this is the step that charges the payer.

    No deduplication happens here. Calling it again for the same payment is
    only safe if the gateway rejects or deduplicates the second attempt, so a
    :class:`~paypal_checkout.core.errors.TransportError` raised mid-flight
    leaves the outcome unknown until the payment is looked up.
    """
    url = config.endpoint(f"{PAYMENT_PATH}/{quote(payment_id, safe='')}/execute")
    logging.info("Executing payment %s", payment_id)
    response = transport.send(
        "POST",
        url,
        headers=bearer_headers(token),
        json_body=build_execute_body(payer_id),
        timeout=timeout,
        cancel=cancel,
    )
    if not response.ok:
        logging.error("Execution of %s rejected with %s", payment_id, response.status_code)
        raise ExecutionError(response.status_code, response.body)

    record = PaymentRecord.from_response(decode_json(response, "executed payment"))
    logging.info("Payment %s executed, state %s", record.id, record.state)
    return record
