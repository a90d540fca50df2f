"""
Per-checkout flow values.

A checkout moves through

    AwaitingToken -> AwaitingPayment -> AwaitingApproval
        -> (payer approves on the gateway) -> AwaitingExecution
        -> Executed -> Completed

Each state is an immutable value exposing only the call that leads to the
next one, so calls cannot be issued out of order. A failed call raises and
leaves the caller holding the previous state; restart from
:class:`AwaitingPayment` (tokens can be reused until they expire).

The payer's round trip through the approval page is not modelled as a call:
:func:`begin_approval` returns an :class:`ApprovalHandle` the hosting
application keeps for that checkout, and :func:`resume_after_approval` picks
the flow up again once the return callback delivers the payer id.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple, Union
from urllib.parse import parse_qs

from .client import GatewayClient
from .errors import DecodeError, ReturnQueryError
from .models import AccessToken, PaymentRecord, Sale
from .payloads import Number

__all__ = [
    "ApprovalHandle",
    "AwaitingApproval",
    "AwaitingExecution",
    "AwaitingPayment",
    "AwaitingToken",
    "Completed",
    "Executed",
    "CheckoutState",
    "PaymentOrder",
    "begin_approval",
    "parse_return_query",
    "resume_after_approval",
]


@dataclass(frozen=True)
class PaymentOrder:
    subtotal: Number
    tax: Number
    shipping: Number
    currency: Optional[str] = None
    description: str = ""
    return_url: Optional[str] = None
    cancel_url: Optional[str] = None


@dataclass(frozen=True)
class ApprovalHandle:
    """Everything needed to resume a checkout after the payer returns."""

    payment_id: str


def begin_approval(
    client: GatewayClient,
    token: AccessToken,
    order: PaymentOrder,
    *,
    timeout: Optional[float] = None,
    cancel: Optional[threading.Event] = None,
) -> Tuple[ApprovalHandle, str]:
    """
    Create the payment and return its handle plus the approval URL the
    payer's browser must be sent to.
    """
    record = client.create_payment(
        token,
        order.subtotal,
        order.tax,
        order.shipping,
        order.currency,
        order.description,
        order.return_url,
        order.cancel_url,
        timeout=timeout,
        cancel=cancel,
    )
    approval_url = client.resolve_approval_url(record)
    if not record.id:
        raise DecodeError("Created payment carries no id")
    return ApprovalHandle(payment_id=record.id), approval_url


def resume_after_approval(
    client: GatewayClient,
    token: AccessToken,
    handle: ApprovalHandle,
    payer_id: str,
    *,
    timeout: Optional[float] = None,
    cancel: Optional[threading.Event] = None,
) -> PaymentRecord:
    """Execute the approved payment. Not safe to retry, see ``execute_payment``."""
    return client.execute_payment(
        token, handle.payment_id, payer_id, timeout=timeout, cancel=cancel
    )


def parse_return_query(
    query: Union[str, Mapping[str, object]],
) -> Tuple[ApprovalHandle, str]:
    """
    Extract the payment id and payer id from the return callback.

    ``query`` is either the raw query string (``paymentId=...&PayerID=...``)
    or an already-parsed mapping whose values are strings or lists of strings.
    """
    params = parse_qs(query.lstrip("?")) if isinstance(query, str) else query

    def _single(name: str) -> str:
        value = params.get(name)
        if isinstance(value, (list, tuple)):
            value = value[0] if value else None
        if not isinstance(value, str) or not value:
            raise ReturnQueryError(f"Return callback is missing '{name}'")
        return value

    return ApprovalHandle(payment_id=_single("paymentId")), _single("PayerID")


@dataclass(frozen=True)
class Completed:
    payment: PaymentRecord
    sale: Sale


@dataclass(frozen=True)
class Executed:
    token: AccessToken
    payment: PaymentRecord

    @property
    def sale_id(self) -> str:
        for sale in self.payment.related_sales:
            if sale.id:
                return sale.id
        raise DecodeError(f"Executed payment {self.payment.id} carries no sale")

    def verify(
        self,
        client: GatewayClient,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> Completed:
        sale = client.lookup_sale(self.token, self.sale_id, timeout=timeout, cancel=cancel)
        return Completed(payment=self.payment, sale=client.verify_completed(sale))


@dataclass(frozen=True)
class AwaitingExecution:
    token: AccessToken
    handle: ApprovalHandle
    payer_id: str

    def execute(
        self,
        client: GatewayClient,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> Executed:
        payment = resume_after_approval(
            client, self.token, self.handle, self.payer_id, timeout=timeout, cancel=cancel
        )
        return Executed(token=self.token, payment=payment)


@dataclass(frozen=True)
class AwaitingApproval:
    token: AccessToken
    handle: ApprovalHandle
    approval_url: str

    def approve(self, payer_id: str) -> AwaitingExecution:
        if not payer_id:
            raise ValueError("payer_id must not be empty")
        return AwaitingExecution(token=self.token, handle=self.handle, payer_id=payer_id)


@dataclass(frozen=True)
class AwaitingPayment:
    token: AccessToken

    def begin_approval(
        self,
        client: GatewayClient,
        order: PaymentOrder,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> AwaitingApproval:
        handle, approval_url = begin_approval(
            client, self.token, order, timeout=timeout, cancel=cancel
        )
        return AwaitingApproval(token=self.token, handle=handle, approval_url=approval_url)


@dataclass(frozen=True)
class AwaitingToken:
    def acquire_token(
        self,
        client: GatewayClient,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> AwaitingPayment:
        return AwaitingPayment(token=client.acquire_token(timeout=timeout, cancel=cancel))


CheckoutState = Union[
    AwaitingToken,
    AwaitingPayment,
    AwaitingApproval,
    AwaitingExecution,
    Executed,
    Completed,
]
