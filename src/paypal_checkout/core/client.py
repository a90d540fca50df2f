"""
Client facade binding a configuration to a transport.
"""

from __future__ import annotations

import threading
from typing import Optional

import requests

from .config import GatewayConfig
from .models import AccessToken, PaymentRecord, Sale
from .payloads import Number
from .payments import create_payment, execute_payment, resolve_approval_url
from .sales import lookup_sale, verify_completed
from .tokens import acquire_token
from .transport import Transport

__all__ = ["GatewayClient"]


class GatewayClient:
    """
    Thin convenience wrapper around the gateway endpoints.

    The client holds no per-checkout state: tokens, payment ids and payer ids
    are passed in explicitly, so one instance can serve concurrent checkouts.
    """

    def __init__(
        self,
        config: GatewayConfig,
        *,
        session: Optional[requests.Session] = None,
        transport: Optional[Transport] = None,
    ) -> None:
        if transport is not None and session is not None:
            raise ValueError("Provide either a session or a transport, not both.")
        self.config = config
        self.transport = transport or Transport(
            session=session, timeout=config.timeout_seconds
        )

    def acquire_token(
        self,
        *,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> AccessToken:
        return acquire_token(
            self.transport,
            self.config,
            client_id=client_id,
            client_secret=client_secret,
            timeout=timeout,
            cancel=cancel,
        )

    def create_payment(
        self,
        token: AccessToken,
        subtotal: Number,
        tax: Number,
        shipping: Number,
        currency: Optional[str] = None,
        description: str = "",
        return_url: Optional[str] = None,
        cancel_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> PaymentRecord:
        """
        Create a payment; currency and redirect URLs default to the configuration.
        """
        return create_payment(
            self.transport,
            self.config,
            token,
            subtotal,
            tax,
            shipping,
            currency or self.config.currency,
            description,
            return_url or self.config.return_url,
            cancel_url or self.config.cancel_url,
            timeout=timeout,
            cancel=cancel,
        )

    @staticmethod
    def resolve_approval_url(record: PaymentRecord) -> str:
        return resolve_approval_url(record)

    def execute_payment(
        self,
        token: AccessToken,
        payment_id: str,
        payer_id: str,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> PaymentRecord:
        return execute_payment(
            self.transport,
            self.config,
            token,
            payment_id,
            payer_id,
            timeout=timeout,
            cancel=cancel,
        )

    def lookup_sale(
        self,
        token: AccessToken,
        sale_id: str,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> Sale:
        return lookup_sale(
            self.transport, self.config, token, sale_id, timeout=timeout, cancel=cancel
        )

    @staticmethod
    def verify_completed(sale: Sale) -> Sale:
        return verify_completed(sale)

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "GatewayClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
