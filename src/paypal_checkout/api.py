"""
Public, high-level helpers for running a PayPal checkout.
"""

from __future__ import annotations

import threading
from typing import Mapping, Optional

import requests

from .core.client import GatewayClient
from .core.config import GatewayConfig, GatewayParameters, load_gateway_config
from .core.flow import (
    ApprovalHandle,
    AwaitingApproval,
    AwaitingExecution,
    AwaitingPayment,
    AwaitingToken,
    Completed,
    PaymentOrder,
)
from .core.models import AccessToken

__all__ = ["begin_checkout", "complete_checkout", "create_gateway_client"]


def create_gateway_client(
    *,
    config: Optional[GatewayConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[GatewayParameters] = None,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    api_url: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
    return_url: Optional[str] = None,
    cancel_url: Optional[str] = None,
    currency: Optional[str] = None,
    accept_language: Optional[str] = None,
) -> GatewayClient:
    """
    Construct a :class:`GatewayClient`.

    Callers can either supply a ready-made :class:`GatewayConfig` or let the
    helper assemble one from environment data.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            parameters,
            client_id,
            client_secret,
            api_url,
            timeout_seconds,
            return_url,
            cancel_url,
            currency,
            accept_language,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built GatewayConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_gateway_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            parameters=parameters,
            client_id=client_id,
            client_secret=client_secret,
            api_url=api_url,
            timeout_seconds=timeout_seconds,
            return_url=return_url,
            cancel_url=cancel_url,
            currency=currency,
            accept_language=accept_language,
        )
    return GatewayClient(cfg, session=session)


def begin_checkout(
    client: GatewayClient,
    order: PaymentOrder,
    *,
    token: Optional[AccessToken] = None,
    timeout: Optional[float] = None,
    cancel: Optional[threading.Event] = None,
) -> AwaitingApproval:
    """
    Authenticate (unless ``token`` is given) and create the payment.

    Redirect the payer to ``.approval_url`` and keep ``.handle`` with the
    checkout until the return callback arrives.
    """
    if token is None:
        awaiting_payment = AwaitingToken().acquire_token(client, timeout=timeout, cancel=cancel)
    else:
        awaiting_payment = AwaitingPayment(token=token)
    return awaiting_payment.begin_approval(client, order, timeout=timeout, cancel=cancel)


def complete_checkout(
    client: GatewayClient,
    token: AccessToken,
    handle: ApprovalHandle,
    payer_id: str,
    *,
    timeout: Optional[float] = None,
    cancel: Optional[threading.Event] = None,
) -> Completed:
    """
    Execute the approved payment and verify its sale completed.

    Raises :class:`~paypal_checkout.core.errors.VerificationError` when the
    sale ends up in any state but ``completed``.
    """
    executed = AwaitingExecution(token=token, handle=handle, payer_id=payer_id).execute(
        client, timeout=timeout, cancel=cancel
    )
    return executed.verify(client, timeout=timeout, cancel=cancel)
