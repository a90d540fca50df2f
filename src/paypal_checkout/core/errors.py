"""
Exception types raised by the checkout helpers.

Every failure reaching the caller is a :class:`GatewayError` subclass carrying
enough context (status code, raw body, offending state) to be matched against
the gateway's own error payloads.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "GatewayError",
    "TransportError",
    "DecodeError",
    "HTTPStatusError",
    "AuthError",
    "CreationError",
    "ExecutionError",
    "SaleLookupError",
    "LinkNotFoundError",
    "VerificationError",
    "ReturnQueryError",
]


class GatewayError(Exception):
    """Base class for checkout failures."""


class TransportError(GatewayError):
    """The request could not be completed (connection, timeout, cancellation).

    Safe to retry for every call except execute: a timed-out execute may
    already have charged the payer, so look the payment up before retrying.
    """


class DecodeError(GatewayError):
    """A response body does not have the expected shape."""


class HTTPStatusError(GatewayError):
    """The gateway answered with a status the operation does not accept."""

    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"{self.describe()} ({status_code}): {body}")

    def describe(self) -> str:
        return "Gateway responded with an unexpected status"


class AuthError(HTTPStatusError):
    def describe(self) -> str:
        return "Token request rejected"


class CreationError(HTTPStatusError):
    def describe(self) -> str:
        return "Payment creation rejected"


class ExecutionError(HTTPStatusError):
    """Execute was rejected.

    Retrying is unsafe unless the gateway guarantees idempotent execution for
    the payment id.
    """

    def describe(self) -> str:
        return "Payment execution rejected"


class SaleLookupError(HTTPStatusError):
    def describe(self) -> str:
        return "Sale lookup rejected"


class LinkNotFoundError(GatewayError):
    def __init__(self, rel: str, payment_id: Optional[str] = None) -> None:
        self.rel = rel
        self.payment_id = payment_id
        super().__init__(f"No '{rel}' link on payment {payment_id or '<unknown>'}")


class VerificationError(GatewayError):
    """The sale did not reach the ``completed`` state."""

    def __init__(self, actual_state: str, sale_id: Optional[str] = None) -> None:
        self.actual_state = actual_state
        self.sale_id = sale_id
        super().__init__(
            f"Sale {sale_id or '<unknown>'} is not completed (state: {actual_state!r})"
        )


class ReturnQueryError(ValueError):
    """The return callback did not carry the parameters needed to resume."""
