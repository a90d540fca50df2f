"""
Helpers for constructing the JSON bodies sent to the gateway.
"""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from typing import Any, Dict, Union

from .models import Amount, AmountDetails, PaymentIntent, Transaction

__all__ = [
    "Number",
    "build_amount",
    "build_execute_body",
    "build_payment_intent",
    "format_money",
    "to_decimal",
]

Number = Union[Decimal, str, float, int]

_CENT = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    # floats keep their exact binary value, as printf("%.2f") sees it
    try:
        result = Decimal(value)
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"Not a monetary value: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"Not a monetary value: {value!r}")
    return result


def format_money(value: Number) -> str:
    """
    Format ``value`` as the gateway's fixed two-decimal amount string.

    Rounds half to even on the exact value, so the float ``2.675`` (stored
    as 2.67499...) gives ``"2.67"``.
    """
    amount = to_decimal(value)
    try:
        return str(amount.quantize(_CENT, rounding=ROUND_HALF_EVEN))
    except InvalidOperation as exc:
        raise ValueError(f"Not a monetary value: {value!r}") from exc


def build_amount(subtotal: Number, tax: Number, shipping: Number, currency: str) -> Amount:
    """
    Build the amount breakdown.

    The total is summed once from the unrounded inputs and only then
    formatted, so it never accumulates the rounding of its parts.
    """
    subtotal_d, tax_d, shipping_d = to_decimal(subtotal), to_decimal(tax), to_decimal(shipping)
    total = subtotal_d + tax_d + shipping_d
    return Amount(
        total=format_money(total),
        currency=currency,
        details=AmountDetails(
            subtotal=format_money(subtotal_d),
            tax=format_money(tax_d),
            shipping=format_money(shipping_d),
        ),
    )


def build_payment_intent(
    subtotal: Number,
    tax: Number,
    shipping: Number,
    currency: str,
    description: str,
    return_url: str,
    cancel_url: str,
) -> PaymentIntent:
    return PaymentIntent(
        return_url=return_url,
        cancel_url=cancel_url,
        transactions=(
            Transaction(
                amount=build_amount(subtotal, tax, shipping, currency),
                description=description,
            ),
        ),
    )


def build_execute_body(payer_id: str) -> Dict[str, Any]:
    return {"payer_id": payer_id}
