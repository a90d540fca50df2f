"""
Immutable views of the gateway's request and response documents.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import DecodeError, LinkNotFoundError

__all__ = [
    "AccessToken",
    "Amount",
    "AmountDetails",
    "Link",
    "PaymentIntent",
    "PaymentRecord",
    "Sale",
    "Transaction",
]


def _parse_time(value: Any) -> Optional[datetime]:
    if not value:
        return None
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise DecodeError(f"Invalid timestamp {value!r}") from exc


def _objects(payload: Mapping[str, Any], key: str) -> List[Mapping[str, Any]]:
    value = payload.get(key) or []
    if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
        raise DecodeError(f"Expected '{key}' to be a list of objects")
    return value


def _object(payload: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = payload.get(key) or {}
    if not isinstance(value, dict):
        raise DecodeError(f"Expected '{key}' to be an object")
    return value


@dataclass(frozen=True)
class AccessToken:
    access_token: str
    token_type: str
    expires_in: int
    scope: Optional[str] = None
    app_id: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def authorization_header(self) -> str:
        return f"{self.token_type or 'Bearer'} {self.access_token}"

    def __repr__(self) -> str:
        return (
            f"AccessToken(token_type={self.token_type!r}, "
            f"expires_in={self.expires_in!r}, app_id={self.app_id!r})"
        )

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "AccessToken":
        token = payload.get("access_token")
        if not isinstance(token, str) or not token:
            raise DecodeError("Token response carries no access_token")
        try:
            expires_in = int(payload.get("expires_in") or 0)
        except (TypeError, ValueError) as exc:
            raise DecodeError(
                f"Invalid expires_in {payload.get('expires_in')!r}"
            ) from exc
        return cls(
            access_token=token,
            token_type=payload.get("token_type") or "Bearer",
            expires_in=expires_in,
            scope=payload.get("scope"),
            app_id=payload.get("app_id"),
            raw=payload,
        )


@dataclass(frozen=True)
class Link:
    rel: str
    href: str
    method: Optional[str] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Link":
        rel, href = payload.get("rel"), payload.get("href")
        if not isinstance(rel, str) or not isinstance(href, str):
            raise DecodeError(f"Link without rel/href: {dict(payload)!r}")
        return cls(rel=rel, href=href, method=payload.get("method"))


def _links(payload: Mapping[str, Any]) -> Tuple[Link, ...]:
    return tuple(Link.from_response(item) for item in _objects(payload, "links"))


@dataclass(frozen=True)
class AmountDetails:
    subtotal: str
    tax: str
    shipping: str

    def to_dict(self) -> Dict[str, str]:
        return {"subtotal": self.subtotal, "tax": self.tax, "shipping": self.shipping}


@dataclass(frozen=True)
class Amount:
    total: str
    currency: str
    details: Optional[AmountDetails] = None

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"total": self.total, "currency": self.currency}
        if self.details is not None:
            body["details"] = self.details.to_dict()
        return body

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> Optional["Amount"]:
        if not payload:
            return None
        details = payload.get("details") or None
        return cls(
            total=str(payload.get("total", "")),
            currency=str(payload.get("currency", "")),
            details=AmountDetails(
                subtotal=str(details.get("subtotal", "")),
                tax=str(details.get("tax", "")),
                shipping=str(details.get("shipping", "")),
            )
            if isinstance(details, dict)
            else None,
        )


@dataclass(frozen=True)
class Transaction:
    amount: Optional[Amount]
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {}
        if self.amount is not None:
            body["amount"] = self.amount.to_dict()
        if self.description is not None:
            body["description"] = self.description
        return body

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Transaction":
        return cls(
            amount=Amount.from_response(_object(payload, "amount")),
            description=payload.get("description"),
        )


@dataclass(frozen=True)
class PaymentIntent:
    """The body POSTed to create a payment."""

    return_url: str
    cancel_url: str
    transactions: Tuple[Transaction, ...]
    intent: str = "sale"
    payment_method: str = "paypal"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "intent": self.intent,
            "redirect_urls": {
                "return_url": self.return_url,
                "cancel_url": self.cancel_url,
            },
            "payer": {"payment_method": self.payment_method},
            "transactions": [transaction.to_dict() for transaction in self.transactions],
        }


@dataclass(frozen=True)
class Sale:
    id: Optional[str]
    state: Optional[str]
    amount: Optional[Amount] = None
    parent_payment: Optional[str] = None
    links: Tuple[Link, ...] = ()
    create_time: Optional[datetime] = None
    update_time: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def is_completed(self) -> bool:
        return self.state == "completed"

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "Sale":
        return cls(
            id=payload.get("id"),
            state=payload.get("state"),
            amount=Amount.from_response(_object(payload, "amount")),
            parent_payment=payload.get("parent_payment"),
            links=_links(payload),
            create_time=_parse_time(payload.get("create_time")),
            update_time=_parse_time(payload.get("update_time")),
            raw=payload,
        )


@dataclass(frozen=True)
class PaymentRecord:
    id: Optional[str]
    state: Optional[str]
    intent: Optional[str]
    payment_method: Optional[str] = None
    transactions: Tuple[Transaction, ...] = ()
    links: Tuple[Link, ...] = ()
    related_sales: Tuple[Sale, ...] = ()
    create_time: Optional[datetime] = None
    update_time: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def find_link(self, rel: str) -> Link:
        for link in self.links:
            if link.rel == rel:
                return link
        raise LinkNotFoundError(rel, self.id)

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "PaymentRecord":
        transactions = _objects(payload, "transactions")
        sales = tuple(
            Sale.from_response(resource["sale"])
            for transaction in transactions
            for resource in _objects(transaction, "related_resources")
            if isinstance(resource.get("sale"), dict)
        )
        return cls(
            id=payload.get("id"),
            state=payload.get("state"),
            intent=payload.get("intent"),
            payment_method=_object(payload, "payer").get("payment_method"),
            transactions=tuple(Transaction.from_response(item) for item in transactions),
            links=_links(payload),
            related_sales=sales,
            create_time=_parse_time(payload.get("create_time")),
            update_time=_parse_time(payload.get("update_time")),
            raw=payload,
        )
