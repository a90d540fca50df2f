"""Shared test fixtures and configuration."""

import json
from typing import Any, Dict
from unittest.mock import MagicMock

import pytest
import requests

from paypal_checkout import AccessToken, GatewayClient, GatewayConfig

API_URL = "https://api.gateway.test"


@pytest.fixture
def config() -> GatewayConfig:
    """Return a config pointing at a fake gateway."""
    return GatewayConfig(
        client_id="client-id",
        client_secret="client-secret",
        api_url=API_URL,
        timeout_seconds=12.5,
    )


@pytest.fixture
def session():
    """Create a mock requests session; no test touches the network."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(config, session) -> GatewayClient:
    return GatewayClient(config, session=session)


@pytest.fixture
def token() -> AccessToken:
    return AccessToken(
        access_token="EEwJ6tF9x5WCIZDYzyZGaz6Khbw7raYRIBV_WxVvgmsG",
        token_type="Bearer",
        expires_in=28800,
    )


@pytest.fixture
def make_response():
    """Build a fake requests.Response with the given status and body."""

    def _make(status_code: int, body: Any = None) -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        if body is None:
            response.text = ""
        elif isinstance(body, str):
            response.text = body
        else:
            response.text = json.dumps(body)
        return response

    return _make


@pytest.fixture
def token_payload() -> Dict[str, Any]:
    return {
        "scope": "https://api.paypal.com/v1/payments/.*",
        "access_token": "EEwJ6tF9x5WCIZDYzyZGaz6Khbw7raYRIBV_WxVvgmsG",
        "token_type": "Bearer",
        "app_id": "APP-6XR95014BA15863X",
        "expires_in": 28800,
    }


@pytest.fixture
def created_payment_payload() -> Dict[str, Any]:
    """A payment as returned by the create endpoint."""
    return {
        "id": "PAY-6RV70583SB702805EKEYSZ6Y",
        "create_time": "2013-03-01T22:34:35Z",
        "update_time": "2013-03-01T22:34:36Z",
        "state": "created",
        "intent": "sale",
        "payer": {"payment_method": "paypal"},
        "transactions": [
            {
                "amount": {
                    "total": "3.20",
                    "currency": "USD",
                    "details": {"subtotal": "1.00", "tax": "0.20", "shipping": "2.00"},
                },
                "description": "The products that I have purchased:",
            }
        ],
        "links": [
            {
                "href": f"{API_URL}/v1/payments/payment/PAY-6RV70583SB702805EKEYSZ6Y",
                "rel": "self",
                "method": "GET",
            },
            {
                "href": "https://www.sandbox.paypal.com/cgi-bin/webscr?cmd=_express-checkout&token=EC-60U79048BN7719609",
                "rel": "approval_url",
                "method": "REDIRECT",
            },
            {
                "href": f"{API_URL}/v1/payments/payment/PAY-6RV70583SB702805EKEYSZ6Y/execute",
                "rel": "execute",
                "method": "POST",
            },
        ],
    }


@pytest.fixture
def sale_payload() -> Dict[str, Any]:
    return {
        "id": "36C38912MN9658832",
        "create_time": "2013-03-01T22:34:35Z",
        "update_time": "2013-03-01T22:34:36Z",
        "state": "completed",
        "amount": {"total": "3.20", "currency": "USD"},
        "parent_payment": "PAY-6RV70583SB702805EKEYSZ6Y",
        "links": [
            {
                "href": f"{API_URL}/v1/payments/sale/36C38912MN9658832",
                "rel": "self",
                "method": "GET",
            }
        ],
    }


@pytest.fixture
def executed_payment_payload(created_payment_payload, sale_payload) -> Dict[str, Any]:
    """A payment as returned by the execute endpoint."""
    payload = dict(created_payment_payload)
    payload["state"] = "approved"
    transaction = dict(payload["transactions"][0])
    transaction["related_resources"] = [{"sale": sale_payload}]
    payload["transactions"] = [transaction]
    payload["links"] = [created_payment_payload["links"][0]]
    return payload
