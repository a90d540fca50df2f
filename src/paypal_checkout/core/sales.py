"""
Sale lookup and the completed-state check.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional
from urllib.parse import quote

from .config import GatewayConfig
from .errors import SaleLookupError, VerificationError
from .models import AccessToken, Sale
from .tokens import bearer_headers
from .transport import Transport, decode_json

__all__ = ["COMPLETED", "SALE_PATH", "lookup_sale", "verify_completed"]

SALE_PATH = "/v1/payments/sale"
COMPLETED = "completed"


def lookup_sale(
    transport: Transport,
    config: GatewayConfig,
    token: AccessToken,
    sale_id: str,
    *,
    timeout: Optional[float] = None,
    cancel: Optional[threading.Event] = None,
) -> Sale:
    url = config.endpoint(f"{SALE_PATH}/{quote(sale_id, safe='')}")
    logging.info("Looking up sale %s", sale_id)
    response = transport.send(
        "GET",
        url,
        headers=bearer_headers(token),
        timeout=timeout,
        cancel=cancel,
    )
    if response.status_code != 200:
        logging.error("Sale lookup for %s rejected with %s", sale_id, response.status_code)
        raise SaleLookupError(response.status_code, response.body)
    return Sale.from_response(decode_json(response, "sale"))


def verify_completed(sale: Sale) -> Sale:
    """
    Accept the sale only in its terminal success state.

    Pending and every other state count as failure.
    """
    if sale.state != COMPLETED:
        logging.warning("Sale %s is %s, not %s", sale.id, sale.state, COMPLETED)
        raise VerificationError(sale.state or "", sale.id)
    return sale
