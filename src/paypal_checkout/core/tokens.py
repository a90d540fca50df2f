"""
Client-credentials token exchange.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Optional

from .config import GatewayConfig
from .errors import AuthError
from .models import AccessToken
from .transport import Transport, decode_json

__all__ = ["TOKEN_PATH", "acquire_token", "bearer_headers"]

TOKEN_PATH = "/v1/oauth2/token"


def bearer_headers(token: AccessToken) -> Dict[str, str]:
    return {
        "Authorization": token.authorization_header,
        "Content-Type": "application/json",
        "Accept": "application/json",
    }


def acquire_token(
    transport: Transport,
    config: GatewayConfig,
    *,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    timeout: Optional[float] = None,
    cancel: Optional[threading.Event] = None,
) -> AccessToken:
    """
    Exchange the client credentials for an access token.

    Every call is a fresh round trip; the caller tracks ``expires_in``.
    """
    url = config.endpoint(TOKEN_PATH)
    logging.info("Requesting access token from %s", url)
    response = transport.send(
        "POST",
        url,
        headers={
            "Accept": "application/json",
            "Accept-Language": config.accept_language,
            "Content-Type": "application/x-www-form-urlencoded",
        },
        data="grant_type=client_credentials",
        auth=(client_id or config.client_id, client_secret or config.client_secret),
        timeout=timeout,
        cancel=cancel,
    )
    if response.status_code != 200:
        logging.error("Token request rejected with %s", response.status_code)
        raise AuthError(response.status_code, response.body)

    token = AccessToken.from_response(decode_json(response, "token response"))
    logging.info("Obtained %s token valid for %ss", token.token_type, token.expires_in)
    return token
