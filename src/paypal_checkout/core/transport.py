"""
HTTP transport shared by every gateway call.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

import requests

from .errors import DecodeError, TransportError

__all__ = ["DEFAULT_TIMEOUT", "Transport", "TransportResponse", "decode_json"]

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code <= 299


def decode_json(response: TransportResponse, what: str) -> Dict[str, Any]:
    try:
        payload = json.loads(response.body)
    except ValueError as exc:
        raise DecodeError(f"Failed to parse {what} JSON: {response.body!r}") from exc
    if not isinstance(payload, dict):
        raise DecodeError(f"Expected a JSON object for {what}, got: {response.body!r}")
    return payload


class Transport:
    """
    One request, one response. Never retries and never interprets the status
    code; callers decide what counts as success.
    """

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.session = session or requests.Session()
        self.timeout = timeout

    def send(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        data: Optional[str] = None,
        json_body: Optional[Dict[str, Any]] = None,
        auth: Optional[Tuple[str, str]] = None,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> TransportResponse:
        """
        Issue one request and return its status and raw body.

        ``cancel`` is checked once, before the request goes out. A request
        already in flight is not interrupted; ``timeout`` bounds how long it
        can take.
        """
        if cancel is not None and cancel.is_set():
            raise TransportError(f"{method} {url} cancelled before it was sent")

        if json_body is not None:
            data = json.dumps(json_body)

        logging.debug("%s %s", method, url)
        try:
            response = self.session.request(
                method,
                url,
                headers=dict(headers or {}),
                data=data,
                auth=auth,
                timeout=self.timeout if timeout is None else timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        logging.debug("%s %s -> %s", method, url, response.status_code)
        return TransportResponse(status_code=response.status_code, body=response.text)

    def close(self) -> None:
        self.session.close()
