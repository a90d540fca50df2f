"""
Configuration objects for talking to the PayPal REST gateway.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional

from .environment import GatewayEnvironment, build_environment

__all__ = [
    "ConfigError",
    "GatewayConfig",
    "GatewayParameters",
    "load_gateway_config",
    "SANDBOX_API_URL",
]

SANDBOX_API_URL = "https://api.sandbox.paypal.com"

_PARAMETER_TO_ENV_KEY = {
    "client_id": "PAYPAL_CLIENT_ID",
    "client_secret": "PAYPAL_CLIENT_SECRET",
    "api_url": "PAYPAL_API_URL",
    "timeout_seconds": "PAYPAL_TIMEOUT_SECONDS",
    "return_url": "PAYPAL_RETURN_URL",
    "cancel_url": "PAYPAL_CANCEL_URL",
    "currency": "PAYPAL_CURRENCY",
    "accept_language": "PAYPAL_ACCEPT_LANGUAGE",
}

# Older deployments export the sandbox credentials under these names.
_LEGACY_KEYS = {
    "PAYPAL_CLIENT_ID": "PAYPAL_TEST_CLIENTID",
    "PAYPAL_CLIENT_SECRET": "PAYPAL_TEST_SECRET",
}


class ConfigError(Exception):
    """Raised when the supplied configuration is invalid."""


@dataclass(frozen=True)
class GatewayParameters:
    """
    Explicit parameter bundle for constructing :class:`GatewayConfig`.

    Anything left as ``None`` falls through to the environment.
    """

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    api_url: Optional[str] = None
    timeout_seconds: Optional[float | int | str] = None
    return_url: Optional[str] = None
    cancel_url: Optional[str] = None
    currency: Optional[str] = None
    accept_language: Optional[str] = None

    def as_overrides(self) -> Dict[str, str]:
        return _collect_parameter_overrides(
            None,
            {name: getattr(self, name) for name in _PARAMETER_TO_ENV_KEY},
        )


def _collect_parameter_overrides(
    parameters: Optional[GatewayParameters],
    explicit: Mapping[str, Any],
) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    if parameters is not None:
        overrides.update(parameters.as_overrides())

    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:  # pragma: no cover - guarded by the signatures
            raise TypeError(f"Unknown gateway parameter '{key}'") from exc
        overrides[env_key] = str(value)
    return overrides


def _require(environment: GatewayEnvironment, key: str) -> str:
    value = environment.first(key, _LEGACY_KEYS.get(key, key))
    if value is None or not value.strip():
        raise ConfigError(f"{key} must be provided")
    return value.strip()


def _parse_timeout(raw: str) -> float:
    try:
        timeout = Decimal(raw)
    except InvalidOperation as exc:
        raise ConfigError(
            f"PAYPAL_TIMEOUT_SECONDS must be a number, got '{raw}'"
        ) from exc
    if not timeout.is_finite() or timeout <= 0:
        raise ConfigError("PAYPAL_TIMEOUT_SECONDS must be greater than zero")
    return float(timeout)


@dataclass(frozen=True)
class GatewayConfig:
    client_id: str
    client_secret: str
    api_url: str = SANDBOX_API_URL
    timeout_seconds: float = 30.0
    return_url: str = "http://localhost:3000/ok"
    cancel_url: str = "http://localhost:3000/cancel"
    currency: str = "USD"
    accept_language: str = "en_US"

    def endpoint(self, path: str) -> str:
        return f"{self.api_url}/{path.lstrip('/')}"

    def __repr__(self) -> str:
        return (
            f"GatewayConfig(client_id={self.client_id!r}, client_secret='***', "
            f"api_url={self.api_url!r}, timeout_seconds={self.timeout_seconds!r})"
        )

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "GatewayConfig":
        environment = GatewayEnvironment(variables=values)
        currency = (environment.get("PAYPAL_CURRENCY") or "USD").strip().upper()
        if len(currency) != 3:
            raise ConfigError(
                f"PAYPAL_CURRENCY must be a 3-letter code, got '{currency}'"
            )

        return cls(
            client_id=_require(environment, "PAYPAL_CLIENT_ID"),
            client_secret=_require(environment, "PAYPAL_CLIENT_SECRET"),
            api_url=(environment.get("PAYPAL_API_URL") or SANDBOX_API_URL).rstrip("/"),
            timeout_seconds=_parse_timeout(
                environment.get("PAYPAL_TIMEOUT_SECONDS") or "30"
            ),
            return_url=environment.get("PAYPAL_RETURN_URL") or cls.return_url,
            cancel_url=environment.get("PAYPAL_CANCEL_URL") or cls.cancel_url,
            currency=currency,
            accept_language=environment.get("PAYPAL_ACCEPT_LANGUAGE") or cls.accept_language,
        )

    @classmethod
    def from_env(
        cls,
        *,
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
    ) -> "GatewayConfig":
        parameter_overrides = _collect_parameter_overrides(
            parameters,
            {
                "client_id": client_id,
                "client_secret": client_secret,
                "api_url": api_url,
                "timeout_seconds": timeout_seconds,
                "return_url": return_url,
                "cancel_url": cancel_url,
                "currency": currency,
                "accept_language": accept_language,
            },
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment.variables)


def load_gateway_config(
    *,
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
) -> GatewayConfig:
    """
    Convenience wrapper that mirrors :meth:`GatewayConfig.from_env`.

    Credentials can come from the environment, a ``.env`` file, keyword
    arguments, or any combination of the three.
    """
    return GatewayConfig.from_env(
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
