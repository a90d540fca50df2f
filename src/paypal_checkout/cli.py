"""
Command-line interface for walking through a PayPal checkout by hand.

``begin`` prints the approval URL; open it, approve as the sandbox buyer, and
copy ``paymentId`` and ``PayerID`` from the return URL into ``resume``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Sequence, Tuple

import requests

from .api import begin_checkout, complete_checkout, create_gateway_client
from .core.config import ConfigError, GatewayConfig, load_gateway_config
from .core.errors import GatewayError
from .core.flow import ApprovalHandle, PaymentOrder


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paypal-checkout",
        description="Run the steps of a PayPal sale against the REST gateway",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing PAYPAL_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("token", help="Check the credentials by requesting a token")

    begin = commands.add_parser("begin", help="Create a payment and print its approval URL")
    begin.add_argument("--subtotal", required=True)
    begin.add_argument("--tax", default="0")
    begin.add_argument("--shipping", default="0")
    begin.add_argument("--currency", help="Defaults to PAYPAL_CURRENCY")
    begin.add_argument("--description", default="")

    resume = commands.add_parser(
        "resume", help="Execute an approved payment and verify the sale"
    )
    resume.add_argument("--payment-id", required=True)
    resume.add_argument("--payer-id", required=True)
    return parser


def _run_token(config: GatewayConfig, session: requests.Session) -> int:
    client = create_gateway_client(config=config, session=session)
    token = client.acquire_token()
    logging.info("Credentials accepted for app %s", token.app_id or "<unknown>")
    return 0


def _run_begin(args: argparse.Namespace, config: GatewayConfig, session: requests.Session) -> int:
    client = create_gateway_client(config=config, session=session)
    order = PaymentOrder(
        subtotal=args.subtotal,
        tax=args.tax,
        shipping=args.shipping,
        currency=args.currency,
        description=args.description,
    )
    checkout = begin_checkout(client, order)
    print(f"payment id:   {checkout.handle.payment_id}")
    print(f"approval url: {checkout.approval_url}")
    return 0


def _run_resume(args: argparse.Namespace, config: GatewayConfig, session: requests.Session) -> int:
    client = create_gateway_client(config=config, session=session)
    token = client.acquire_token()
    completed = complete_checkout(
        client, token, ApprovalHandle(payment_id=args.payment_id), args.payer_id
    )
    logging.info(
        "Sale %s of payment %s completed",
        completed.sale.id,
        completed.payment.id,
    )
    return 0


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        config = load_gateway_config(env_file=args.env_file, overrides=overrides)
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    session = requests.Session()
    try:
        if args.command == "token":
            return _run_token(config, session)
        if args.command == "begin":
            return _run_begin(args, config, session)
        return _run_resume(args, config, session)
    except (GatewayError, ValueError) as exc:
        logging.error("%s failed: %s", args.command, exc)
        return 1
    finally:
        session.close()


def main() -> None:
    sys.exit(run_cli())
