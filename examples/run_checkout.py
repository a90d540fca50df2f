"""
Walk one sandbox checkout end to end from a terminal.

The script creates a payment, prints the approval URL, and waits for the
browser's return URL (the one carrying ``paymentId`` and ``PayerID``) to be
pasted back before executing and verifying the sale.
"""

from __future__ import annotations

import argparse
import logging
import sys
from urllib.parse import urlsplit

from paypal_checkout import (
    ConfigError,
    GatewayError,
    PaymentOrder,
    ReturnQueryError,
    begin_checkout,
    complete_checkout,
    create_gateway_client,
    load_gateway_config,
    parse_return_query,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a PayPal sandbox checkout")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing PAYPAL_* settings",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("--subtotal", default="1.00")
    parser.add_argument("--tax", default="0.20")
    parser.add_argument("--shipping", default="2.00")
    parser.add_argument("--currency", default="USD")
    parser.add_argument(
        "--description",
        default="The products that I have purchased:",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_gateway_config(env_file=args.env_file)
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_gateway_client(config=config)
    order = PaymentOrder(
        subtotal=args.subtotal,
        tax=args.tax,
        shipping=args.shipping,
        currency=args.currency,
        description=args.description,
    )

    try:
        checkout = begin_checkout(client, order)
    except GatewayError as exc:
        logging.error("Could not create the payment: %s", exc)
        return 1

    print(f"Approve the payment at:\n  {checkout.approval_url}")
    returned = input("Paste the URL the browser returned to: ").strip()

    try:
        handle, payer_id = parse_return_query(urlsplit(returned).query)
    except ReturnQueryError as exc:
        logging.error("%s", exc)
        return 1
    if handle != checkout.handle:
        logging.error("Returned payment %s does not match %s", handle.payment_id, checkout.handle.payment_id)
        return 1

    try:
        completed = complete_checkout(client, checkout.token, handle, payer_id)
    except GatewayError as exc:
        logging.error("Checkout failed: %s", exc)
        return 1

    logging.info("Money transferred, sale %s", completed.sale.id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
