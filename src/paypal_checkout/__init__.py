"""
Public facade for the PayPal checkout helper package.

The most useful pieces are re-exported here so integrators can
``from paypal_checkout import ...`` without navigating the package.
"""

from .api import begin_checkout, complete_checkout, create_gateway_client
from .core import (
    AccessToken,
    ApprovalHandle,
    AuthError,
    AwaitingApproval,
    AwaitingExecution,
    AwaitingPayment,
    AwaitingToken,
    CheckoutState,
    Completed,
    ConfigError,
    CreationError,
    DecodeError,
    Executed,
    ExecutionError,
    GatewayClient,
    GatewayConfig,
    GatewayEnvironment,
    GatewayError,
    GatewayParameters,
    HTTPStatusError,
    Link,
    LinkNotFoundError,
    PaymentIntent,
    PaymentOrder,
    PaymentRecord,
    ReturnQueryError,
    Sale,
    SaleLookupError,
    Transport,
    TransportError,
    VerificationError,
    acquire_token,
    begin_approval,
    build_environment,
    build_payment_intent,
    create_payment,
    execute_payment,
    format_money,
    load_env_file,
    load_gateway_config,
    lookup_sale,
    parse_return_query,
    resolve_approval_url,
    resume_after_approval,
    verify_completed,
)

__version__ = "0.1.0"

__all__ = (
    "AccessToken",
    "ApprovalHandle",
    "AuthError",
    "AwaitingApproval",
    "AwaitingExecution",
    "AwaitingPayment",
    "AwaitingToken",
    "CheckoutState",
    "Completed",
    "ConfigError",
    "CreationError",
    "DecodeError",
    "Executed",
    "ExecutionError",
    "GatewayClient",
    "GatewayConfig",
    "GatewayEnvironment",
    "GatewayError",
    "GatewayParameters",
    "HTTPStatusError",
    "Link",
    "LinkNotFoundError",
    "PaymentIntent",
    "PaymentOrder",
    "PaymentRecord",
    "ReturnQueryError",
    "Sale",
    "SaleLookupError",
    "Transport",
    "TransportError",
    "VerificationError",
    "acquire_token",
    "begin_approval",
    "begin_checkout",
    "build_environment",
    "build_payment_intent",
    "complete_checkout",
    "create_gateway_client",
    "create_payment",
    "execute_payment",
    "format_money",
    "load_env_file",
    "load_gateway_config",
    "lookup_sale",
    "parse_return_query",
    "resolve_approval_url",
    "resume_after_approval",
    "verify_completed",
)
