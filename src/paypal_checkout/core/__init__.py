"""
Core primitives that implement the PayPal payment lifecycle.
"""

from .client import GatewayClient
from .config import (
    ConfigError,
    GatewayConfig,
    GatewayParameters,
    load_gateway_config,
)
from .environment import GatewayEnvironment, build_environment, load_env_file
from .errors import (
    AuthError,
    CreationError,
    DecodeError,
    ExecutionError,
    GatewayError,
    HTTPStatusError,
    LinkNotFoundError,
    ReturnQueryError,
    SaleLookupError,
    TransportError,
    VerificationError,
)
from .flow import (
    ApprovalHandle,
    AwaitingApproval,
    AwaitingExecution,
    AwaitingPayment,
    AwaitingToken,
    CheckoutState,
    Completed,
    Executed,
    PaymentOrder,
    begin_approval,
    parse_return_query,
    resume_after_approval,
)
from .models import (
    AccessToken,
    Amount,
    AmountDetails,
    Link,
    PaymentIntent,
    PaymentRecord,
    Sale,
    Transaction,
)
from .payloads import build_amount, build_payment_intent, format_money
from .payments import create_payment, execute_payment, resolve_approval_url
from .sales import lookup_sale, verify_completed
from .tokens import acquire_token
from .transport import Transport, TransportResponse

__all__ = [
    "AccessToken",
    "Amount",
    "AmountDetails",
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
    "Transaction",
    "Transport",
    "TransportError",
    "TransportResponse",
    "VerificationError",
    "acquire_token",
    "begin_approval",
    "build_amount",
    "build_environment",
    "build_payment_intent",
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
]
