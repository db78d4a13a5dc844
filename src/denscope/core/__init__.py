"""
Core primitives of the DenScope client and its x402 payment flow.
"""

from .client import DenScopeClient, handle_response
from .config import (
    ApiKeyAuth,
    AuthMode,
    ClientConfig,
    X402Auth,
    load_client_config,
)
from .environment import build_environment, read_env_file
from .errors import (
    AuthenticationError,
    ConfigError,
    DenScopeError,
    MalformedChallengeError,
    MissingChallengeError,
    NoAcceptedPaymentMethodError,
    PaymentRequiredError,
    UnsupportedNetworkError,
)
from .models import (
    AgentEvent,
    AgentProfile,
    AgentProfileResponse,
    AuthorizationAssertion,
    EventsResponse,
    Pagination,
    PaymentChallenge,
    PaymentExtra,
    PaymentRequirement,
    ResourceInfo,
    ScoreBreakdownEntry,
    ScoreResponse,
    SearchAgent,
    SearchResponse,
    Signal,
    SignalsResponse,
    TrustScore,
)
from .signers import LocalAccountSigner, TypedDataSigner
from .x402 import (
    build_authorization,
    build_payment_header,
    build_signing_domain,
    decode_payment_required,
    parse_chain_id,
    select_requirement,
)

__all__ = [
    "AgentEvent",
    "AgentProfile",
    "AgentProfileResponse",
    "ApiKeyAuth",
    "AuthMode",
    "AuthenticationError",
    "AuthorizationAssertion",
    "ClientConfig",
    "ConfigError",
    "DenScopeClient",
    "DenScopeError",
    "EventsResponse",
    "LocalAccountSigner",
    "MalformedChallengeError",
    "MissingChallengeError",
    "NoAcceptedPaymentMethodError",
    "Pagination",
    "PaymentChallenge",
    "PaymentExtra",
    "PaymentRequiredError",
    "PaymentRequirement",
    "ResourceInfo",
    "ScoreBreakdownEntry",
    "ScoreResponse",
    "SearchAgent",
    "SearchResponse",
    "Signal",
    "SignalsResponse",
    "TrustScore",
    "TypedDataSigner",
    "UnsupportedNetworkError",
    "X402Auth",
    "build_authorization",
    "build_environment",
    "build_payment_header",
    "build_signing_domain",
    "decode_payment_required",
    "handle_response",
    "load_client_config",
    "parse_chain_id",
    "read_env_file",
    "select_requirement",
]
