"""
Public facade for the DenScope client package.

The most useful pieces are re-exported so integrators can
``from denscope import ...`` without navigating the package.
"""

from .api import create_client
from .core import (
    ApiKeyAuth,
    AuthenticationError,
    AuthMode,
    ClientConfig,
    ConfigError,
    DenScopeClient,
    DenScopeError,
    LocalAccountSigner,
    MalformedChallengeError,
    MissingChallengeError,
    NoAcceptedPaymentMethodError,
    PaymentChallenge,
    PaymentRequiredError,
    PaymentRequirement,
    ResourceInfo,
    TypedDataSigner,
    UnsupportedNetworkError,
    X402Auth,
    build_payment_header,
    decode_payment_required,
    load_client_config,
)

__all__ = (
    "ApiKeyAuth",
    "AuthMode",
    "AuthenticationError",
    "ClientConfig",
    "ConfigError",
    "DenScopeClient",
    "DenScopeError",
    "LocalAccountSigner",
    "MalformedChallengeError",
    "MissingChallengeError",
    "NoAcceptedPaymentMethodError",
    "PaymentChallenge",
    "PaymentRequiredError",
    "PaymentRequirement",
    "ResourceInfo",
    "TypedDataSigner",
    "UnsupportedNetworkError",
    "X402Auth",
    "build_payment_header",
    "create_client",
    "decode_payment_required",
    "load_client_config",
)
