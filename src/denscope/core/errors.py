"""
Exception types raised by the DenScope client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .models import PaymentChallenge

__all__ = [
    "AuthenticationError",
    "ConfigError",
    "DenScopeError",
    "MalformedChallengeError",
    "MissingChallengeError",
    "NoAcceptedPaymentMethodError",
    "PaymentRequiredError",
    "UnsupportedNetworkError",
]


class ConfigError(Exception):
    """Raised when the supplied configuration is invalid."""


class DenScopeError(Exception):
    """
    Base error for failed API calls.

    ``status`` is the HTTP status code and ``body`` whatever the server
    returned: parsed JSON when possible, raw text otherwise, or ``None``.
    """

    def __init__(self, message: str, status: int, body: Any = None) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class AuthenticationError(DenScopeError):
    """Raised for 401 and 403 responses."""

    def __init__(self, message: str, status: int = 401, body: Any = None) -> None:
        super().__init__(message, status, body)


class PaymentRequiredError(DenScopeError):
    """Raised when a 402 response could not be paid."""

    def __init__(self, message: str, body: Any = None) -> None:
        super().__init__(message, 402, body)


class MissingChallengeError(PaymentRequiredError):
    """The 402 response carried no ``payment-required`` header."""


class MalformedChallengeError(PaymentRequiredError):
    """The ``payment-required`` header is not base64-encoded JSON."""


class UnsupportedNetworkError(PaymentRequiredError):
    """The payment requirement targets a network we cannot sign for."""

    def __init__(self, network: str) -> None:
        super().__init__(f"Unsupported network format: {network}")
        self.network = network


class NoAcceptedPaymentMethodError(PaymentRequiredError):
    """The challenge listed no accepted payment requirements."""

    def __init__(self, challenge: Optional["PaymentChallenge"] = None) -> None:
        super().__init__(
            "No accepted payment methods",
            challenge.raw if challenge is not None else None,
        )
        self.challenge = challenge
