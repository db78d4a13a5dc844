"""
x402 payment helpers: decode a 402 challenge and build the ``X-PAYMENT`` header.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import re
import secrets
import time
from typing import Any, Dict, Mapping, Optional

import requests

from .constants import (
    EIP3009_TYPES,
    EVM_NAMESPACE,
    PAYMENT_REQUIRED_HEADER,
    PRIMARY_TYPE,
    SIGNATURE_VALIDITY_SECONDS,
    X402_VERSION,
)
from .errors import (
    MalformedChallengeError,
    MissingChallengeError,
    NoAcceptedPaymentMethodError,
    UnsupportedNetworkError,
)
from .models import (
    AuthorizationAssertion,
    PaymentChallenge,
    PaymentRequirement,
    ResourceInfo,
)
from .signers import TypedDataSigner

_UINT_RE = re.compile(r"[0-9]+")

__all__ = [
    "build_authorization",
    "build_payment_header",
    "build_signing_domain",
    "decode_payment_required",
    "encode_header",
    "parse_chain_id",
    "select_requirement",
]


def _decode_header(value: str) -> Any:
    raw = base64.b64decode(value, validate=True)
    return json.loads(raw.decode("utf-8"))


def encode_header(payload: Mapping[str, Any]) -> str:
    """Serialise ``payload`` to JSON and base64-encode it for a header."""
    data = json.dumps(payload, separators=(",", ":")).encode("utf-8")
    return base64.b64encode(data).decode("ascii")


def decode_payment_required(response: requests.Response) -> PaymentChallenge:
    """
    Decode the ``payment-required`` header of a 402 response.

    No semantic checks are made; an empty ``accepts`` list is returned as-is.
    """
    header = response.headers.get(PAYMENT_REQUIRED_HEADER)
    if not header:
        raise MissingChallengeError("402 response missing PAYMENT-REQUIRED header")

    try:
        payload = _decode_header(header)
    except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
        raise MalformedChallengeError(
            "Failed to decode PAYMENT-REQUIRED header"
        ) from exc

    if not isinstance(payload, dict):
        raise MalformedChallengeError("PAYMENT-REQUIRED header is not a JSON object")
    accepts = payload.get("accepts") or []
    if not isinstance(accepts, list) or not all(isinstance(i, dict) for i in accepts):
        raise MalformedChallengeError("PAYMENT-REQUIRED header has malformed accepts")

    return PaymentChallenge.from_dict(payload)


def select_requirement(challenge: PaymentChallenge) -> PaymentRequirement:
    """Pick the requirement to pay. The first accepted entry always wins."""
    if not challenge.accepts:
        raise NoAcceptedPaymentMethodError(challenge)
    return challenge.accepts[0]


def parse_chain_id(network: str) -> int:
    """Parse a CAIP-2 network string such as ``eip155:42220`` into ``42220``."""
    parts = network.split(":")
    if len(parts) != 2 or parts[0] != EVM_NAMESPACE or not _UINT_RE.fullmatch(parts[1]):
        raise UnsupportedNetworkError(network)
    try:
        return int(parts[1], 10)
    except ValueError as exc:
        raise UnsupportedNetworkError(network) from exc


def build_signing_domain(requirement: PaymentRequirement) -> Dict[str, Any]:
    """
    Build the EIP-712 domain for ``requirement``.

    Asset contracts and chains vary per challenge, so the domain is always
    taken from the requirement itself.
    """
    return {
        "name": requirement.extra.name,
        "version": requirement.extra.version,
        "chainId": parse_chain_id(requirement.network),
        "verifyingContract": requirement.asset,
    }


def build_authorization(
    payer_address: str,
    requirement: PaymentRequirement,
    *,
    validity_seconds: int = SIGNATURE_VALIDITY_SECONDS,
    now: Optional[int] = None,
) -> AuthorizationAssertion:
    """
    Construct a fresh ``TransferWithAuthorization`` for ``requirement``.

    Every call draws a new 32-byte nonce from :mod:`secrets`. An amount that
    is not a base-10 integer string raises :class:`MalformedChallengeError`.
    """
    amount = requirement.amount
    if not isinstance(amount, str) or not _UINT_RE.fullmatch(amount):
        raise MalformedChallengeError(f"Payment requirement has invalid amount: {amount!r}")
    now = int(time.time()) if now is None else now
    return AuthorizationAssertion(
        from_address=payer_address,
        to_address=requirement.pay_to,
        value=int(amount),
        valid_after=0,
        valid_before=now + validity_seconds,
        nonce=secrets.token_bytes(32),
    )


def build_payment_header(
    signer: TypedDataSigner,
    requirement: PaymentRequirement,
    resource: ResourceInfo,
    *,
    validity_seconds: int = SIGNATURE_VALIDITY_SECONDS,
    now: Optional[int] = None,
) -> str:
    """
    Sign an x402 payment for ``requirement`` and return the ``X-PAYMENT`` value.

    The envelope echoes ``resource`` and the ``accepted`` requirement exactly
    as the server sent them. Errors raised by ``signer`` propagate unchanged.
    """
    domain = build_signing_domain(requirement)
    authorization = build_authorization(
        signer.address,
        requirement,
        validity_seconds=validity_seconds,
        now=now,
    )

    signature = signer.sign_typed_data(
        {
            "domain": domain,
            "types": EIP3009_TYPES,
            "primaryType": PRIMARY_TYPE,
            "message": authorization.to_message(),
        }
    )
    logging.info(
        "Signed x402 payment of %s on %s to %s",
        requirement.amount,
        requirement.network,
        requirement.pay_to,
    )

    return encode_header(
        {
            "x402Version": X402_VERSION,
            "resource": resource.raw,
            "accepted": requirement.raw,
            "payload": {
                "signature": signature,
                "authorization": authorization.to_wire(),
            },
        }
    )
