"""
Protocol and API constants shared by the DenScope client.
"""

from __future__ import annotations

from typing import Dict, List

DEFAULT_BASE_URL = "https://denscope.vercel.app"
API_PREFIX = "/api/v1"

DEFAULT_TIMEOUT_SECONDS = 30

X402_VERSION = 2
PAYMENT_REQUIRED_HEADER = "payment-required"
PAYMENT_HEADER = "X-PAYMENT"

EVM_NAMESPACE = "eip155"

PRIMARY_TYPE = "TransferWithAuthorization"

# EIP-3009 TransferWithAuthorization schema used for EIP-712 signing.
EIP3009_TYPES: Dict[str, List[Dict[str, str]]] = {
    PRIMARY_TYPE: [
        {"name": "from", "type": "address"},
        {"name": "to", "type": "address"},
        {"name": "value", "type": "uint256"},
        {"name": "validAfter", "type": "uint256"},
        {"name": "validBefore", "type": "uint256"},
        {"name": "nonce", "type": "bytes32"},
    ],
}

EIP712_DOMAIN_TYPE: List[Dict[str, str]] = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]

SIGNATURE_VALIDITY_SECONDS = 3600
