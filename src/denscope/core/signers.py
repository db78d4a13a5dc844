"""
Signing capabilities used to authorise x402 payments.

The client never signs anything itself: it hands an EIP-712 typed-data
structure to a caller-supplied :class:`TypedDataSigner` and embeds whatever
signature comes back.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Protocol, runtime_checkable

from eth_account import Account
from eth_account.messages import encode_typed_data
from eth_utils import to_hex

from .constants import EIP712_DOMAIN_TYPE

__all__ = ["LocalAccountSigner", "TypedDataSigner"]


@runtime_checkable
class TypedDataSigner(Protocol):
    """
    Anything that can sign EIP-712 typed data on behalf of ``address``.

    ``typed_data`` carries ``domain``, ``types``, ``primaryType`` and
    ``message``. Implementations may block (hardware wallets, remote
    signers); errors they raise reach the caller unchanged.
    """

    @property
    def address(self) -> str:
        ...

    def sign_typed_data(self, typed_data: Mapping[str, Any]) -> str:
        ...


class LocalAccountSigner:
    """
    :class:`TypedDataSigner` backed by an in-process ``eth_account`` key.
    """

    def __init__(self, account: Any) -> None:
        self._account = account

    @classmethod
    def from_key(cls, private_key: str) -> "LocalAccountSigner":
        return cls(Account.from_key(private_key))

    @property
    def address(self) -> str:
        return self._account.address

    def sign_typed_data(self, typed_data: Mapping[str, Any]) -> str:
        types: Dict[str, Any] = dict(typed_data["types"])
        types.setdefault("EIP712Domain", EIP712_DOMAIN_TYPE)
        full_message = {
            "types": types,
            "primaryType": typed_data["primaryType"],
            "domain": dict(typed_data["domain"]),
            "message": dict(typed_data["message"]),
        }
        signable = encode_typed_data(full_message=full_message)
        signed = self._account.sign_message(signable)
        return to_hex(signed.signature)
