"""
Configuration objects and helpers for the DenScope client.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

from eth_utils import is_hex_address, to_checksum_address

from .constants import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS, SIGNATURE_VALIDITY_SECONDS
from .environment import build_environment
from .errors import ConfigError
from .signers import LocalAccountSigner, TypedDataSigner

__all__ = [
    "ApiKeyAuth",
    "AuthMode",
    "ClientConfig",
    "ConfigError",
    "X402Auth",
    "load_client_config",
]

_PARAMETER_TO_ENV_KEY = {
    "base_url": "DENSCOPE_BASE_URL",
    "api_key": "DENSCOPE_API_KEY",
    "private_key": "DENSCOPE_PRIVATE_KEY",
    "signature_validity_seconds": "DENSCOPE_SIGNATURE_VALIDITY_SECONDS",
    "timeout_seconds": "DENSCOPE_TIMEOUT_SECONDS",
}


class AuthMode(enum.Enum):
    API_KEY = "api_key"
    X402 = "x402"


@dataclass(frozen=True)
class ApiKeyAuth:
    """Static bearer-token credentials."""

    api_key: str
    mode: AuthMode = field(default=AuthMode.API_KEY, init=False)

    def __post_init__(self) -> None:
        if not self.api_key or not self.api_key.strip():
            raise ConfigError("API key must not be empty")


@dataclass(frozen=True)
class X402Auth:
    """Per-request micropayments signed by ``signer``."""

    signer: TypedDataSigner
    mode: AuthMode = field(default=AuthMode.X402, init=False)

    def __post_init__(self) -> None:
        _normalize_address(self.signer.address, "signer address")

    @property
    def address(self) -> str:
        return self.signer.address


Auth = Union[ApiKeyAuth, X402Auth]


def _normalize_private_key(raw_key: str) -> str:
    key = raw_key.strip()
    if not key:
        raise ConfigError("DENSCOPE_PRIVATE_KEY must not be empty")
    if not key.startswith("0x"):
        key = "0x" + key
    if len(key) != 66:
        raise ConfigError("DENSCOPE_PRIVATE_KEY must be 32 bytes (64 hex chars)")
    try:
        int(key[2:], 16)
    except ValueError as exc:
        raise ConfigError("DENSCOPE_PRIVATE_KEY must be hex encoded") from exc
    return key


def _normalize_address(raw_address: str, field_name: str) -> str:
    value = raw_address.strip()
    if not value.startswith("0x"):
        value = "0x" + value
    if not is_hex_address(value):
        raise ConfigError(f"{field_name} is not a valid EVM address")
    return to_checksum_address(value)


def _positive_int(raw: Any, field_name: str) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{field_name} must be an integer, got '{raw}'") from exc
    if value <= 0:
        raise ConfigError(f"{field_name} must be greater than zero")
    return value


@dataclass(frozen=True)
class ClientConfig:
    """
    Read-only settings owned by a :class:`~denscope.core.client.DenScopeClient`.

    ``auth`` is either :class:`ApiKeyAuth` or :class:`X402Auth` (the two modes
    are mutually exclusive) or ``None`` for anonymous access.
    """

    base_url: str = DEFAULT_BASE_URL
    auth: Optional[Auth] = None
    signature_validity_seconds: int = SIGNATURE_VALIDITY_SECONDS
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        _positive_int(self.signature_validity_seconds, "signature_validity_seconds")
        _positive_int(self.timeout_seconds, "timeout_seconds")

    @property
    def mode(self) -> Optional[AuthMode]:
        return self.auth.mode if self.auth is not None else None

    @classmethod
    def with_api_key(cls, api_key: str, **kwargs: Any) -> "ClientConfig":
        return cls(auth=ApiKeyAuth(api_key), **kwargs)

    @classmethod
    def with_signer(cls, signer: TypedDataSigner, **kwargs: Any) -> "ClientConfig":
        return cls(auth=X402Auth(signer), **kwargs)

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "ClientConfig":
        base_url = values.get("DENSCOPE_BASE_URL") or DEFAULT_BASE_URL
        api_key = values.get("DENSCOPE_API_KEY") or None
        private_key = values.get("DENSCOPE_PRIVATE_KEY") or None

        if api_key and private_key:
            raise ConfigError(
                "Set either DENSCOPE_API_KEY or DENSCOPE_PRIVATE_KEY, not both"
            )

        auth: Optional[Auth] = None
        if api_key:
            auth = ApiKeyAuth(api_key.strip())
        elif private_key:
            signer = LocalAccountSigner.from_key(_normalize_private_key(private_key))
            auth = X402Auth(signer)

        return cls(
            base_url=base_url,
            auth=auth,
            signature_validity_seconds=_positive_int(
                values.get(
                    "DENSCOPE_SIGNATURE_VALIDITY_SECONDS",
                    str(SIGNATURE_VALIDITY_SECONDS),
                ),
                "DENSCOPE_SIGNATURE_VALIDITY_SECONDS",
            ),
            timeout_seconds=_positive_int(
                values.get("DENSCOPE_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS)),
                "DENSCOPE_TIMEOUT_SECONDS",
            ),
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        private_key: Optional[str] = None,
        signature_validity_seconds: Optional[Union[int, str]] = None,
        timeout_seconds: Optional[Union[int, str]] = None,
    ) -> "ClientConfig":
        explicit = {
            "base_url": base_url,
            "api_key": api_key,
            "private_key": private_key,
            "signature_validity_seconds": signature_validity_seconds,
            "timeout_seconds": timeout_seconds,
        }
        merged_overrides: Dict[str, str] = dict(overrides or {})
        for key, value in explicit.items():
            if value is not None:
                merged_overrides[_PARAMETER_TO_ENV_KEY[key]] = str(value)

        return cls.from_mapping(
            build_environment(env_file=env_file, base=base, overrides=merged_overrides)
        )


def load_client_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    base_url: Optional[str] = None,
    api_key: Optional[str] = None,
    private_key: Optional[str] = None,
    signature_validity_seconds: Optional[Union[int, str]] = None,
    timeout_seconds: Optional[Union[int, str]] = None,
) -> ClientConfig:
    """
    Convenience wrapper that mirrors :meth:`ClientConfig.from_env`.

    Values can come from environment variables, a ``.env`` file, keyword
    arguments, or any combination of the three.
    """
    return ClientConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        base_url=base_url,
        api_key=api_key,
        private_key=private_key,
        signature_validity_seconds=signature_validity_seconds,
        timeout_seconds=timeout_seconds,
    )
