"""
Public, high-level helpers for constructing a DenScope client.
"""

from __future__ import annotations

from typing import Mapping, Optional, Union

import requests

from .core.client import DenScopeClient
from .core.config import ClientConfig, load_client_config
from .core.signers import TypedDataSigner

__all__ = ["create_client"]


def create_client(
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    signer: Optional[TypedDataSigner] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    base_url: Optional[str] = None,
    api_key: Optional[str] = None,
    private_key: Optional[str] = None,
    signature_validity_seconds: Optional[Union[int, str]] = None,
    timeout_seconds: Optional[Union[int, str]] = None,
) -> DenScopeClient:
    """
    Construct a :class:`DenScopeClient`.

    Callers can supply a ready-made :class:`ClientConfig`, a ``signer`` for
    x402 mode, or let the helper assemble the configuration from environment
    data.
    """
    extras = (
        overrides,
        base,
        base_url,
        api_key,
        private_key,
        signature_validity_seconds,
        timeout_seconds,
    )
    if config is not None:
        if signer is not None or any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built ClientConfig or individual parameters, not both."
            )
        return DenScopeClient(config, session=session)

    if signer is not None:
        if api_key is not None or private_key is not None:
            raise ValueError("A signer cannot be combined with api_key or private_key.")
        cfg = load_client_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            base_url=base_url,
            signature_validity_seconds=signature_validity_seconds,
            timeout_seconds=timeout_seconds,
        )
        cfg = ClientConfig.with_signer(
            signer,
            base_url=cfg.base_url,
            signature_validity_seconds=cfg.signature_validity_seconds,
            timeout_seconds=cfg.timeout_seconds,
        )
        return DenScopeClient(cfg, session=session)

    cfg = load_client_config(
        env_file=env_file,
        overrides=overrides,
        base=base,
        base_url=base_url,
        api_key=api_key,
        private_key=private_key,
        signature_validity_seconds=signature_validity_seconds,
        timeout_seconds=timeout_seconds,
    )
    return DenScopeClient(cfg, session=session)
