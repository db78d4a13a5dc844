"""
HTTP client for the DenScope reputation API.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Tuple
from urllib.parse import urlencode

import requests

from .config import ClientConfig, AuthMode
from .constants import API_PREFIX, PAYMENT_HEADER
from .errors import AuthenticationError, DenScopeError, PaymentRequiredError
from .models import (
    AgentProfileResponse,
    EventsResponse,
    ScoreResponse,
    SearchResponse,
    SignalsResponse,
)
from .x402 import build_payment_header, decode_payment_required, select_requirement

__all__ = ["DenScopeClient", "handle_response"]

SIGNAL_STATUSES = ("open", "resolved", "all")


def _query_string(params: Iterable[Tuple[str, Any]]) -> str:
    pairs = [(key, str(value)) for key, value in params if value is not None]
    return f"?{urlencode(pairs)}" if pairs else ""


def _error_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


def handle_response(response: requests.Response) -> Dict[str, Any]:
    """
    Return the JSON body of a successful response or raise a typed error.

    401/403 raise :class:`AuthenticationError`, 402 raises
    :class:`PaymentRequiredError`, anything else non-2xx :class:`DenScopeError`.
    """
    status = response.status_code
    if 200 <= status < 300:
        try:
            return response.json()
        except ValueError as exc:
            raise DenScopeError(
                f"Invalid JSON in API response: {status}", status, response.text
            ) from exc

    body = _error_body(response)
    if status in (401, 403):
        raise AuthenticationError(f"Authentication failed: {status}", status, body)
    if status == 402:
        raise PaymentRequiredError("Payment required", body)
    raise DenScopeError(f"API error: {status}", status, body)


class DenScopeClient:
    """
    Client for the DenScope API with bearer-token or x402 authentication.

    With :class:`~denscope.core.config.X402Auth` configured, a 402 response is
    paid and the request retried exactly once. The second response is final.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config or ClientConfig()
        self._owns_session = session is None
        self.session = session or requests.Session()

    def __enter__(self) -> "DenScopeClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    # -- queries -------------------------------------------------------------

    def get_agent(self, chain_id: int, agent_id: int) -> AgentProfileResponse:
        """Get an agent profile."""
        payload = self.request(f"/agent/{chain_id}/{agent_id}")
        return AgentProfileResponse.from_dict(payload)

    def get_score(self, chain_id: int, agent_id: int) -> ScoreResponse:
        """Get an agent's trust score (x402 payable)."""
        payload = self.request(f"/agent/{chain_id}/{agent_id}/score")
        return ScoreResponse.from_dict(payload)

    def get_signals(
        self,
        chain_id: int,
        agent_id: int,
        *,
        status: Optional[str] = None,
    ) -> SignalsResponse:
        """Get an agent's signals and incidents (x402 payable)."""
        if status and status not in SIGNAL_STATUSES:
            raise ValueError(f"status must be one of {', '.join(SIGNAL_STATUSES)}")
        qs = _query_string([("status", status or None)])
        payload = self.request(f"/agent/{chain_id}/{agent_id}/signals{qs}")
        return SignalsResponse.from_dict(payload)

    def get_events(
        self,
        chain_id: int,
        agent_id: int,
        *,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        kind: Optional[str] = None,
    ) -> EventsResponse:
        qs = _query_string([("limit", limit), ("offset", offset), ("kind", kind or None)])
        payload = self.request(f"/agent/{chain_id}/{agent_id}/events{qs}")
        return EventsResponse.from_dict(payload)

    def search(
        self,
        *,
        q: Optional[str] = None,
        chain_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> SearchResponse:
        qs = _query_string([("q", q or None), ("chainId", chain_id), ("limit", limit)])
        payload = self.request(f"/search{qs}")
        return SearchResponse.from_dict(payload)

    # -- dispatch ------------------------------------------------------------

    def url_for(self, path: str) -> str:
        return f"{self.config.base_url}{API_PREFIX}{path}"

    def request(self, path: str) -> Dict[str, Any]:
        """
        GET ``path`` and return the decoded JSON body.

        A 402 answered while x402 auth is configured is paid once: the
        challenge is decoded, the first accepted requirement signed, and the
        request re-sent carrying only ``X-PAYMENT``.
        """
        url = self.url_for(path)
        auth = self.config.auth
        response = self._send(url, self._auth_headers())

        if response.status_code == 402 and auth is not None and auth.mode is AuthMode.X402:
            challenge = decode_payment_required(response)
            requirement = select_requirement(challenge)
            logging.info(
                "Payment required for %s; paying with %s on %s",
                url,
                requirement.scheme,
                requirement.network,
            )
            payment_header = build_payment_header(
                auth.signer,
                requirement,
                challenge.resource,
                validity_seconds=self.config.signature_validity_seconds,
            )
            response = self._send(url, {PAYMENT_HEADER: payment_header})
            logging.info("Paid retry for %s returned %s", url, response.status_code)

        return handle_response(response)

    def _auth_headers(self) -> Dict[str, str]:
        auth = self.config.auth
        if auth is not None and auth.mode is AuthMode.API_KEY:
            return {"Authorization": f"Bearer {auth.api_key}"}
        return {}

    def _send(self, url: str, headers: Dict[str, str]) -> requests.Response:
        logging.debug("GET %s", url)
        return self.session.get(url, headers=headers, timeout=self.config.timeout_seconds)
