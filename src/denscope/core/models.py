"""
Immutable records for the x402 wire types and the DenScope API responses.

Every record keeps the payload it was built from in ``raw`` so callers (and
the payment header) can pass server data through untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from hexbytes import HexBytes

__all__ = [
    "AgentEvent",
    "AgentProfile",
    "AgentProfileResponse",
    "AuthorizationAssertion",
    "EventsResponse",
    "Pagination",
    "PaymentChallenge",
    "PaymentExtra",
    "PaymentRequirement",
    "ResourceInfo",
    "ScoreBreakdownEntry",
    "ScoreResponse",
    "SearchAgent",
    "SearchResponse",
    "Signal",
    "SignalsResponse",
    "TrustScore",
]


def _mapping(value: Any) -> Dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}


# --- x402 wire types ---------------------------------------------------------


@dataclass(frozen=True)
class PaymentExtra:
    asset_transfer_method: Optional[str]
    name: Optional[str]
    version: Optional[str]

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "PaymentExtra":
        return cls(
            asset_transfer_method=payload.get("assetTransferMethod"),
            name=payload.get("name"),
            version=payload.get("version"),
        )


@dataclass(frozen=True)
class PaymentRequirement:
    """
    One entry of a challenge's ``accepts`` list.

    ``extra.name`` and ``extra.version`` together with ``asset`` and the
    chain id parsed from ``network`` form the EIP-712 signing domain.
    """

    scheme: Optional[str]
    network: str
    amount: Any
    asset: str
    pay_to: str
    max_timeout_seconds: Optional[int]
    extra: PaymentExtra
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "PaymentRequirement":
        return cls(
            scheme=payload.get("scheme"),
            network=str(payload.get("network", "")),
            amount=payload.get("amount"),
            asset=str(payload.get("asset", "")),
            pay_to=str(payload.get("payTo", "")),
            max_timeout_seconds=payload.get("maxTimeoutSeconds"),
            extra=PaymentExtra.from_dict(_mapping(payload.get("extra"))),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class ResourceInfo:
    """
    Resource descriptor of a challenge.

    ``raw`` is the value exactly as the server sent it (``None`` when absent,
    possibly not an object) and is what gets echoed back when paying.
    """

    url: Optional[str]
    description: Optional[str]
    mime_type: Optional[str]
    raw: Any = field(default=None, compare=False, repr=False)

    @classmethod
    def from_dict(cls, payload: Any) -> "ResourceInfo":
        fields = _mapping(payload)
        return cls(
            url=fields.get("url"),
            description=fields.get("description"),
            mime_type=fields.get("mimeType"),
            raw=payload,
        )


@dataclass(frozen=True)
class PaymentChallenge:
    """Decoded ``payment-required`` header of a 402 response."""

    x402_version: Optional[int]
    accepts: List[PaymentRequirement]
    resource: ResourceInfo
    error: Optional[str]
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "PaymentChallenge":
        return cls(
            x402_version=payload.get("x402Version"),
            accepts=[
                PaymentRequirement.from_dict(item)
                for item in payload.get("accepts") or []
            ],
            resource=ResourceInfo.from_dict(payload.get("resource")),
            error=payload.get("error"),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class AuthorizationAssertion:
    """
    An EIP-3009 ``TransferWithAuthorization`` message.

    Numeric fields are integers for signing; :meth:`to_wire` renders them as
    decimal strings so no precision is lost across JSON boundaries.
    """

    from_address: str
    to_address: str
    value: int
    valid_after: int
    valid_before: int
    nonce: bytes

    @property
    def nonce_hex(self) -> str:
        return "0x" + self.nonce.hex()

    def to_message(self) -> Dict[str, Any]:
        return {
            "from": self.from_address,
            "to": self.to_address,
            "value": self.value,
            "validAfter": self.valid_after,
            "validBefore": self.valid_before,
            "nonce": HexBytes(self.nonce),
        }

    def to_wire(self) -> Dict[str, str]:
        return {
            "from": self.from_address,
            "to": self.to_address,
            "value": str(self.value),
            "validAfter": str(self.valid_after),
            "validBefore": str(self.valid_before),
            "nonce": self.nonce_hex,
        }


# --- API responses -----------------------------------------------------------


@dataclass(frozen=True)
class AgentProfile:
    chain_id: Optional[int]
    agent_id: Optional[int]
    owner: Optional[str]
    uri: Optional[str]
    metadata: Optional[Dict[str, Any]]
    feedback_count: Optional[int]
    positive_count: Optional[int]
    negative_count: Optional[int]
    first_seen: Optional[str]
    last_seen: Optional[str]
    claimed: bool
    claimed_by: Optional[str]
    display_name: Optional[str]
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "AgentProfile":
        return cls(
            chain_id=payload.get("chainId"),
            agent_id=payload.get("agentId"),
            owner=payload.get("owner"),
            uri=payload.get("uri"),
            metadata=payload.get("metadata"),
            feedback_count=payload.get("feedbackCount"),
            positive_count=payload.get("positiveCount"),
            negative_count=payload.get("negativeCount"),
            first_seen=payload.get("firstSeen"),
            last_seen=payload.get("lastSeen"),
            claimed=bool(payload.get("claimed")),
            claimed_by=payload.get("claimedBy"),
            display_name=payload.get("displayName"),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class AgentProfileResponse:
    agent: AgentProfile
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "AgentProfileResponse":
        return cls(
            agent=AgentProfile.from_dict(_mapping(payload.get("agent"))),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class ScoreBreakdownEntry:
    value: Optional[float]
    weight: Optional[float]

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ScoreBreakdownEntry":
        return cls(value=payload.get("value"), weight=payload.get("weight"))


@dataclass(frozen=True)
class TrustScore:
    value: Optional[float]
    confidence: Optional[str]
    breakdown: Dict[str, ScoreBreakdownEntry]
    stats: Dict[str, Any]
    updated_at: Optional[str]
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "TrustScore":
        breakdown = {
            name: ScoreBreakdownEntry.from_dict(_mapping(entry))
            for name, entry in _mapping(payload.get("breakdown")).items()
        }
        return cls(
            value=payload.get("value"),
            confidence=payload.get("confidence"),
            breakdown=breakdown,
            stats=_mapping(payload.get("stats")),
            updated_at=payload.get("updatedAt"),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class ScoreResponse:
    score: TrustScore
    formula: Optional[str]
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ScoreResponse":
        return cls(
            score=TrustScore.from_dict(_mapping(payload.get("score"))),
            formula=payload.get("formula"),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class Signal:
    id: Optional[str]
    signal_kind: Optional[str]
    severity: Optional[str]
    title: Optional[str]
    description: Optional[str]
    why_it_matters: Optional[str]
    source_tx_hash: Optional[str]
    triggered_at: Optional[str]
    resolved_at: Optional[str]

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Signal":
        return cls(
            id=payload.get("id"),
            signal_kind=payload.get("signalKind"),
            severity=payload.get("severity"),
            title=payload.get("title"),
            description=payload.get("description"),
            why_it_matters=payload.get("whyItMatters"),
            source_tx_hash=payload.get("sourceTxHash"),
            triggered_at=payload.get("triggeredAt"),
            resolved_at=payload.get("resolvedAt"),
        )


@dataclass(frozen=True)
class SignalsResponse:
    signals: List[Signal]
    count: int
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "SignalsResponse":
        signals = [Signal.from_dict(item) for item in payload.get("signals") or []]
        return cls(
            signals=signals,
            count=payload.get("count", len(signals)),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class AgentEvent:
    id: Optional[int]
    kind: Optional[str]
    block_number: Optional[int]
    tx_hash: Optional[str]
    log_index: Optional[int]
    data: Dict[str, Any]
    event_timestamp: Optional[str]
    created_at: Optional[str]

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "AgentEvent":
        return cls(
            id=payload.get("id"),
            kind=payload.get("kind"),
            block_number=payload.get("blockNumber"),
            tx_hash=payload.get("txHash"),
            log_index=payload.get("logIndex"),
            data=_mapping(payload.get("data")),
            event_timestamp=payload.get("eventTimestamp"),
            created_at=payload.get("createdAt"),
        )


@dataclass(frozen=True)
class Pagination:
    total: Optional[int]
    limit: Optional[int]
    offset: Optional[int]
    has_more: bool

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Pagination":
        return cls(
            total=payload.get("total"),
            limit=payload.get("limit"),
            offset=payload.get("offset"),
            has_more=bool(payload.get("hasMore")),
        )


@dataclass(frozen=True)
class EventsResponse:
    events: List[AgentEvent]
    pagination: Pagination
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "EventsResponse":
        return cls(
            events=[AgentEvent.from_dict(item) for item in payload.get("events") or []],
            pagination=Pagination.from_dict(_mapping(payload.get("pagination"))),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class SearchAgent:
    chain_id: Optional[int]
    agent_id: Optional[int]
    owner: Optional[str]
    uri: Optional[str]
    feedback_count: Optional[int]
    positive_count: Optional[int]
    negative_count: Optional[int]

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "SearchAgent":
        return cls(
            chain_id=payload.get("chainId"),
            agent_id=payload.get("agentId"),
            owner=payload.get("owner"),
            uri=payload.get("uri"),
            feedback_count=payload.get("feedbackCount"),
            positive_count=payload.get("positiveCount"),
            negative_count=payload.get("negativeCount"),
        )


@dataclass(frozen=True)
class SearchResponse:
    agents: List[SearchAgent]
    count: int
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "SearchResponse":
        agents = [SearchAgent.from_dict(item) for item in payload.get("agents") or []]
        return cls(
            agents=agents,
            count=payload.get("count", len(agents)),
            raw=dict(payload),
        )
