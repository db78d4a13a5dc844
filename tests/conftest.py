import base64
import json
from unittest.mock import MagicMock

import pytest
from requests import Response, Session

from denscope import ClientConfig, DenScopeClient

PAYER = "0x1234567890abcdef1234567890abcdef12345678"


@pytest.fixture
def requirement():
    return {
        "scheme": "exact",
        "network": "eip155:42220",
        "amount": "1000",
        "asset": "0xcebA9300f2b948710d2653dD7B07f33A8B32118C",
        "payTo": "0xPayTo",
        "maxTimeoutSeconds": 30,
        "extra": {"assetTransferMethod": "eip3009", "name": "USD Coin", "version": "2"},
    }


@pytest.fixture
def resource():
    return {
        "url": "https://denscope.vercel.app/api/v1/agent/42220/5/score",
        "description": "Trust score query for ERC-8004 agent",
        "mimeType": "application/json",
    }


@pytest.fixture
def challenge(requirement, resource):
    return {
        "x402Version": 2,
        "accepts": [requirement],
        "resource": resource,
        "error": "missing payment header",
    }


def encode(payload):
    return base64.b64encode(json.dumps(payload).encode("utf-8")).decode("ascii")


@pytest.fixture
def make_response():
    def _make(status, body=None, headers=None, text=None):
        response = Response()
        response.status_code = status
        response.encoding = "utf-8"
        if text is not None:
            response._content = text.encode("utf-8")
        elif body is not None:
            response._content = json.dumps(body).encode("utf-8")
        else:
            response._content = b""
        response.headers.update(headers or {})
        return response

    return _make


@pytest.fixture
def payment_required_response(make_response, challenge):
    return make_response(402, challenge, {"payment-required": encode(challenge)})


@pytest.fixture
def signer():
    mock = MagicMock()
    mock.address = PAYER
    mock.sign_typed_data.return_value = "0xsig"
    return mock


@pytest.fixture
def session():
    return MagicMock(spec=Session)


@pytest.fixture
def api_key_client(session):
    return DenScopeClient(ClientConfig.with_api_key("ds_test123"), session=session)


@pytest.fixture
def x402_client(session, signer):
    return DenScopeClient(ClientConfig.with_signer(signer), session=session)
