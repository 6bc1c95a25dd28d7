"""Tests for the FCM HTTP v1 push client."""

from __future__ import annotations

import base64
import json

import httpx
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from jose import jwt

from relay.config import Settings
from relay.infrastructure.push import (
    FCM_SCOPE,
    GOOGLE_TOKEN_URI,
    FcmPushClient,
    PushConfigurationError,
    PushDeliveryError,
    PushMessage,
    load_service_account,
)

pytestmark = pytest.mark.anyio


@pytest.fixture(scope="module")
def service_account() -> dict:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")
    return {
        "project_id": "relay-project",
        "client_email": "relay@relay-project.iam.gserviceaccount.com",
        "private_key": pem,
    }


def _settings(**overrides) -> Settings:
    return Settings(secret_key="push-tests", **overrides)


class _FakeGoogle:
    """Answer token exchanges and message sends like the Google endpoints."""

    def __init__(self, *, send_status: int = 200) -> None:
        self.send_status = send_status
        self.token_requests: list[httpx.Request] = []
        self.send_requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if str(request.url) == GOOGLE_TOKEN_URI:
            self.token_requests.append(request)
            return httpx.Response(200, json={"access_token": "google-access", "expires_in": 3600})
        self.send_requests.append(request)
        if self.send_status >= 400:
            return httpx.Response(self.send_status, json={"error": {"status": "NOT_FOUND"}})
        return httpx.Response(200, json={"name": "projects/relay-project/messages/1"})


async def test_unconfigured_client_skips_delivery() -> None:
    google = _FakeGoogle()
    async with httpx.AsyncClient(transport=httpx.MockTransport(google)) as http_client:
        client = FcmPushClient(_settings(), http_client=http_client)

        assert await client.send(PushMessage(title="t", body="b"), token="device") is False

    assert google.token_requests == []
    assert google.send_requests == []


async def test_send_exchanges_assertion_and_posts_message(service_account) -> None:
    google = _FakeGoogle()
    settings = _settings(fcm_service_account_json=json.dumps(service_account))
    message = PushMessage(
        title="New answer",
        body="Cache invalidation",
        data={"questionId": "q-1", "answerId": "ans-1", "ignored": None},
        link="/questions/q-1#answer-ans-1",
    )

    async with httpx.AsyncClient(transport=httpx.MockTransport(google)) as http_client:
        client = FcmPushClient(settings, http_client=http_client)
        assert await client.send(message, token="device-1") is True
        assert await client.send(message, topic="question-q-1") is True

    assert len(google.token_requests) == 1
    form = dict(
        pair.split("=", 1) for pair in google.token_requests[0].content.decode().split("&")
    )
    assert form["grant_type"] == "urn%3Aietf%3Aparams%3Aoauth%3Agrant-type%3Ajwt-bearer"
    claims = jwt.get_unverified_claims(form["assertion"])
    assert claims["iss"] == service_account["client_email"]
    assert claims["scope"] == FCM_SCOPE
    assert claims["aud"] == GOOGLE_TOKEN_URI

    first, second = google.send_requests
    assert str(first.url) == (
        "https://fcm.googleapis.com/v1/projects/relay-project/messages:send"
    )
    assert first.headers["authorization"] == "Bearer google-access"
    body = json.loads(first.content)["message"]
    assert body["token"] == "device-1"
    assert body["notification"] == {"title": "New answer", "body": "Cache invalidation"}
    assert body["data"] == {
        "questionId": "q-1",
        "answerId": "ans-1",
        "link": "/questions/q-1#answer-ans-1",
    }
    assert json.loads(second.content)["message"]["topic"] == "question-q-1"


async def test_rejected_send_raises_delivery_error(service_account) -> None:
    google = _FakeGoogle(send_status=404)
    settings = _settings(fcm_service_account_json=json.dumps(service_account))

    async with httpx.AsyncClient(transport=httpx.MockTransport(google)) as http_client:
        client = FcmPushClient(settings, http_client=http_client)
        with pytest.raises(PushDeliveryError) as excinfo:
            await client.send(PushMessage(title="t", body="b"), token="stale")

    assert excinfo.value.status_code == 404


async def test_destination_is_required(service_account) -> None:
    settings = _settings(fcm_service_account_json=json.dumps(service_account))
    async with httpx.AsyncClient(transport=httpx.MockTransport(_FakeGoogle())) as http_client:
        client = FcmPushClient(settings, http_client=http_client)
        with pytest.raises(ValueError):
            await client.send(PushMessage(title="t", body="b"))


def test_base64_service_account_with_escaped_newlines(service_account) -> None:
    escaped = dict(service_account, private_key=service_account["private_key"].replace("\n", "\\n"))
    encoded = base64.b64encode(json.dumps(escaped).encode()).decode()

    account = load_service_account(_settings(fcm_service_account_b64=encoded))

    assert account["private_key"] == service_account["private_key"]


@pytest.mark.parametrize(
    "overrides",
    [
        {},
        {"fcm_service_account_json": "{not json"},
        {"fcm_service_account_json": json.dumps({"client_email": "x@example.com"})},
        {"fcm_service_account_b64": "***"},
    ],
)
def test_unusable_service_accounts_are_reported(overrides) -> None:
    with pytest.raises(PushConfigurationError):
        load_service_account(_settings(**overrides))
