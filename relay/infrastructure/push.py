"""Push delivery through the Firebase Cloud Messaging HTTP v1 API."""

from __future__ import annotations

import asyncio
import base64
import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any

import httpx
from jose import jwt

from relay.config import Settings, get_settings

logger = logging.getLogger(__name__)

FCM_SCOPE = "https://www.googleapis.com/auth/firebase.messaging"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"
FCM_SEND_URL = "https://fcm.googleapis.com/v1/projects/{project_id}/messages:send"
JWT_BEARER_GRANT = "urn:ietf:params:oauth:grant-type:jwt-bearer"
_ASSERTION_LIFETIME_SECONDS = 3600
_TOKEN_REFRESH_MARGIN_SECONDS = 60


class PushConfigurationError(RuntimeError):
    """Raised when the service account credentials cannot be used."""


class PushDeliveryError(RuntimeError):
    """Raised when FCM rejects a message."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass
class PushMessage:
    """Notification title/body plus string key-value data."""

    title: str
    body: str
    data: dict[str, Any] = field(default_factory=dict)
    link: str | None = None

    def to_fcm(self) -> dict[str, Any]:
        data = {key: str(value) for key, value in self.data.items() if value is not None}
        if self.link:
            data["link"] = self.link
        return {"notification": {"title": self.title, "body": self.body}, "data": data}


def load_service_account(settings: Settings) -> dict[str, Any]:
    """Return the service account configured as raw JSON or base64 JSON."""

    raw = settings.fcm_service_account_json
    if not raw and settings.fcm_service_account_b64:
        try:
            raw = base64.b64decode(settings.fcm_service_account_b64).decode("utf-8")
        except (ValueError, UnicodeDecodeError) as exc:
            raise PushConfigurationError("FCM_SERVICE_ACCOUNT_B64 is not valid base64") from exc
    if not raw:
        raise PushConfigurationError(
            "Missing service account. Set FCM_SERVICE_ACCOUNT_JSON or FCM_SERVICE_ACCOUNT_B64."
        )

    try:
        account = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise PushConfigurationError("Service account credentials are not valid JSON") from exc

    private_key = account.get("private_key")
    if isinstance(private_key, str) and "\\n" in private_key:
        account["private_key"] = private_key.replace("\\n", "\n")
    if not account.get("client_email") or not account.get("private_key"):
        raise PushConfigurationError("Service account must define client_email and private_key")
    return account


class FcmPushClient:
    """Send push notifications to device tokens or topics.

    Each :meth:`send` call is independent: a failure raises for that call only
    and nothing is retried here.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._client = http_client or httpx.AsyncClient(timeout=10.0)
        self._owns_client = http_client is None
        self._access_token: str | None = None
        self._access_token_expiry = 0.0
        self._project_id: str | None = None
        self._token_lock = asyncio.Lock()

    @property
    def is_configured(self) -> bool:
        return self._settings.push_enabled

    async def send(
        self,
        message: PushMessage,
        *,
        token: str | None = None,
        topic: str | None = None,
    ) -> bool:
        """Deliver ``message`` to ``token`` or ``topic``.

        Returns ``False`` when push is not configured.
        """

        if not self.is_configured:
            logger.info("FCM configuration incomplete; skipping push delivery")
            return False
        if not token and not topic:
            raise ValueError("FCM message requires token or topic")

        access_token, project_id = await self._get_access_token()
        body = message.to_fcm()
        if token:
            body["token"] = token
        else:
            body["topic"] = topic

        response = await self._client.post(
            FCM_SEND_URL.format(project_id=project_id),
            headers={"Authorization": f"Bearer {access_token}"},
            json={"message": body},
        )
        if response.is_error:
            raise PushDeliveryError(
                f"FCM send failed: {response.status_code} {response.text}",
                status_code=response.status_code,
            )
        return True

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get_access_token(self) -> tuple[str, str]:
        async with self._token_lock:
            now = time.time()
            if self._access_token and now < self._access_token_expiry - _TOKEN_REFRESH_MARGIN_SECONDS:
                return self._access_token, self._project_id or ""

            account = load_service_account(self._settings)
            project_id = self._settings.fcm_project_id or account.get("project_id")
            if not project_id:
                raise PushConfigurationError(
                    "Missing project_id in service account or FCM_PROJECT_ID."
                )

            token_uri = account.get("token_uri") or GOOGLE_TOKEN_URI
            issued_at = int(now)
            assertion = jwt.encode(
                {
                    "iss": account["client_email"],
                    "scope": FCM_SCOPE,
                    "aud": token_uri,
                    "iat": issued_at,
                    "exp": issued_at + _ASSERTION_LIFETIME_SECONDS,
                },
                account["private_key"],
                algorithm="RS256",
            )
            response = await self._client.post(
                token_uri,
                data={"grant_type": JWT_BEARER_GRANT, "assertion": assertion},
            )
            if response.is_error:
                raise PushDeliveryError(
                    f"Unable to acquire FCM access token: {response.status_code} {response.text}",
                    status_code=response.status_code,
                )
            payload = response.json()
            access_token = payload.get("access_token")
            if not access_token:
                raise PushDeliveryError("Unable to acquire FCM access token")

            self._access_token = access_token
            self._access_token_expiry = now + float(payload.get("expires_in", _ASSERTION_LIFETIME_SECONDS))
            self._project_id = project_id
            return access_token, project_id


__all__ = [
    "FcmPushClient",
    "PushConfigurationError",
    "PushDeliveryError",
    "PushMessage",
    "load_service_account",
]
