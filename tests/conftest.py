"""Shared fixtures for the relay test-suite."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

TEST_ROOT = Path(tempfile.mkdtemp(prefix="relay-tests-"))
os.environ["SECRET_KEY"] = "relay-test-secret"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_ROOT / 'default.db'}"
os.environ["AUTH_ERROR_GRACE_SECONDS"] = "0"
for _name in ("FCM_SERVICE_ACCOUNT_JSON", "FCM_SERVICE_ACCOUNT_B64", "FCM_PROJECT_ID"):
    os.environ.pop(_name, None)

from relay.application.context import RelayContext  # noqa: E402
from relay.config import Settings, get_settings, reset_settings_cache  # noqa: E402
from relay.domain.entities import (  # noqa: E402
    APPROVAL_STATUS_APPROVED,
    Answer,
    Identity,
    NotificationToken,
    Question,
    RoomAddress,
    User,
)
from relay.infrastructure.database import build_engine  # noqa: E402
from relay.infrastructure.push import PushDeliveryError, PushMessage  # noqa: E402
from relay.infrastructure.realtime import RelaySession  # noqa: E402
from relay.infrastructure.repositories import (  # noqa: E402
    AnswerRepository,
    NotificationTokenRepository,
    QuestionRepository,
    QuestionWatcherRepository,
    UserRepository,
)
from relay.infrastructure.store import RelayStore  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    reset_settings_cache()
    return get_settings()


@pytest.fixture
def store(tmp_path: Path) -> Iterator[RelayStore]:
    """Return a store bound to a fresh SQLite file."""

    relay_store = RelayStore(build_engine(f"sqlite:///{tmp_path / 'relay.db'}"))
    relay_store.initialize()
    yield relay_store
    relay_store.dispose()


@dataclass
class RecordingPush:
    """Push sender that records every message instead of calling FCM."""

    failing_tokens: set[str] = field(default_factory=set)
    sent: list[tuple[str | None, PushMessage]] = field(default_factory=list)
    closed: bool = False

    async def send(
        self, message: PushMessage, *, token: str | None = None, topic: str | None = None
    ) -> bool:
        if token in self.failing_tokens:
            raise PushDeliveryError(f"token {token} rejected", status_code=404)
        self.sent.append((token or topic, message))
        return True

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def push() -> RecordingPush:
    return RecordingPush()


@pytest.fixture
def context(settings: Settings, store: RelayStore, push: RecordingPush) -> RelayContext:
    return RelayContext.from_settings(settings, store=store, push=push)


class FrameRecorder:
    """Collect the frames a session would have written to its socket."""

    def __init__(self) -> None:
        self.frames: list[dict[str, Any]] = []

    async def __call__(self, frame: dict[str, Any]) -> None:
        self.frames.append(frame)

    def events(self, name: str) -> list[Any]:
        return [frame["data"] for frame in self.frames if frame["type"] == name]

    @property
    def types(self) -> list[str]:
        return [frame["type"] for frame in self.frames]


class AckRecorder:
    """Acknowledgement callback that stores what it was called with."""

    def __init__(self) -> None:
        self.payloads: list[dict[str, Any]] = []

    async def __call__(self, payload: dict[str, Any]) -> None:
        self.payloads.append(payload)

    @property
    def last(self) -> dict[str, Any]:
        return self.payloads[-1]


@pytest.fixture
def ack() -> AckRecorder:
    return AckRecorder()


@pytest.fixture
def make_ack():
    return AckRecorder


@pytest.fixture
def connect(context: RelayContext):
    """Return a factory creating authenticated sessions with recorded frames."""

    def _connect(
        user_id: str, *, role: str = "USER", full_name: str | None = None, questions=()
    ) -> tuple[RelaySession, FrameRecorder]:
        recorder = FrameRecorder()
        session = RelaySession(sender=recorder)
        session.identity = Identity(user_id=user_id, role=role, full_name=full_name or user_id)
        context.rooms.join(session, RoomAddress.user(user_id))
        for question_id in questions:
            context.rooms.join(session, RoomAddress.question(question_id))
        return session, recorder

    return _connect


class Seeder:
    """Write fixture rows through the repositories."""

    def __init__(self, store: RelayStore) -> None:
        self.store = store

    def user(self, user_id: str, *, full_name: str | None = None, role: str = "USER") -> User:
        with self.store.session() as session:
            return UserRepository(session).create(
                User(id=user_id, full_name=full_name or user_id, role=role)
            )

    def question(
        self,
        question_id: str,
        *,
        author_id: str | None,
        title: str = "How do I rotate keys?",
        approval_status: str = APPROVAL_STATUS_APPROVED,
    ) -> Question:
        with self.store.session() as session:
            return QuestionRepository(session).create(
                Question(
                    id=question_id,
                    title=title,
                    author_id=author_id,
                    approval_status=approval_status,
                )
            )

    def answer(
        self, answer_id: str, *, question_id: str, author_id: str, content: str = "Original"
    ) -> Answer:
        with self.store.session() as session:
            return AnswerRepository(session).create(
                Answer(id=answer_id, question_id=question_id, author_id=author_id, content=content)
            )

    def watcher(self, question_id: str, user_id: str) -> None:
        with self.store.session() as session:
            QuestionWatcherRepository(session).add(question_id, user_id)

    def push_token(self, user_id: str, fcm_token: str) -> NotificationToken:
        with self.store.session() as session:
            return NotificationTokenRepository(session).create(
                NotificationToken(id=None, user_id=user_id, fcm_token=fcm_token)
            )


@pytest.fixture
def seed(store: RelayStore) -> Seeder:
    return Seeder(store)
