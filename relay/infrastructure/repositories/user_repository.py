"""Persistence layer for user data."""

from __future__ import annotations

from sqlalchemy.orm import Session

from relay.domain.entities import User
from relay.infrastructure.models import UserModel


class UserRepository:
    """Provide read and create operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel(
            id=user.id,
            full_name=user.full_name,
            role=user.role,
            email=user.email,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            full_name=model.full_name,
            role=model.role,
            email=model.email,
        )


__all__ = ["UserRepository"]
