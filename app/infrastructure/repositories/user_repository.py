"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.domain.entities import USER_STATUS_APPROVED, User
from app.infrastructure.models import UserModel


class UserRepository:
    """Provide read and create operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(func.lower(UserModel.email) == email.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel(
            name=user.name,
            email=user.email.strip().lower(),
            password=user.password,
            role=user.role,
            status=user.status,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_approved_by_roles(self, roles: Iterable[str]) -> Sequence[User]:
        """Return approved users whose role is one of ``roles``."""

        normalized = sorted({role.strip().lower() for role in roles if role and role.strip()})
        if not normalized:
            return []
        query = (
            self.session.query(UserModel)
            .filter(UserModel.status == USER_STATUS_APPROVED)
            .filter(UserModel.role.in_(normalized))
            .order_by(UserModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            password=model.password,
            role=model.role,
            status=model.status,
            created_at=model.created_at,
        )


__all__ = ["UserRepository"]
