"""Use case for creating users."""

from sqlalchemy.orm import Session

from app.domain.entities import (
    USER_ROLE_STUDENT,
    USER_ROLES,
    USER_STATUS_PENDING,
    USER_STATUSES,
    User,
)
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import get_password_hash


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    role: str = USER_ROLE_STUDENT,
    status: str = USER_STATUS_PENDING,
) -> User:
    """Create a new user ensuring unique email addresses."""

    repository = UserRepository(session)

    if repository.get_by_email(email):
        raise ValueError("Email is already registered")
    if role not in USER_ROLES:
        raise ValueError(f"Unknown role '{role}'")
    if status not in USER_STATUSES:
        raise ValueError(f"Unknown status '{status}'")
    if not password:
        raise ValueError("A password is required")

    user = User(
        id=None,
        name=name,
        email=email,
        password=get_password_hash(password),
        role=role,
        status=status,
    )
    return repository.create(user)
