"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime

USER_ROLE_STUDENT = "student"
USER_ROLE_MEMBER = "member"
USER_ROLE_ADMIN = "admin"
USER_ROLES = (USER_ROLE_STUDENT, USER_ROLE_MEMBER, USER_ROLE_ADMIN)

USER_STATUS_PENDING = "pending"
USER_STATUS_APPROVED = "approved"
USER_STATUSES = (USER_STATUS_PENDING, USER_STATUS_APPROVED)


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    name: str
    email: str
    password: str
    role: str = USER_ROLE_STUDENT
    status: str = USER_STATUS_PENDING
    created_at: datetime | None = None

    def has_role(self, role: str) -> bool:
        """Return ``True`` when the user's role matches ``role``."""

        return self.role.lower() == role.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(USER_ROLE_ADMIN)

    def is_approved(self) -> bool:
        """Return ``True`` once the approval workflow accepted the user."""

        return self.status == USER_STATUS_APPROVED


__all__ = [
    "User",
    "USER_ROLE_STUDENT",
    "USER_ROLE_MEMBER",
    "USER_ROLE_ADMIN",
    "USER_ROLES",
    "USER_STATUS_PENDING",
    "USER_STATUS_APPROVED",
    "USER_STATUSES",
]
