"""Aggregate application use cases."""

from .bootstrap import bootstrap_database
from .notifications import notify_upcoming_events
from .users import authenticate_user, create_user

__all__ = [
    "authenticate_user",
    "bootstrap_database",
    "create_user",
    "notify_upcoming_events",
]
