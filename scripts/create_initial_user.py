"""Utility script to create an approved user in the database."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.users import create_user
from app.config import get_settings
from app.domain.entities import USER_ROLES, USER_STATUS_APPROVED
from app.infrastructure.database import (
    SessionLocal,
    dispose_engine,
    init_engine,
    initialize_database,
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create an approved user, typically the first administrator.",
    )
    parser.add_argument("--name", default="System Admin", help="Full name of the user")
    parser.add_argument("--email", default="admin@example.com", help="Login email")
    parser.add_argument(
        "--role",
        default="admin",
        choices=USER_ROLES,
        help="Role assigned to the user (default: admin)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Password of the user. Prompted interactively when omitted.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args(argv)

    password = args.password or getpass("Password: ")
    if not password:
        raise SystemExit("No valid password was provided.")

    engine = init_engine(get_settings())
    initialize_database(engine)

    session = SessionLocal()
    try:
        user = create_user(
            session,
            name=args.name,
            email=args.email,
            password=password,
            role=args.role,
            status=USER_STATUS_APPROVED,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the user: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Error saving the user to the database: {exc}") from exc
    else:
        print(
            "User created:\n"
            f"  ID: {user.id}\n"
            f"  Name: {user.name}\n"
            f"  Email: {user.email}\n"
            f"  Role: {user.role}"
        )
    finally:
        session.close()
        dispose_engine()


if __name__ == "__main__":
    main()
