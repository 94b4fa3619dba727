"""Operator entry point: remind members about upcoming events now.

Run from the project root with ``python -m scripts.notify_upcoming_events``.
"""

from __future__ import annotations

import argparse
import logging

from app.application.use_cases.notifications import notify_upcoming_events
from app.config import get_settings
from app.domain.exceptions import StoreUnavailable
from app.infrastructure.database import SessionLocal, dispose_engine, init_engine

logger = logging.getLogger(__name__)


def _positive_days(value: str) -> int:
    try:
        days = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid day count: {value!r}") from None
    if days <= 0:
        raise argparse.ArgumentTypeError("the look-ahead window must be at least one day")
    return days


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments for the reminder batch."""

    parser = argparse.ArgumentParser(
        description="Create reminder notifications for upcoming events.",
    )
    parser.add_argument(
        "--days",
        type=_positive_days,
        default=None,
        help="Look-ahead window in days (default: NOTIFICATION_LOOKAHEAD_DAYS)",
    )
    parser.add_argument(
        "--email",
        action="store_true",
        default=None,
        help="Also email each newly created reminder.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the batch once and return the process exit code."""

    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
    )

    init_engine(get_settings())
    session = SessionLocal()
    try:
        result = notify_upcoming_events(
            session, lookahead_days=args.days, send_email=args.email
        )
    except StoreUnavailable as exc:
        logger.error("Notification process failed: %s", exc)
        return 1
    finally:
        session.close()
        dispose_engine()

    print(
        "Notification process completed:\n"
        f"  Events: {result.events_considered}\n"
        f"  Recipients: {result.recipients_considered}\n"
        f"  Created: {result.created}\n"
        f"  Skipped: {result.skipped}\n"
        f"  Failed: {result.failed}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
