"""Utility script to broadcast a notification to a list of forum users."""

from __future__ import annotations

import argparse

from forum_notifications.application.use_cases.notifications import broadcast
from forum_notifications.domain.exceptions import NotificationWriteError
from forum_notifications.infrastructure.database import SessionLocal, initialize_database


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments for the broadcast."""

    parser = argparse.ArgumentParser(
        description="Send a broadcast notification to one or more forum users.",
    )
    parser.add_argument(
        "--data-id",
        required=True,
        help="Identifier of the broadcast article shown to the recipients",
    )
    parser.add_argument(
        "user_ids",
        nargs="+",
        help="Identifiers of the users that receive the broadcast",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Create one broadcast notification per recipient."""

    args = parse_args(argv)

    initialize_database()

    session = SessionLocal()
    try:
        notifications = broadcast(session, user_ids=args.user_ids, data_id=args.data_id)
    except ValueError as exc:
        raise SystemExit(f"Invalid broadcast: {exc}") from exc
    except NotificationWriteError as exc:
        raise SystemExit(f"Could not store the broadcast: {exc}") from exc
    else:
        print(f"Broadcast {args.data_id} sent to {len(notifications)} users")
    finally:
        session.close()


if __name__ == "__main__":
    main()
