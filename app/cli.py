"""
Operator commands.

    python -m app.cli create-admin <username> [--password PASSWORD]

Without --password the password is prompted for (twice). Running it for an
existing username resets that admin's password and ends their sessions.
"""
import argparse
import getpass
import logging
import sys

from app.config import settings
from app.core.logging import configure_logging
from app.database import SessionLocal
from app.services import auth_service

logger = logging.getLogger(__name__)


def _prompt_password() -> str:
    password = getpass.getpass("Password: ")
    if password != getpass.getpass("Repeat password: "):
        raise ValueError("Passwords do not match")
    return password


def create_admin(username: str, password: str = None) -> int:
    try:
        password = password or _prompt_password()
        db = SessionLocal()
        try:
            user, created = auth_service.create_or_reset_admin(db, username, password)
        finally:
            db.close()
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    action = "Created" if created else "Reset password for"
    logger.info(f"{action} admin {user.username}")
    print(f"{action} admin '{user.username}'")
    return 0


def main(argv=None) -> int:
    configure_logging(settings.log_level)

    parser = argparse.ArgumentParser(prog="python -m app.cli")
    commands = parser.add_subparsers(dest="command", required=True)

    create = commands.add_parser("create-admin", help="create an admin or reset its password")
    create.add_argument("username")
    create.add_argument("--password", help="prompted for when omitted")

    args = parser.parse_args(argv)
    if args.command == "create-admin":
        return create_admin(args.username, args.password)
    return 2


if __name__ == "__main__":
    sys.exit(main())
