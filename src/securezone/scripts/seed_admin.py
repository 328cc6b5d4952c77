"""Create the bootstrap administrator, or promote an existing account."""
from __future__ import annotations

import argparse
import logging
import sys

from sqlalchemy.orm import Session

from securezone.core.settings import settings
from securezone.db.session import SessionLocal, create_tables
from securezone.models import User, UserRole
from securezone.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)


def seed_admin(db: Session, *, email: str, username: str, password: str) -> User:
    """Ensure an ADMIN account exists for ``email``.

    An existing account is promoted and unbanned; its password is left alone.
    """
    users = UserRepository(db)
    user = users.get_by_email(email)
    if user is None:
        user = users.create(email=email, username=username, password=password, role=UserRole.ADMIN)
        logger.info("created admin %s", email)
    else:
        user.role = UserRole.ADMIN
        user.is_banned = False
        logger.info("promoted %s to admin", email)
    db.commit()
    return user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--email", default=settings.admin_email)
    parser.add_argument("--username", default=settings.admin_username)
    parser.add_argument("--password", default=settings.admin_password)
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before seeding (development databases only)",
    )
    args = parser.parse_args(argv)

    if not args.email or not args.password:
        parser.error("an email and password are required (flags or ADMIN_EMAIL/ADMIN_PASSWORD)")

    logging.basicConfig(level=settings.log_level.upper())
    if args.create_tables:
        create_tables()

    with SessionLocal() as db:
        user = seed_admin(db, email=args.email, username=args.username, password=args.password)
        print(f"Admin ready: {user.email} ({user.username})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
