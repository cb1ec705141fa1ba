# conference_api/manage.py

"""
Operator commands.

Usage:
    python -m conference_api.manage init-db
    python -m conference_api.manage create-admin --name Ada --email ada@example.org --password secret1
"""

import argparse
import asyncio
import logging
import sys

from conference_api.auth import create_user, get_user_by_email
from conference_api.database import async_session, engine, init_db
from conference_api.logging_config import configure_logging
from conference_api.models import Role

logger = logging.getLogger(__name__)


async def create_admin(name: str, email: str, password: str) -> int:
    async with async_session() as session:
        if await get_user_by_email(session, email) is not None:
            logger.error("A user with email %s already exists", email)
            return 1
        user = await create_user(session, name, email, password, role=Role.ADMIN)
    logger.info("Created admin %s (%s)", user.id, user.email)
    return 0


async def _run(args) -> int:
    try:
        await init_db()
        if args.command == "create-admin":
            return await create_admin(args.name, args.email, args.password)
        return 0
    finally:
        await engine.dispose()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="conference_api.manage")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Create database tables")

    admin = subparsers.add_parser("create-admin", help="Create an administrator account")
    admin.add_argument("--name", required=True)
    admin.add_argument("--email", required=True)
    admin.add_argument("--password", required=True)

    args = parser.parse_args(argv)
    configure_logging()
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
