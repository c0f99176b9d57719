"""
bootstrap_admin.py: create the first admin user (one-time).

The admin password is stored with the unsalted SHA-256 bootstrap hash, which
is weaker than the bcrypt hash used by signup. Log in once and change the
password through PUT /api/auth/update to move the account to bcrypt.

Usage (from the repository root):
    python -m scripts.bootstrap_admin --username admin --email admin@example.com
"""

import argparse
import asyncio
import getpass
import sys

from sqlmodel import SQLModel

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.log_config import configure_logging
from src.app.use_cases.admin import BootstrapAdminUseCase
from src.depends import AsyncSessionLocal, engine


async def bootstrap(username: str, email: str, password: str) -> int:
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with AsyncSessionLocal() as session:
        result = await BootstrapAdminUseCase(SqlAlchemyUnitOfWork(session)).execute(
            username, email, password
        )

    await engine.dispose()

    if result.is_err():
        print(f"Bootstrap failed: {result.error.code} {result.error.message}", file=sys.stderr)
        return 1

    admin = result.value
    if admin.created:
        print(f"Created admin user '{admin.username}' ({admin.id})")
    else:
        print(f"Admin user '{admin.username}' already exists ({admin.id}); nothing changed")
    return 0


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Create the first admin user")
    parser.add_argument(
        "--username",
        type=str,
        default=ApplicationConfig.ADMIN_USERNAME,
        help=f"Admin login name (default: {ApplicationConfig.ADMIN_USERNAME})",
    )
    parser.add_argument(
        "--email",
        type=str,
        default=ApplicationConfig.ADMIN_EMAIL,
        help=f"Admin email (default: {ApplicationConfig.ADMIN_EMAIL})",
    )
    parser.add_argument(
        "--prompt-password",
        action="store_true",
        help="Read the password from the terminal instead of ADMIN_PASSWORD",
    )
    args = parser.parse_args()

    password = (
        getpass.getpass("Admin password: ")
        if args.prompt_password
        else ApplicationConfig.ADMIN_PASSWORD
    )

    configure_logging(ApplicationConfig.LOG_LEVEL)
    sys.exit(asyncio.run(bootstrap(args.username, args.email, password)))


if __name__ == "__main__":
    main()
