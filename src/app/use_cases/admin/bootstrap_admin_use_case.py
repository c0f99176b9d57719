"""
Use Case: Bootstrap Admin

One-time administrative bootstrap of the first login principal. Runs from
scripts/bootstrap_admin.py, never from an HTTP route.

The password is stored with the unsalted single-pass bootstrap hash, which is
WEAKER than the bcrypt hash used by signup. The admin should set a new
password through PUT /api/auth/update right after the first login; that
rewrites the hash with bcrypt.
"""

import logging

from pydantic import BaseModel

from libs.result import Error, Result, Return
from src.app.services.password_hasher import hash_password_bootstrap
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import EntityName

logger = logging.getLogger(__name__)


class BootstrapAdminResponse(BaseModel):
    """Response DTO for BootstrapAdminUseCase"""

    id: str
    username: str
    created: bool


class BootstrapAdminUseCase:
    """
    Create the admin user once.

    Business Logic:
    1. Look up the username
    2. If it exists, return it untouched (created=False)
    3. Refuse an email already held by another user (ACCOUNT_EXISTS)
    4. Otherwise create a User with role=admin and the bootstrap hash

    Idempotent: running the script twice never creates a second admin
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, username: str, email: str, password: str
    ) -> Result[BootstrapAdminResponse]:
        async with self.uow:
            existing = await self.uow.entities.find_one(
                EntityName.user.value, "username", username
            )
            if existing is not None:
                logger.info(f"Admin user {username} already exists, nothing to do")
                return Return.ok(
                    BootstrapAdminResponse(
                        id=existing.id, username=username, created=False
                    )
                )

            if email and await self.uow.entities.find_one(
                EntityName.user.value, "email", email
            ):
                return Return.err(
                    Error("ACCOUNT_EXISTS", "Email already belongs to another user")
                )

            user = await self.uow.entities.create(
                EntityName.user.value,
                {
                    "username": username,
                    "email": email,
                    "name": "Administrator",
                    "password_hash": hash_password_bootstrap(password),
                    "role": "admin",
                },
            )
            user_id = user.id

            await self.uow.commit()
            logger.warning(
                f"Admin user {username} created with the bootstrap password hash; "
                "change the password after first login"
            )

            return Return.ok(
                BootstrapAdminResponse(id=user_id, username=username, created=True)
            )
