"""
Login Use Case

Handles username/password authentication and session issuance.
"""

import logging
from datetime import timedelta

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.app.services.password_hasher import burn_password_check, verify_password
from src.app.services.session_store import SessionStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import EntityName

from .dtos import LoginResponse
from .signup_dto import UserInfo

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login and session issuance.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - Unknown username and wrong password return the same error
    - Creates a new session that expires after SESSION_TTL_DAYS
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, username: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            username: Login name
            password: Plain text password

        Returns:
            Result with LoginResponse containing the session token, or Error
        """
        async with self.uow:
            user = await self.uow.entities.find_one(
                EntityName.user.value, "username", username
            )

            # Always perform a hash check even if user not found
            if user is None:
                burn_password_check()
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid username or password")
                )

            data = user.data or {}
            if not verify_password(password, data.get("password_hash", "")):
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid username or password")
                )

            user_id = user.id
            email = data.get("email") or ""
            session = await SessionStore(self.uow).issue(
                user_id,
                data.get("username", username),
                email,
                timedelta(days=ApplicationConfig.SESSION_TTL_DAYS),
            )

            await self.uow.commit()
            logger.info(f"User {user_id} logged in")

            return Return.ok(
                LoginResponse(
                    token=session.token,
                    user=UserInfo(
                        id=user_id,
                        username=data.get("username", username),
                        email=email,
                        name=data.get("name") or data.get("username", username),
                    ),
                    expires_at=session.expires_at,
                )
            )
