import logging
from datetime import timedelta

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.app.services.password_hasher import hash_password
from src.app.services.session_store import SessionStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import EntityName

from .signup_dto import SignupCommand, SignupResponse, UserInfo

logger = logging.getLogger(__name__)


class SignupUseCase:
    """
    Signup Use Case

    Command/Response Pattern:
    - Input: SignupCommand (validated business intent)
    - Output: Result[SignupResponse] (structured response)

    Business Logic:
    1. Reject a taken username or email with one indistinguishable error
    2. Hash password with bcrypt
    3. Create the User entity (role=user)
    4. Issue a session (auto-login)
    5. Commit and return the token with the public user fields
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: SignupCommand) -> Result[SignupResponse]:
        """
        Execute signup use case

        Args:
            command: SignupCommand with validated username, email, password

        Returns:
            Result[SignupResponse] with token and user data
            or Error(ACCOUNT_EXISTS) if the username or email is taken
        """
        async with self.uow:
            existing_user = await self.uow.entities.find_one(
                EntityName.user.value, "username", command.username
            )
            if existing_user is None:
                existing_user = await self.uow.entities.find_one(
                    EntityName.user.value, "email", command.email
                )
            if existing_user is not None:
                return Return.err(
                    Error("ACCOUNT_EXISTS", "Username or email already registered")
                )

            user = await self.uow.entities.create(
                EntityName.user.value,
                {
                    "username": command.username,
                    "email": command.email,
                    "name": command.username,
                    "password_hash": hash_password(command.password),
                    "role": "user",
                },
            )
            user_id = user.id

            session = await SessionStore(self.uow).issue(
                user_id,
                command.username,
                command.email,
                timedelta(days=ApplicationConfig.SESSION_TTL_DAYS),
            )

            await self.uow.commit()
            logger.info(f"User {user_id} signed up")

            return Return.ok(
                SignupResponse(
                    message="Account created successfully",
                    token=session.token,
                    user=UserInfo(
                        id=user_id,
                        username=command.username,
                        email=command.email,
                        name=command.username,
                    ),
                    expires_at=session.expires_at,
                )
            )
