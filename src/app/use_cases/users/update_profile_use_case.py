"""
Update Profile Use Case

Lets the current user change their username and/or password.
"""

import logging

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.app.services.password_hasher import hash_password, verify_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import EntityName, Identity

from .dtos import UpdateProfileCommand, UpdateProfileResponse

logger = logging.getLogger(__name__)


class UpdateProfileUseCase:
    """
    Use case for updating the current user's profile.

    Business Rules:
    - Setting a new password requires the current password
    - A supplied current password must be correct
    - The new username must not belong to another user
    - New passwords are bcrypt hashed (replacing any bootstrap hash)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, identity: Identity, command: UpdateProfileCommand
    ) -> Result[UpdateProfileResponse]:
        async with self.uow:
            user = await self.uow.entities.get(EntityName.user.value, identity.id)
            if user is None:
                return Return.err(Error("UNAUTHORIZED", "User no longer exists"))

            data = dict(user.data or {})

            if command.new_password and not command.current_password:
                return Return.err(
                    Error(
                        "INVALID_PASSWORD",
                        "Current password required to set new password",
                    )
                )

            if command.current_password and not verify_password(
                command.current_password, data.get("password_hash", "")
            ):
                return Return.err(
                    Error("INVALID_PASSWORD", "Current password incorrect")
                )

            changed = False

            if command.new_username and command.new_username != data.get("username"):
                taken = await self.uow.entities.find_one(
                    EntityName.user.value, "username", command.new_username
                )
                if taken is not None:
                    return Return.err(
                        Error("USERNAME_TAKEN", "Username already taken")
                    )
                data["username"] = command.new_username
                changed = True

            if command.new_password:
                if len(command.new_password) < ApplicationConfig.PASSWORD_MIN_LENGTH:
                    return Return.err(
                        Error(
                            "INVALID_PASSWORD",
                            f"Password must be at least {ApplicationConfig.PASSWORD_MIN_LENGTH} characters",
                        )
                    )
                data["password_hash"] = hash_password(command.new_password)
                changed = True

            if not changed:
                return Return.ok(
                    UpdateProfileResponse(
                        message="No changes made", username=data.get("username", "")
                    )
                )

            await self.uow.entities.update(EntityName.user.value, user.id, data)
            await self.uow.commit()
            logger.info(f"User {identity.id} updated their profile")

            return Return.ok(
                UpdateProfileResponse(
                    message="Profile updated successfully",
                    username=data["username"],
                )
            )
