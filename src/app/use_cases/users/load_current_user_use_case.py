"""
Load Current User Use Case

Loads the current user behind a validated session.
"""

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import EntityName, Identity

from .dtos import CurrentUserResponse


class LoadCurrentUserUseCase:
    """
    Use case for loading the current user.

    Business Rules:
    - Identity comes from the session resolved by the dispatcher
    - The User record must still exist
    - Only public fields are returned (never the password hash)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity) -> Result[CurrentUserResponse]:
        async with self.uow:
            user = await self.uow.entities.get(EntityName.user.value, identity.id)
            if user is None:
                return Return.err(Error("UNAUTHORIZED", "User no longer exists"))

            data = user.data or {}
            return Return.ok(
                CurrentUserResponse(
                    id=user.id,
                    username=data.get("username", identity.username),
                    email=data.get("email") or identity.email,
                )
            )
