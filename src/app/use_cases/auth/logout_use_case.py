"""
Logout Use Case

Revokes the caller's session server-side; the client drops its credential.
"""

from libs.result import Result, Return
from src.app.services.session_store import SessionStore
from src.app.services.unit_of_work import UnitOfWork

from .dtos import LogoutResponse


class LogoutUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[LogoutResponse]:
        async with self.uow:
            await SessionStore(self.uow).revoke(token)
            await self.uow.commit()

        return Return.ok(
            LogoutResponse(success=True, message="Logged out; discard your token")
        )
