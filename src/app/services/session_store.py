"""
Session Store

Sessions are entity records (entity_name="Session") whose document carries
an opaque bearer token. Validation looks the token up by document field,
never by record ID. Expiry is fixed at issue time and never extended.

The store runs inside the caller's unit of work; it does not commit.
"""

import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import Optional

from pydantic import BaseModel

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import EntityName, Identity

logger = logging.getLogger(__name__)


class IssuedSession(BaseModel):
    """Token handed to the client after login or signup"""

    token: str
    expires_at: str


def _parse_expiry(raw: object) -> Optional[datetime]:
    if not isinstance(raw, str):
        return None
    try:
        value = datetime.fromisoformat(raw)
    except ValueError:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value


class SessionStore:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def issue(
        self, user_id: str, username: str, email: str, ttl: timedelta
    ) -> IssuedSession:
        """Create a Session record with expires_at = now + ttl"""
        token = secrets.token_urlsafe(32)
        expires_at = (datetime.now(UTC) + ttl).isoformat()

        await self.uow.entities.create(
            EntityName.session.value,
            {
                "token": token,
                "user_id": user_id,
                "username": username,
                "email": email,
                "expires_at": expires_at,
            },
        )
        return IssuedSession(token=token, expires_at=expires_at)

    async def validate(self, token: str) -> Result[Identity]:
        """
        Classify a bearer token.

        Returns:
            Result with the Identity, or Error INVALID_TOKEN / SESSION_EXPIRED
        """
        if not token:
            return Return.err(Error("INVALID_TOKEN", "Invalid or expired session"))

        record = await self.uow.entities.find_one(
            EntityName.session.value, "token", token
        )
        if record is None:
            return Return.err(Error("INVALID_TOKEN", "Invalid or expired session"))

        data = record.data or {}
        expires_at = _parse_expiry(data.get("expires_at"))
        if expires_at is None:
            logger.warning(f"Session {record.id} has an unreadable expiry")
            return Return.err(Error("INVALID_TOKEN", "Invalid or expired session"))

        if expires_at < datetime.now(UTC):
            return Return.err(Error("SESSION_EXPIRED", "Session expired"))

        return Return.ok(
            Identity(
                id=str(data.get("user_id", "")),
                username=str(data.get("username", "")),
                email=data.get("email") or "",
            )
        )

    async def revoke(self, token: str) -> bool:
        """Delete the Session record holding this token"""
        record = await self.uow.entities.find_one(
            EntityName.session.value, "token", token
        )
        if record is None:
            return False
        return await self.uow.entities.delete(EntityName.session.value, record.id)
