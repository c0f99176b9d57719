"""Join code normalization, generation and uniqueness checks."""

import secrets
import string
from typing import Optional

from config import ApplicationConfig
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import EntityName

JOIN_CODE_ALPHABET = string.ascii_uppercase + string.digits
_MAX_GENERATION_ATTEMPTS = 20


def normalize_join_code(code: object) -> str:
    if not isinstance(code, str):
        return ""
    return code.strip().upper()


async def join_code_in_use(
    uow: UnitOfWork, code: str, exclude_id: Optional[str] = None
) -> bool:
    existing = await uow.entities.find_one(
        EntityName.organization.value, "join_code", code
    )
    return existing is not None and existing.id != exclude_id


async def generate_join_code(uow: UnitOfWork) -> Optional[str]:
    """Random uppercase alphanumeric code not held by any organization"""
    for _ in range(_MAX_GENERATION_ATTEMPTS):
        code = "".join(
            secrets.choice(JOIN_CODE_ALPHABET)
            for _ in range(ApplicationConfig.JOIN_CODE_LENGTH)
        )
        if not await join_code_in_use(uow, code):
            return code
    return None
