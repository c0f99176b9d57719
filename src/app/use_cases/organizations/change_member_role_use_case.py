"""
Change Member Role Use Case

PUT /api/entities/OrganizationMember?id=... lands here.
"""

import logging
from typing import Any, Dict

from libs.result import Error, Result, Return
from src.app.services.access_policy import ORGANIZATION_FIELD
from src.domain.entities import (
    EntityName,
    Identity,
    Operation,
    OrganizationRole,
    strip_reserved,
)

from src.app.use_cases.entities.base import EntityUseCase, forbidden, not_found, public_document

logger = logging.getLogger(__name__)

_ROLES = {role.value for role in OrganizationRole}


class ChangeMemberRoleUseCase(EntityUseCase):
    """
    Use case for changing a member's role.

    Business Rules:
    - Only owners of the organization may change roles
    - role must be owner or member (INVALID_ROLE)
    - organization_id and user_email never change
    - The organization's owner (owner_email) cannot be demoted
    """

    async def execute(
        self, identity: Identity, record_id: str, body: Dict[str, Any]
    ) -> Result[Dict[str, Any]]:
        entity_name = EntityName.organization_member.value

        async with self.uow:
            loaded = await self._authorize_existing(
                identity, Operation.update, entity_name, record_id
            )
            if loaded.is_err():
                return Return.err(loaded.error)

            existing, _ = loaded.value
            stored = dict(existing.data or {})

            role = body.get("role", stored.get("role"))
            if role not in _ROLES:
                return Return.err(
                    Error("INVALID_ROLE", "Role must be one of: owner, member")
                )

            organization = await self.uow.entities.get(
                EntityName.organization.value, stored.get(ORGANIZATION_FIELD)
            )
            if (
                organization is not None
                and (organization.data or {}).get("owner_email") == stored.get("user_email")
                and role != OrganizationRole.owner.value
            ):
                return Return.err(
                    forbidden("The organization owner's role cannot be changed")
                )

            data = strip_reserved(body)
            data[ORGANIZATION_FIELD] = stored.get(ORGANIZATION_FIELD)
            data["user_email"] = stored.get("user_email")
            data["role"] = role

            record = await self.uow.entities.update(entity_name, record_id, data)
            if record is None:
                return Return.err(not_found(entity_name))

            await self.uow.commit()
            logger.info(
                f"Membership {record_id} set to role {role} by user {identity.id}"
            )

            return Return.ok(public_document(entity_name, record))
