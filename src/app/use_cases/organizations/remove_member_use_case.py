"""
Remove Member Use Case

DELETE /api/entities/OrganizationMember?id=... lands here. Covers both an
owner removing a member and a member leaving.
"""

import logging

from libs.result import Result, Return
from src.app.services.access_policy import ORGANIZATION_FIELD
from src.domain.entities import EntityName, Identity, Operation

from src.app.use_cases.entities.base import EntityUseCase, forbidden, not_found

logger = logging.getLogger(__name__)


class RemoveMemberUseCase(EntityUseCase):
    """
    Use case for removing a membership.

    Business Rules:
    - Owners remove anyone but the organization's owner
    - Anyone but the organization's owner may remove their own row (leave)
    - The email is pulled from the organization's member_emails too
    """

    async def execute(self, identity: Identity, record_id: str) -> Result[None]:
        entity_name = EntityName.organization_member.value

        async with self.uow:
            loaded = await self._authorize_existing(
                identity, Operation.delete, entity_name, record_id
            )
            if loaded.is_err():
                return Return.err(loaded.error)

            existing, _ = loaded.value
            stored = existing.data or {}
            user_email = stored.get("user_email")

            organization = await self.uow.entities.get(
                EntityName.organization.value, stored.get(ORGANIZATION_FIELD)
            )
            organization_data = dict(organization.data or {}) if organization else {}
            if organization is not None and organization_data.get("owner_email") == user_email:
                return Return.err(
                    forbidden("The organization owner cannot be removed")
                )

            if not await self.uow.entities.delete(entity_name, record_id):
                return Return.err(not_found(entity_name))

            member_emails = list(organization_data.get("member_emails") or [])
            if organization is not None and user_email in member_emails:
                organization_data["member_emails"] = [
                    e for e in member_emails if e != user_email
                ]
                await self.uow.entities.update(
                    EntityName.organization.value, organization.id, organization_data
                )

            await self.uow.commit()
            logger.info(f"Membership {record_id} removed by user {identity.id}")

            return Return.ok()
