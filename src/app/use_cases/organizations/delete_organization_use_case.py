import logging

from libs.result import Result, Return
from src.app.services.access_policy import ORGANIZATION_FIELD
from src.domain.entities import EntityName, Identity, Operation

from src.app.use_cases.entities.base import EntityUseCase, not_found

logger = logging.getLogger(__name__)


class DeleteOrganizationUseCase(EntityUseCase):
    """Owner-only delete; the organization's member rows go with it"""

    async def execute(self, identity: Identity, record_id: str) -> Result[None]:
        entity_name = EntityName.organization.value

        async with self.uow:
            loaded = await self._authorize_existing(
                identity, Operation.delete, entity_name, record_id
            )
            if loaded.is_err():
                return Return.err(loaded.error)

            memberships = await self.uow.entities.list(
                EntityName.organization_member.value, {ORGANIZATION_FIELD: record_id}
            )
            for membership in memberships:
                await self.uow.entities.delete(
                    EntityName.organization_member.value, membership.id
                )

            if not await self.uow.entities.delete(entity_name, record_id):
                return Return.err(not_found(entity_name))

            await self.uow.commit()
            logger.info(
                f"Organization {record_id} deleted by user {identity.id} "
                f"({len(memberships)} memberships removed)"
            )

            return Return.ok()
