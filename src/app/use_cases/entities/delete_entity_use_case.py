import logging

from libs.result import Result, Return
from src.domain.entities import Identity, Operation

from .base import EntityUseCase, not_found

logger = logging.getLogger(__name__)


class DeleteEntityUseCase(EntityUseCase):
    """Delete one record; NotFound is never reported as success"""

    async def execute(
        self, identity: Identity, entity_name: str, record_id: str
    ) -> Result[None]:
        async with self.uow:
            loaded = await self._authorize_existing(
                identity, Operation.delete, entity_name, record_id
            )
            if loaded.is_err():
                return Return.err(loaded.error)

            deleted = await self.uow.entities.delete(entity_name, record_id)
            if not deleted:
                return Return.err(not_found(entity_name))

            await self.uow.commit()
            logger.info(f"Deleted {entity_name} {record_id} by user {identity.id}")

            return Return.ok()
