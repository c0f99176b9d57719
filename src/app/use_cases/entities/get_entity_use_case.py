from typing import Any, Dict

from libs.result import Result, Return
from src.domain.entities import Identity, Operation

from .base import EntityUseCase, public_document


class GetEntityUseCase(EntityUseCase):
    """Point read of one record by ID"""

    async def execute(
        self, identity: Identity, entity_name: str, record_id: str
    ) -> Result[Dict[str, Any]]:
        async with self.uow:
            loaded = await self._authorize_existing(
                identity, Operation.read, entity_name, record_id
            )
            if loaded.is_err():
                return Return.err(loaded.error)

            record, _ = loaded.value
            return Return.ok(public_document(entity_name, record))
