"""
Update Entity Use Case

Full-document replace for personal-or-shared and unregistered entity names.
"""

import logging
from typing import Any, Dict

from libs.result import Result, Return
from src.app.services.access_policy import ORGANIZATION_FIELD, OWNER_FIELD
from src.app.services.redaction import restore_masked
from src.domain.entities import Decision, Identity, Operation, strip_reserved

from .base import EntityUseCase, forbidden, not_found, public_document

logger = logging.getLogger(__name__)


class UpdateEntityUseCase(EntityUseCase):
    """
    Use case for updating one record.

    Business Rules:
    - The stored document is replaced by the body
    - created_by is carried over from the stored document
    - organization_id is carried over when the body leaves it out; an
      explicit null makes the record personal again
    - Moving between organizations needs creator or owner rights plus
      membership of the target organization
    - Masked secrets sent back keep the stored value
    """

    async def execute(
        self,
        identity: Identity,
        entity_name: str,
        record_id: str,
        body: Dict[str, Any],
    ) -> Result[Dict[str, Any]]:
        async with self.uow:
            loaded = await self._authorize_existing(
                identity, Operation.update, entity_name, record_id
            )
            if loaded.is_err():
                return Return.err(loaded.error)

            existing, scope = loaded.value
            stored = dict(existing.data or {})

            data = restore_masked(entity_name, strip_reserved(body), stored)

            if OWNER_FIELD in stored:
                data[OWNER_FIELD] = stored[OWNER_FIELD]
            else:
                data.pop(OWNER_FIELD, None)

            if ORGANIZATION_FIELD not in data and ORGANIZATION_FIELD in stored:
                data[ORGANIZATION_FIELD] = stored[ORGANIZATION_FIELD]

            decision = self.policy.can_reassign(
                identity, scope, stored, data.get(ORGANIZATION_FIELD)
            )
            if decision == Decision.deny:
                return Return.err(
                    forbidden("You cannot move this record to that organization")
                )

            record = await self.uow.entities.update(entity_name, record_id, data)
            if record is None:
                return Return.err(not_found(entity_name))

            await self.uow.commit()
            logger.info(f"Updated {entity_name} {record_id} by user {identity.id}")

            return Return.ok(public_document(entity_name, record))
