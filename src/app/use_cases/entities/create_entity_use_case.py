"""
Create Entity Use Case

Single-record create for personal-or-shared and unregistered entity names.
Organization creation has its own use case.
"""

import logging
from typing import Any, Dict

from libs.result import Result, Return
from src.app.services.access_policy import OWNER_FIELD, resolve_organization_scope
from src.domain.entities import Decision, Identity, Operation, strip_reserved

from .base import EntityUseCase, forbidden, not_exposed, public_document

logger = logging.getLogger(__name__)


class CreateEntityUseCase(EntityUseCase):
    """
    Use case for creating one record.

    Business Rules:
    - id and timestamps in the body are ignored
    - created_by is always the caller
    - an organization_id requires membership of that organization
    """

    async def execute(
        self, identity: Identity, entity_name: str, body: Dict[str, Any]
    ) -> Result[Dict[str, Any]]:
        if not self.policy.is_exposed(entity_name):
            return Return.err(not_exposed(entity_name))

        data = strip_reserved(body)
        data[OWNER_FIELD] = identity.id

        async with self.uow:
            scope = await resolve_organization_scope(self.uow, identity)
            decision = self.policy.decide(
                identity, Operation.create, entity_name, scope, payload=data
            )
            if decision == Decision.deny:
                return Return.err(forbidden("You cannot create this record"))

            record = await self.uow.entities.create(entity_name, data)
            await self.uow.commit()
            logger.info(f"Created {entity_name} {record.id} for user {identity.id}")

            return Return.ok(public_document(entity_name, record))
