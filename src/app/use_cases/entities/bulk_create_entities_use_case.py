"""
Bulk Create Entities Use Case

Creates many records of one entity name. Each item is committed on its own:
a failing item is rolled back and skipped, items before it stay committed,
and the caller gets the records that were actually created, in input order.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Error, Result, Return
from src.app.services.access_policy import OWNER_FIELD, resolve_organization_scope
from src.domain.entities import (
    Decision,
    EntityCategory,
    Identity,
    Operation,
    strip_reserved,
)

from .base import EntityUseCase, forbidden, not_exposed, public_document

logger = logging.getLogger(__name__)

_BULK_CATEGORIES = (EntityCategory.personal_or_shared, EntityCategory.unregistered)


class BulkCreateEntitiesUseCase(EntityUseCase):
    """
    Use case for bulk create.

    Business Rules:
    - Only personal-or-shared (and unregistered) entity names accept bulk
    - Every item must be a JSON object
    - Items the caller may not create are skipped and logged
    - A storage failure on one item does not undo earlier items
    """

    async def execute(
        self, identity: Identity, entity_name: str, items: List[Dict[str, Any]]
    ) -> Result[List[Dict[str, Any]]]:
        if not self.policy.is_exposed(entity_name):
            return Return.err(not_exposed(entity_name))

        if self.policy.category_for(entity_name) not in _BULK_CATEGORIES:
            return Return.err(
                forbidden(f"Bulk create is not supported for {entity_name}")
            )

        if not all(isinstance(item, dict) for item in items):
            return Return.err(
                Error("INVALID_BODY", "Every item must be a JSON object")
            )

        created: List[Dict[str, Any]] = []

        async with self.uow:
            scope = await resolve_organization_scope(self.uow, identity)

            for index, item in enumerate(items):
                data = strip_reserved(item)
                data[OWNER_FIELD] = identity.id

                decision = self.policy.decide(
                    identity, Operation.create, entity_name, scope, payload=data
                )
                if decision == Decision.deny:
                    logger.info(f"Skipped bulk item {index} of {entity_name}: denied")
                    continue

                try:
                    record = await self.uow.entities.create(entity_name, data)
                    await self.uow.commit()
                except SQLAlchemyError as e:
                    await self.uow.rollback()
                    logger.warning(
                        f"Skipped bulk item {index} of {entity_name}: {type(e).__name__}"
                    )
                    continue

                # Documents are taken right away; a later rollback expires instances
                created.append(public_document(entity_name, record))

        logger.info(
            f"Bulk created {len(created)}/{len(items)} {entity_name} for user {identity.id}"
        )
        return Return.ok(created)
