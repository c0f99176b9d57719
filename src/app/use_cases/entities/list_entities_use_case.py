"""
List Entities Use Case

Filtered, sorted listing of one entity name, restricted to the records the
caller can see.
"""

from typing import Any, Dict, List, Optional

from config import ApplicationConfig
from libs.result import Result, Return
from src.app.services.access_policy import resolve_organization_scope
from src.domain.entities import Decision, Identity, Operation

from .base import EntityUseCase, not_exposed, public_document


class ListEntitiesUseCase(EntityUseCase):
    """
    Use case for listing records.

    Business Rules:
    - Filters are exact-match equality over document fields, ANDed
    - Default sort comes from LIST_DEFAULT_SORT; ties keep insertion order
    - Records the caller cannot read are dropped silently
    - limit applies after visibility filtering, capped at LIST_MAX_LIMIT
    """

    async def execute(
        self,
        identity: Identity,
        entity_name: str,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Result[List[Dict[str, Any]]]:
        if not self.policy.is_exposed(entity_name):
            return Return.err(not_exposed(entity_name))

        if limit is None:
            limit = ApplicationConfig.LIST_DEFAULT_LIMIT
        limit = max(0, min(limit, ApplicationConfig.LIST_MAX_LIMIT))

        async with self.uow:
            scope = await resolve_organization_scope(self.uow, identity)
            records = await self.uow.entities.list(
                entity_name,
                filters=filters,
                sort=sort or ApplicationConfig.LIST_DEFAULT_SORT,
            )

            documents = []
            for record in records:
                if len(documents) >= limit:
                    break
                decision = self.policy.decide(
                    identity, Operation.list, entity_name, scope, record=record
                )
                if decision == Decision.allow:
                    documents.append(public_document(entity_name, record))

            return Return.ok(documents)
