"""
Shared plumbing for entity use cases: policy construction, the
existence-then-permission check and the common error values.
"""

from typing import Any, Dict, Optional, Tuple

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.app.services.access_policy import (
    AccessPolicy,
    OrganizationScope,
    resolve_organization_scope,
)
from src.app.services.redaction import redact
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Decision, EntityRecord, Identity, Operation


def not_exposed(entity_name: str) -> Error:
    return Error(
        "ENTITY_NOT_EXPOSED",
        f"Entity '{entity_name}' is not available through this endpoint",
    )


def not_found(entity_name: str) -> Error:
    return Error("ENTITY_NOT_FOUND", f"{entity_name} not found")


def forbidden(message: str = "You do not have access to this record") -> Error:
    return Error("FORBIDDEN", message)


def public_document(entity_name: str, record: EntityRecord) -> Dict[str, Any]:
    return redact(entity_name, record.to_document())


class EntityUseCase:
    """Base class for use cases that go through the access policy"""

    def __init__(self, uow: UnitOfWork, policy: Optional[AccessPolicy] = None):
        self.uow = uow
        self.policy = policy or AccessPolicy(
            enforce_registered=ApplicationConfig.ENFORCE_REGISTERED_ENTITIES
        )

    async def _authorize_existing(
        self,
        identity: Identity,
        operation: Operation,
        entity_name: str,
        record_id: str,
    ) -> Result[Tuple[EntityRecord, OrganizationScope]]:
        """
        Load a record and check the operation on it.

        A missing record is ENTITY_NOT_FOUND whatever the caller's rights;
        an existing record the caller may not touch is FORBIDDEN.
        """
        if not self.policy.is_exposed(entity_name):
            return Return.err(not_exposed(entity_name))

        record = await self.uow.entities.get(entity_name, record_id)
        if record is None:
            return Return.err(not_found(entity_name))

        scope = await resolve_organization_scope(self.uow, identity)
        decision = self.policy.decide(
            identity, operation, entity_name, scope, record=record
        )
        if decision == Decision.deny:
            return Return.err(forbidden())

        return Return.ok((record, scope))
