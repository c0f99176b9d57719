"""
Access Policy

Decides whether an authenticated identity may perform an operation on an
entity, based on the entity's category, the record's ownership field and the
identity's organization memberships. The policy reads records through the
unit of work and never keeps copies of them.
"""

import logging
from typing import Any, Dict, FrozenSet, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    Decision,
    EntityCategory,
    EntityName,
    EntityRecord,
    Identity,
    Operation,
    OrganizationRole,
)

logger = logging.getLogger(__name__)

OWNER_FIELD = "created_by"
ORGANIZATION_FIELD = "organization_id"

ENTITY_CATEGORIES: Dict[str, EntityCategory] = {
    EntityName.airtable_connection.value: EntityCategory.personal_or_shared,
    EntityName.pdf_template.value: EntityCategory.personal_or_shared,
    EntityName.section.value: EntityCategory.personal_or_shared,
    EntityName.generated_pdf.value: EntityCategory.personal_or_shared,
    EntityName.polling_config.value: EntityCategory.personal_or_shared,
    EntityName.session.value: EntityCategory.auth_only,
    EntityName.user.value: EntityCategory.auth_only,
    EntityName.organization.value: EntityCategory.organization,
    EntityName.organization_member.value: EntityCategory.organization_member,
}


class OrganizationScope(BaseModel):
    """Organizations an identity belongs to, and the subset it owns"""

    model_config = ConfigDict(frozen=True)

    member_ids: FrozenSet[str] = frozenset()
    owned_ids: FrozenSet[str] = frozenset()

    def is_member(self, organization_id: Optional[str]) -> bool:
        return isinstance(organization_id, str) and organization_id in self.member_ids

    def is_owner(self, organization_id: Optional[str]) -> bool:
        return isinstance(organization_id, str) and organization_id in self.owned_ids


async def resolve_organization_scope(
    uow: UnitOfWork, identity: Identity
) -> OrganizationScope:
    """
    Build the identity's organization scope from Organization documents
    (owner_email / member_emails) and OrganizationMember rows.
    """
    if not identity.email:
        return OrganizationScope()

    member_ids = set()
    owned_ids = set()

    organizations = await uow.entities.list(EntityName.organization.value)
    for organization in organizations:
        data = organization.data or {}
        if data.get("owner_email") == identity.email:
            member_ids.add(organization.id)
            owned_ids.add(organization.id)
        elif identity.email in (data.get("member_emails") or []):
            member_ids.add(organization.id)

    memberships = await uow.entities.list(
        EntityName.organization_member.value, {"user_email": identity.email}
    )
    for membership in memberships:
        data = membership.data or {}
        organization_id = data.get(ORGANIZATION_FIELD)
        if not organization_id:
            continue
        member_ids.add(organization_id)
        if data.get("role") == OrganizationRole.owner.value:
            owned_ids.add(organization_id)

    return OrganizationScope(
        member_ids=frozenset(member_ids), owned_ids=frozenset(owned_ids)
    )


def is_creator(identity: Identity, data: Mapping[str, Any]) -> bool:
    return bool(data.get(OWNER_FIELD)) and data.get(OWNER_FIELD) == identity.id


class AccessPolicy:
    """
    Per-entity-category access rules.

    Categories:
    - personal_or_shared: creator only without organization_id; members of
      the organization read/update with it; delete by creator or an owner
    - auth_only (Session, User): never reachable through generic entity routes
    - organization: members read, owners update/delete
    - organization_member: members of that organization read; only owners
      change or remove rows; anyone may remove their own row (leave);
      generic create is denied (join workflow only)
    - unregistered: treated as personal_or_shared unless enforce_registered
    """

    def __init__(
        self,
        enforce_registered: bool = False,
        categories: Optional[Dict[str, EntityCategory]] = None,
    ):
        self.enforce_registered = enforce_registered
        self.categories = dict(ENTITY_CATEGORIES if categories is None else categories)

    def category_for(self, entity_name: str) -> EntityCategory:
        return self.categories.get(entity_name, EntityCategory.unregistered)

    def is_exposed(self, entity_name: str) -> bool:
        """Whether the generic entity routes may touch this entity name at all"""
        category = self.category_for(entity_name)
        if category == EntityCategory.auth_only:
            return False
        if category == EntityCategory.unregistered and self.enforce_registered:
            return False
        return True

    def decide(
        self,
        identity: Identity,
        operation: Operation,
        entity_name: str,
        scope: OrganizationScope,
        record: Optional[EntityRecord] = None,
        payload: Optional[Mapping[str, Any]] = None,
    ) -> Decision:
        """
        Decide Allow or Deny.

        Args:
            record: stored record, for read/update/delete (and list filtering)
            payload: incoming document, for create
        """
        if not self.is_exposed(entity_name):
            decision = Decision.deny
        else:
            category = self.category_for(entity_name)
            if category == EntityCategory.organization:
                decision = self._decide_organization(identity, operation, scope, record)
            elif category == EntityCategory.organization_member:
                decision = self._decide_organization_member(
                    identity, operation, scope, record
                )
            else:
                decision = self._decide_personal_or_shared(
                    identity, operation, scope, record, payload
                )

        if decision == Decision.deny:
            logger.info(
                f"Denied {operation.value} on {entity_name}"
                f"{' ' + record.id if record is not None else ''} for user {identity.id}"
            )
        return decision

    def can_reassign(
        self,
        identity: Identity,
        scope: OrganizationScope,
        existing: Mapping[str, Any],
        new_organization_id: Optional[str],
    ) -> Decision:
        """Moving a shared record between organizations (or back to personal)"""
        current_organization_id = existing.get(ORGANIZATION_FIELD)
        if new_organization_id == current_organization_id:
            return Decision.allow
        if not (is_creator(identity, existing) or scope.is_owner(current_organization_id)):
            return Decision.deny
        if new_organization_id and not scope.is_member(new_organization_id):
            return Decision.deny
        return Decision.allow

    def _decide_personal_or_shared(
        self,
        identity: Identity,
        operation: Operation,
        scope: OrganizationScope,
        record: Optional[EntityRecord],
        payload: Optional[Mapping[str, Any]],
    ) -> Decision:
        if operation == Operation.create:
            organization_id = (payload or {}).get(ORGANIZATION_FIELD)
            if organization_id and not scope.is_member(organization_id):
                return Decision.deny
            return Decision.allow

        if operation == Operation.list and record is None:
            return Decision.allow

        data = (record.data or {}) if record is not None else {}
        organization_id = data.get(ORGANIZATION_FIELD)
        creator = is_creator(identity, data)

        if operation == Operation.delete:
            if creator or scope.is_owner(organization_id):
                return Decision.allow
            return Decision.deny

        # read, list, update
        if creator or scope.is_member(organization_id):
            return Decision.allow
        return Decision.deny

    def _decide_organization(
        self,
        identity: Identity,
        operation: Operation,
        scope: OrganizationScope,
        record: Optional[EntityRecord],
    ) -> Decision:
        if operation == Operation.create:
            return Decision.allow
        if operation == Operation.list and record is None:
            return Decision.allow
        if record is None:
            return Decision.deny

        data = record.data or {}
        is_owner = scope.is_owner(record.id) or (
            bool(identity.email) and data.get("owner_email") == identity.email
        )
        is_member = (
            is_owner
            or scope.is_member(record.id)
            or (bool(identity.email) and identity.email in (data.get("member_emails") or []))
        )

        if operation in (Operation.read, Operation.list):
            return Decision.allow if is_member else Decision.deny
        return Decision.allow if is_owner else Decision.deny

    def _decide_organization_member(
        self,
        identity: Identity,
        operation: Operation,
        scope: OrganizationScope,
        record: Optional[EntityRecord],
    ) -> Decision:
        if operation == Operation.create:
            return Decision.deny
        if operation == Operation.list and record is None:
            return Decision.allow
        if record is None:
            return Decision.deny

        data = record.data or {}
        organization_id = data.get(ORGANIZATION_FIELD)

        if operation in (Operation.read, Operation.list):
            return Decision.allow if scope.is_member(organization_id) else Decision.deny

        if operation == Operation.update:
            return Decision.allow if scope.is_owner(organization_id) else Decision.deny

        # delete; the owner_email person is guarded by RemoveMemberUseCase
        is_self = bool(identity.email) and data.get("user_email") == identity.email
        if scope.is_owner(organization_id) or is_self:
            return Decision.allow
        return Decision.deny
