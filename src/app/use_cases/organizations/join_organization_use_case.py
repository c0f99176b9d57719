"""
Join Organization Use Case

Join-by-code workflow: the only way a user becomes a member of an
organization they do not own.
"""

import logging

from libs.result import Error, Result, Return
from src.app.services.access_policy import ORGANIZATION_FIELD
from src.app.services.redaction import redact
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import EntityName, Identity, OrganizationRole

from .dtos import JoinOrganizationResponse
from .join_codes import normalize_join_code

logger = logging.getLogger(__name__)


class JoinOrganizationUseCase:
    """
    Use case for joining an organization with its join code.

    Business Rules:
    - The code is matched after trimming and upper-casing
    - An unknown code is INVALID_JOIN_CODE
    - The caller's email is added to member_emails once
    - At most one OrganizationMember row per (organization_id, user_email);
      re-joining returns the existing row
    - The owner joining their own organization keeps role=owner
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, identity: Identity, join_code: str
    ) -> Result[JoinOrganizationResponse]:
        code = normalize_join_code(join_code)
        if not code:
            return Return.err(Error("INVALID_JOIN_CODE", "Invalid join code"))

        if not identity.email:
            return Return.err(
                Error("BAD_REQUEST", "An email address is required to join")
            )

        async with self.uow:
            organization = await self.uow.entities.find_one(
                EntityName.organization.value, "join_code", code
            )
            if organization is None:
                return Return.err(Error("INVALID_JOIN_CODE", "Invalid join code"))

            organization_data = dict(organization.data or {})
            member_emails = list(organization_data.get("member_emails") or [])
            if identity.email not in member_emails:
                member_emails.append(identity.email)
                organization_data["member_emails"] = member_emails
                organization = await self.uow.entities.update(
                    EntityName.organization.value, organization.id, organization_data
                )

            memberships = await self.uow.entities.list(
                EntityName.organization_member.value,
                {ORGANIZATION_FIELD: organization.id, "user_email": identity.email},
                limit=1,
            )
            if memberships:
                membership = memberships[0]
                joined = False
            else:
                role = (
                    OrganizationRole.owner
                    if organization_data.get("owner_email") == identity.email
                    else OrganizationRole.member
                )
                membership = await self.uow.entities.create(
                    EntityName.organization_member.value,
                    {
                        ORGANIZATION_FIELD: organization.id,
                        "user_email": identity.email,
                        "role": role.value,
                    },
                )
                joined = True

            await self.uow.commit()
            if joined:
                logger.info(f"User {identity.id} joined organization {organization.id}")

            return Return.ok(
                JoinOrganizationResponse(
                    organization=redact(
                        EntityName.organization.value, organization.to_document()
                    ),
                    membership=membership.to_document(),
                )
            )
