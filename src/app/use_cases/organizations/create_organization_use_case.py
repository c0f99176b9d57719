"""
Create Organization Use Case

POST /api/entities/Organization lands here instead of the generic create.
"""

import logging
from typing import Any, Dict

from libs.result import Error, Result, Return
from src.app.services.access_policy import ORGANIZATION_FIELD, OWNER_FIELD
from src.domain.entities import EntityName, Identity, OrganizationRole, strip_reserved

from src.app.use_cases.entities.base import EntityUseCase, public_document
from .join_codes import generate_join_code, join_code_in_use, normalize_join_code

logger = logging.getLogger(__name__)


class CreateOrganizationUseCase(EntityUseCase):
    """
    Use case for creating an organization.

    Business Rules:
    - The caller becomes the owner (owner_email forced)
    - member_emails is server-managed and starts as just the owner
    - join_code is normalized; a taken code is JOIN_CODE_TAKEN
    - A unique join_code is generated when none is given
    - The owner's OrganizationMember row (role=owner) is written alongside
    """

    async def execute(
        self, identity: Identity, body: Dict[str, Any]
    ) -> Result[Dict[str, Any]]:
        if not identity.email:
            return Return.err(
                Error("BAD_REQUEST", "An email address is required to own an organization")
            )

        data = strip_reserved(body)
        data["owner_email"] = identity.email
        data[OWNER_FIELD] = identity.id
        data["member_emails"] = [identity.email]

        async with self.uow:
            code = normalize_join_code(data.get("join_code"))
            if code:
                if await join_code_in_use(self.uow, code):
                    return Return.err(
                        Error("JOIN_CODE_TAKEN", "Join code already in use")
                    )
            else:
                code = await generate_join_code(self.uow)
                if code is None:
                    return Return.err(
                        Error("INTERNAL_ERROR", "Could not allocate a join code")
                    )
            data["join_code"] = code

            organization = await self.uow.entities.create(
                EntityName.organization.value, data
            )
            await self.uow.entities.create(
                EntityName.organization_member.value,
                {
                    ORGANIZATION_FIELD: organization.id,
                    "user_email": identity.email,
                    "role": OrganizationRole.owner.value,
                },
            )

            await self.uow.commit()
            logger.info(f"User {identity.id} created organization {organization.id}")

            return Return.ok(public_document(EntityName.organization.value, organization))
