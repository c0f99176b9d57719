"""
Update Organization Use Case

Owner-only full replace of an Organization document.
"""

import logging
from typing import Any, Dict

from libs.result import Error, Result, Return
from src.app.services.access_policy import OWNER_FIELD
from src.domain.entities import EntityName, Identity, Operation, strip_reserved

from src.app.use_cases.entities.base import EntityUseCase, not_found, public_document
from .join_codes import join_code_in_use, normalize_join_code

logger = logging.getLogger(__name__)


class UpdateOrganizationUseCase(EntityUseCase):
    """
    Use case for updating an organization.

    Business Rules:
    - Only owners may update
    - owner_email and created_by cannot change
    - member_emails is kept as stored; only join and member removal change it
    - An omitted join_code keeps the stored one; a new one must be unused
    """

    async def execute(
        self, identity: Identity, record_id: str, body: Dict[str, Any]
    ) -> Result[Dict[str, Any]]:
        entity_name = EntityName.organization.value

        async with self.uow:
            loaded = await self._authorize_existing(
                identity, Operation.update, entity_name, record_id
            )
            if loaded.is_err():
                return Return.err(loaded.error)

            existing, _ = loaded.value
            stored = dict(existing.data or {})
            owner_email = stored.get("owner_email")

            data = strip_reserved(body)
            data["owner_email"] = owner_email
            if OWNER_FIELD in stored:
                data[OWNER_FIELD] = stored[OWNER_FIELD]
            else:
                data.pop(OWNER_FIELD, None)

            member_emails = list(stored.get("member_emails") or [])
            if owner_email and owner_email not in member_emails:
                member_emails.insert(0, owner_email)
            data["member_emails"] = member_emails

            code = normalize_join_code(data.get("join_code"))
            if not code:
                code = stored.get("join_code")
            elif code != stored.get("join_code") and await join_code_in_use(
                self.uow, code, exclude_id=record_id
            ):
                return Return.err(Error("JOIN_CODE_TAKEN", "Join code already in use"))
            data["join_code"] = code

            record = await self.uow.entities.update(entity_name, record_id, data)
            if record is None:
                return Return.err(not_found(entity_name))

            await self.uow.commit()
            logger.info(f"Organization {record_id} updated by user {identity.id}")

            return Return.ok(public_document(entity_name, record))
