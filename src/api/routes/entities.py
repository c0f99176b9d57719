"""
Generic entity routes: /entities/{entity_name}

Verb and query string pick the operation:
- GET ?id=      point read
- GET           filtered list (non-reserved params are equality filters)
- POST ?bulk=1  bulk create from {"items": [...]}
- POST          create
- PUT ?id=      full replace
- DELETE ?id=   delete

Organization and OrganizationMember writes go to the organization use
cases; everything else goes to the generic ones.
"""

import json
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request, Response, status
from starlette.datastructures import QueryParams

from libs.result import Error
from src.api.error import ClientError, raise_for_error
from src.api.utils.body import read_json_object
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.entities import (
    BulkCreateEntitiesUseCase,
    CreateEntityUseCase,
    DeleteEntityUseCase,
    GetEntityUseCase,
    ListEntitiesUseCase,
    UpdateEntityUseCase,
)
from src.app.use_cases.organizations import (
    ChangeMemberRoleUseCase,
    CreateOrganizationUseCase,
    DeleteOrganizationUseCase,
    RemoveMemberUseCase,
    UpdateOrganizationUseCase,
)
from src.depends import get_current_identity, get_unit_of_work
from src.domain.entities import EntityName, Identity

router = APIRouter(prefix="/entities", tags=["Entities"])

RESERVED_QUERY_PARAMS = frozenset({"id", "bulk", "sort", "limit", "where"})
_TRUTHY = {"1", "true", "yes"}


def _invalid_query(message: str) -> ClientError:
    return ClientError(Error("INVALID_QUERY", message), status.HTTP_400_BAD_REQUEST)


def _parse_limit(raw: Optional[str]) -> Optional[int]:
    if raw is None or raw == "":
        return None
    try:
        limit = int(raw)
    except ValueError:
        raise _invalid_query("limit must be a non-negative integer")
    if limit < 0:
        raise _invalid_query("limit must be a non-negative integer")
    return limit


def _parse_filters(params: QueryParams) -> Dict[str, Any]:
    filters: Dict[str, Any] = {
        key: value for key, value in params.items() if key not in RESERVED_QUERY_PARAMS
    }

    where = params.get("where")
    if where:
        try:
            typed = json.loads(where)
        except json.JSONDecodeError:
            raise _invalid_query("where must be a JSON object")
        if not isinstance(typed, dict):
            raise _invalid_query("where must be a JSON object")
        filters.update(typed)

    return filters


def _require_id(params: QueryParams) -> str:
    record_id = params.get("id")
    if not record_id:
        raise ClientError(
            Error("METHOD_NOT_ALLOWED", "An id query parameter is required"),
            status.HTTP_405_METHOD_NOT_ALLOWED,
        )
    return record_id


@router.get("/{entity_name}", status_code=status.HTTP_200_OK)
async def read_entities(
    entity_name: str,
    request: Request,
    identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Point read with ?id=, otherwise a filtered list

    Raises:
        - 403 Forbidden: Entity not exposed, or record not accessible
        - 404 Not Found: No record with this id
        - 400 Bad Request: Malformed limit or where
    """
    params = request.query_params

    if "id" in params:
        result = await GetEntityUseCase(uow).execute(
            identity, entity_name, params["id"]
        )
    else:
        result = await ListEntitiesUseCase(uow).execute(
            identity,
            entity_name,
            filters=_parse_filters(params),
            sort=params.get("sort"),
            limit=_parse_limit(params.get("limit")),
        )

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/{entity_name}", status_code=status.HTTP_201_CREATED)
async def create_entities(
    entity_name: str,
    request: Request,
    identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create one record, or many with ?bulk=1

    Raises:
        - 400 Bad Request: Body is not a JSON object, or items is not a list of objects
        - 403 Forbidden: Entity not exposed, or create not allowed
        - 409 Conflict: Organization join code already in use
    """
    body = await read_json_object(request)

    if request.query_params.get("bulk", "").lower() in _TRUTHY:
        items = body.get("items")
        if not isinstance(items, list):
            raise ClientError(
                Error("INVALID_BODY", "Bulk create expects {\"items\": [...]}"),
                status.HTTP_400_BAD_REQUEST,
            )
        result = await BulkCreateEntitiesUseCase(uow).execute(
            identity, entity_name, items
        )
    elif entity_name == EntityName.organization.value:
        result = await CreateOrganizationUseCase(uow).execute(identity, body)
    else:
        result = await CreateEntityUseCase(uow).execute(identity, entity_name, body)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.put("/{entity_name}", status_code=status.HTTP_200_OK)
async def update_entity(
    entity_name: str,
    request: Request,
    identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Replace a record's document

    Raises:
        - 405 Method Not Allowed: No id
        - 403 Forbidden / 404 Not Found as for reads
        - 400 Bad Request: Invalid member role
    """
    record_id = _require_id(request.query_params)
    body = await read_json_object(request)

    if entity_name == EntityName.organization.value:
        result = await UpdateOrganizationUseCase(uow).execute(identity, record_id, body)
    elif entity_name == EntityName.organization_member.value:
        result = await ChangeMemberRoleUseCase(uow).execute(identity, record_id, body)
    else:
        result = await UpdateEntityUseCase(uow).execute(
            identity, entity_name, record_id, body
        )

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/{entity_name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entity(
    entity_name: str,
    request: Request,
    identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete a record

    Raises:
        - 405 Method Not Allowed: No id
        - 403 Forbidden / 404 Not Found as for reads
    """
    record_id = _require_id(request.query_params)

    if entity_name == EntityName.organization.value:
        result = await DeleteOrganizationUseCase(uow).execute(identity, record_id)
    elif entity_name == EntityName.organization_member.value:
        result = await RemoveMemberUseCase(uow).execute(identity, record_id)
    else:
        result = await DeleteEntityUseCase(uow).execute(identity, entity_name, record_id)

    if result.is_err():
        raise_for_error(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
