from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.api.utils.body import parse_model, read_json_object
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.organizations import (
    JoinOrganizationResponse,
    JoinOrganizationUseCase,
)
from src.depends import get_current_identity, get_unit_of_work
from src.domain.entities import Identity

router = APIRouter(prefix="/organizations", tags=["Organizations"])


class JoinOrganizationRequest(BaseModel):
    """Join HTTP request payload"""

    join_code: str = Field(..., min_length=1, description="Organization join code")


@router.post(
    "/join", status_code=status.HTTP_200_OK, response_model=JoinOrganizationResponse
)
async def join_organization(
    request: Request,
    identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Join an organization by code

    Idempotent: joining twice returns the existing membership.

    Raises:
        - 400 Bad Request: Missing join_code
        - 404 Not Found: No organization has this code
    """
    body = await read_json_object(request)
    payload = parse_model(JoinOrganizationRequest, body)

    result = await JoinOrganizationUseCase(uow).execute(identity, payload.join_code)
    if result.is_err():
        raise_for_error(result.error)

    return result.value
