from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from src.api.error import raise_for_error
from src.api.utils.body import parse_model, read_json_object
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    LoginResponse,
    LoginUseCase,
    LogoutResponse,
    LogoutUseCase,
    SignupCommand,
    SignupResponse,
    SignupUseCase,
)
from src.app.use_cases.users import (
    CurrentUserResponse,
    LoadCurrentUserUseCase,
    UpdateProfileCommand,
    UpdateProfileResponse,
    UpdateProfileUseCase,
)
from src.depends import get_bearer_token, get_current_identity, get_unit_of_work
from src.domain.entities import Identity

router = APIRouter(prefix="/auth", tags=["Authentication"])


class SignupRequest(BaseModel):
    """
    Signup HTTP request payload

    Validates incoming HTTP request before converting to SignupCommand.
    """

    username: str = Field(..., min_length=1, max_length=255, description="Login name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(
        ...,
        min_length=ApplicationConfig.PASSWORD_MIN_LENGTH,
        description="User password",
    )


@router.post(
    "/signup", status_code=status.HTTP_201_CREATED, response_model=SignupResponse
)
async def signup(
    request: SignupRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    User Signup (public)

    Creates the account and logs it in.

    Raises:
        - 400 Bad Request: Invalid input
        - 409 Conflict: Username or email already registered
    """
    command = SignupCommand(
        username=request.username, email=request.email, password=request.password
    )

    result = await SignupUseCase(uow).execute(command)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    username: str = Field(..., min_length=1, description="Login name")
    password: str = Field(..., min_length=1, description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(request: LoginRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    User Login (public)

    Raises:
        - 401 Unauthorized: Unknown user or wrong password (same error)
    """
    result = await LoginUseCase(uow).execute(request.username, request.password)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=CurrentUserResponse)
async def get_me(
    identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Current user behind the bearer token"""
    result = await LoadCurrentUserUseCase(uow).execute(identity)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    identity: Identity = Depends(get_current_identity),
    token: str = Depends(get_bearer_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Logout

    Revokes the session server-side; the client should drop the token too.
    """
    result = await LogoutUseCase(uow).execute(token)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.put("/update", status_code=status.HTTP_200_OK, response_model=UpdateProfileResponse)
async def update_profile(
    request: Request,
    identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change username and/or password

    Raises:
        - 400 Bad Request: Missing or wrong current password
        - 409 Conflict: Username already taken
    """
    body = await read_json_object(request)
    command = parse_model(UpdateProfileCommand, body)

    result = await UpdateProfileUseCase(uow).execute(identity, command)
    if result.is_err():
        raise_for_error(result.error)

    return result.value
