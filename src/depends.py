from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.session_store import SessionStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Identity

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# auto_error=False so a missing header is rendered in our error envelope
security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


async def get_bearer_token(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> str:
    """
    Extract the bearer token from the Authorization header.

    Raises:
        ClientError: 401 if the header is missing or not a Bearer credential
    """
    if credentials is None or not credentials.credentials:
        raise ClientError(
            Error("UNAUTHORIZED", "Missing or malformed Authorization header"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return credentials.credentials


async def get_current_identity(
    token: str = Depends(get_bearer_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> Identity:
    """
    Dependency that validates the session behind the bearer token.

    Every route except signup and login depends on this, so no entity
    operation runs without a live session.

    Raises:
        ClientError: 401 if the token is unknown or the session has expired
    """
    async with uow:
        result = await SessionStore(uow).validate(token)

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_401_UNAUTHORIZED)

    return result.value
