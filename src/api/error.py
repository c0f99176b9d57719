from typing import NoReturn

from fastapi import status
from libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


# Use case error code -> HTTP status; unknown codes are server errors
ERROR_STATUS = {
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "INVALID_TOKEN": status.HTTP_401_UNAUTHORIZED,
    "SESSION_EXPIRED": status.HTTP_401_UNAUTHORIZED,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "ENTITY_NOT_EXPOSED": status.HTTP_403_FORBIDDEN,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "ENTITY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVALID_JOIN_CODE": status.HTTP_404_NOT_FOUND,
    "METHOD_NOT_ALLOWED": status.HTTP_405_METHOD_NOT_ALLOWED,
    "ACCOUNT_EXISTS": status.HTTP_409_CONFLICT,
    "USERNAME_TAKEN": status.HTTP_409_CONFLICT,
    "JOIN_CODE_TAKEN": status.HTTP_409_CONFLICT,
    "BAD_REQUEST": status.HTTP_400_BAD_REQUEST,
    "INVALID_BODY": status.HTTP_400_BAD_REQUEST,
    "INVALID_ROLE": status.HTTP_400_BAD_REQUEST,
    "INVALID_PASSWORD": status.HTTP_400_BAD_REQUEST,
    "INVALID_QUERY": status.HTTP_400_BAD_REQUEST,
}


def raise_for_error(error: Error) -> NoReturn:
    """Translate a use case Error into the matching HTTP exception"""
    status_code = ERROR_STATUS.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
