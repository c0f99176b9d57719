"""
Authentication Use Cases

All authentication-related business logic.
"""

from .signup_use_case import SignupUseCase
from .signup_dto import SignupCommand, SignupResponse, UserInfo
from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .dtos import LoginResponse, LogoutResponse

__all__ = [
    # Use Cases
    "SignupUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    # DTOs - Commands
    "SignupCommand",
    # DTOs - Responses
    "SignupResponse",
    "LoginResponse",
    "LogoutResponse",
    # DTOs - Nested Models
    "UserInfo",
]
