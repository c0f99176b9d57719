"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from pydantic import BaseModel

from .signup_dto import UserInfo


# ============================================================================
# Response DTOs
# ============================================================================


class LoginResponse(BaseModel):
    """Response for user login use case"""

    token: str
    user: UserInfo
    expires_at: str


class LogoutResponse(BaseModel):
    """Response for logout use case"""

    success: bool
    message: str
