"""
User Use Case DTOs (Data Transfer Objects)
"""

from typing import Optional

from pydantic import BaseModel


class CurrentUserResponse(BaseModel):
    """Response for the current user lookup"""

    id: str
    username: str
    email: str


class UpdateProfileCommand(BaseModel):
    """Profile change requested by the current user"""

    new_username: Optional[str] = None
    current_password: Optional[str] = None
    new_password: Optional[str] = None


class UpdateProfileResponse(BaseModel):
    """Response for update profile use case"""

    message: str
    username: str
