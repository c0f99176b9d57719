"""
User Management Use Cases

All user-related business logic.
"""

from .dtos import CurrentUserResponse, UpdateProfileCommand, UpdateProfileResponse
from .load_current_user_use_case import LoadCurrentUserUseCase
from .update_profile_use_case import UpdateProfileUseCase

__all__ = [
    "LoadCurrentUserUseCase",
    "UpdateProfileUseCase",
    "CurrentUserResponse",
    "UpdateProfileCommand",
    "UpdateProfileResponse",
]
