"""Admin use cases for one-time administrative operations."""

from .bootstrap_admin_use_case import BootstrapAdminResponse, BootstrapAdminUseCase

__all__ = [
    "BootstrapAdminUseCase",
    "BootstrapAdminResponse",
]
