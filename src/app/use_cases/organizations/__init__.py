"""
Organization Use Cases

Join-by-code workflow and the organization-specific writes that replace the
generic entity create/update/delete for Organization and OrganizationMember.
"""

from .change_member_role_use_case import ChangeMemberRoleUseCase
from .create_organization_use_case import CreateOrganizationUseCase
from .delete_organization_use_case import DeleteOrganizationUseCase
from .dtos import JoinOrganizationResponse
from .join_organization_use_case import JoinOrganizationUseCase
from .remove_member_use_case import RemoveMemberUseCase
from .update_organization_use_case import UpdateOrganizationUseCase

__all__ = [
    "JoinOrganizationUseCase",
    "JoinOrganizationResponse",
    "CreateOrganizationUseCase",
    "UpdateOrganizationUseCase",
    "DeleteOrganizationUseCase",
    "ChangeMemberRoleUseCase",
    "RemoveMemberUseCase",
]
