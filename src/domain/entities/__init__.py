"""
Domain Entities

The generic entity record, the identity value object and shared enums.
"""

from .enums import (
    Decision,
    EntityCategory,
    EntityName,
    Operation,
    OrganizationRole,
)
from .entity_record import RESERVED_FIELDS, EntityRecord, strip_reserved
from .identity import Identity

__all__ = [
    # Enums
    "Decision",
    "EntityCategory",
    "EntityName",
    "Operation",
    "OrganizationRole",
    # Entities
    "EntityRecord",
    "Identity",
    # Helpers
    "RESERVED_FIELDS",
    "strip_reserved",
]
