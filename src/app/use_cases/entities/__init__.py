"""
Entity Use Cases

Generic CRUD over entity records, scoped by the access policy.
"""

from .base import EntityUseCase
from .bulk_create_entities_use_case import BulkCreateEntitiesUseCase
from .create_entity_use_case import CreateEntityUseCase
from .delete_entity_use_case import DeleteEntityUseCase
from .get_entity_use_case import GetEntityUseCase
from .list_entities_use_case import ListEntitiesUseCase
from .update_entity_use_case import UpdateEntityUseCase

__all__ = [
    "EntityUseCase",
    "GetEntityUseCase",
    "ListEntitiesUseCase",
    "CreateEntityUseCase",
    "BulkCreateEntitiesUseCase",
    "UpdateEntityUseCase",
    "DeleteEntityUseCase",
]
