from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from src.domain.entities import EntityRecord


class IEntityRepository(ABC):
    """Entity repository interface - application layer"""

    @abstractmethod
    async def get(self, entity_name: str, record_id: str) -> Optional[EntityRecord]:
        """Get a record by entity name and ID"""
        pass

    @abstractmethod
    async def find_one(
        self, entity_name: str, field: str, value: str
    ) -> Optional[EntityRecord]:
        """Get the first record whose string document field equals value"""
        pass

    @abstractmethod
    async def list(
        self,
        entity_name: str,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[EntityRecord]:
        """List records matching equality filters, ordered by sort"""
        pass

    @abstractmethod
    async def create(self, entity_name: str, data: Dict[str, Any]) -> EntityRecord:
        """Create a record with a fresh ID and timestamps"""
        pass

    @abstractmethod
    async def update(
        self, entity_name: str, record_id: str, data: Dict[str, Any]
    ) -> Optional[EntityRecord]:
        """Replace a record's document. Returns None if no record matched."""
        pass

    @abstractmethod
    async def delete(self, entity_name: str, record_id: str) -> bool:
        """Delete a record. Returns False if no record matched."""
        pass
