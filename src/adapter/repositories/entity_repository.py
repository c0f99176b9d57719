from typing import Any, Dict, List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.entity_repository import IEntityRepository
from src.domain.base import utcnow
from src.domain.entities import EntityRecord, strip_reserved
from src.domain.query import matches_filters, sort_records


class EntityRepository(IEntityRepository):
    """Entity repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, entity_name: str, record_id: str) -> Optional[EntityRecord]:
        """Get a record by entity name and ID"""
        stmt = select(EntityRecord).where(
            EntityRecord.entity_name == entity_name, EntityRecord.id == record_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def find_one(
        self, entity_name: str, field: str, value: str
    ) -> Optional[EntityRecord]:
        """Lookup on a JSON document field, resolved by the database"""
        stmt = (
            select(EntityRecord)
            .where(
                EntityRecord.entity_name == entity_name,
                EntityRecord.data[field].as_string() == value,
            )
            .order_by(EntityRecord.seq)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list(
        self,
        entity_name: str,
        filters: Optional[Dict[str, Any]] = None,
        sort: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[EntityRecord]:
        """
        List records of one entity name.

        Equality filters run over the decoded documents so query-string
        values can match numbers and booleans.
        """
        stmt = (
            select(EntityRecord)
            .where(EntityRecord.entity_name == entity_name)
            .order_by(EntityRecord.seq)
        )
        result = await self.session.exec(stmt)
        records = [r for r in result.all() if matches_filters(r.data or {}, filters)]
        records = sort_records(records, sort)
        if limit is not None:
            records = records[:limit]
        return records

    async def create(self, entity_name: str, data: Dict[str, Any]) -> EntityRecord:
        """Create a new record"""
        now = utcnow()
        record = EntityRecord(
            entity_name=entity_name,
            data=strip_reserved(data),
            created_at=now,
            updated_at=now,
        )
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record

    async def update(
        self, entity_name: str, record_id: str, data: Dict[str, Any]
    ) -> Optional[EntityRecord]:
        """Replace the document of an existing record"""
        record = await self.get(entity_name, record_id)
        if record is None:
            return None

        record.data = strip_reserved(data)
        record.updated_at = max(utcnow(), record.created_at)
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record

    async def delete(self, entity_name: str, record_id: str) -> bool:
        """Delete a record by ID"""
        record = await self.get(entity_name, record_id)
        if record is None:
            return False

        await self.session.delete(record)
        await self.session.flush()
        return True
