"""
Entity Record

Generic stored object of any kind: a name tag plus an opaque JSON document.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import JSON
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import generate_uuid, to_iso, utcnow

# Keys owned by the record itself; never stored inside `data`
RESERVED_FIELDS = frozenset({"id", "created_at", "updated_at"})


class EntityRecord(SQLModel, table=True):
    """
    Entity record - one row per stored document, for every entity name.

    Business Rules:
    - id is unique across all entity names
    - data is replaced as a whole on update, never patched in place
    - updated_at >= created_at
    - seq records insertion order and breaks sort ties
    """

    __tablename__ = "entities"

    seq: Optional[int] = Field(default=None, primary_key=True)
    id: str = Field(default_factory=generate_uuid, unique=True, index=True, max_length=36)
    entity_name: str = Field(index=True, max_length=255)

    data: Dict[str, Any] = Field(
        default_factory=dict, sa_column=Column(JSON, nullable=False)
    )

    # Timestamps
    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, nullable=False)
    )
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, nullable=False)
    )

    __table_args__ = (Index("idx_entities_name_seq", "entity_name", "seq"),)

    def to_document(self) -> Dict[str, Any]:
        """Flatten into the public shape: id, data fields, timestamps"""
        document: Dict[str, Any] = {"id": self.id}
        for key, value in (self.data or {}).items():
            if key not in RESERVED_FIELDS:
                document[key] = value
        document["created_at"] = to_iso(self.created_at)
        document["updated_at"] = to_iso(self.updated_at)
        return document


def strip_reserved(body: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in body.items() if k not in RESERVED_FIELDS}
