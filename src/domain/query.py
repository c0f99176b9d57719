"""
Listing helpers for entity documents: equality filters and ordering.
"""

import json
from typing import Any, Dict, List, Optional, Tuple

from src.domain.entities.entity_record import RESERVED_FIELDS, EntityRecord


def value_matches(stored: Any, expected: Any) -> bool:
    """
    Exact-match comparison between a stored document value and a filter value.

    String filter values come from the query string, so they also match a
    non-string stored value whose JSON encoding is identical ("true" matches
    True). Numbers compare numerically ("1" matches 1 and 1.0). Non-string
    filter values compare by type and value.
    """
    if isinstance(expected, str):
        if isinstance(stored, str):
            return stored == expected
        if stored is None:
            return expected == "null"
        if isinstance(stored, (int, float)) and not isinstance(stored, bool):
            try:
                return float(expected) == stored
            except ValueError:
                return False
        return json.dumps(stored, sort_keys=True, separators=(",", ":")) == expected
    if isinstance(expected, bool) or isinstance(stored, bool):
        return type(stored) is type(expected) and stored == expected
    return stored == expected


def matches_filters(data: Dict[str, Any], filters: Optional[Dict[str, Any]]) -> bool:
    if not filters:
        return True
    for field, expected in filters.items():
        if field not in data:
            return False
        if not value_matches(data[field], expected):
            return False
    return True


def parse_sort(sort: Optional[str]) -> Tuple[Optional[str], bool]:
    """Split "-field" into ("field", descending=True)"""
    if not sort:
        return None, False
    if sort.startswith("-"):
        return sort[1:] or None, True
    return sort, False


def _sort_value(record: EntityRecord, field: str) -> Any:
    if field in RESERVED_FIELDS:
        return getattr(record, field)
    return (record.data or {}).get(field)


def _sort_key(value: Any) -> Tuple:
    # Missing values sort first; mixed types group by type name
    if value is None:
        return (0, "", "")
    if isinstance(value, bool):
        return (1, "bool", int(value))
    if isinstance(value, (int, float)):
        return (1, "number", value)
    if isinstance(value, (dict, list)):
        return (1, "json", json.dumps(value, sort_keys=True))
    return (1, type(value).__name__, value)


def sort_records(records: List[EntityRecord], sort: Optional[str]) -> List[EntityRecord]:
    """
    Order records by a document or record-level field.

    Input is expected in insertion order; Python's sort is stable in both
    directions, so ties keep insertion order.
    """
    field, descending = parse_sort(sort)
    if field is None:
        return list(records)
    return sorted(
        records,
        key=lambda record: _sort_key(_sort_value(record, field)),
        reverse=descending,
    )
