"""
Secret redaction for entity documents.

Stored credentials (Airtable personal access tokens) are never echoed back
in full. A client that sends the masked value back on update keeps the
stored secret.
"""

from typing import Any, Dict, Mapping

from src.domain.entities import EntityName

MASK_PREFIX = "***"

SECRET_FIELDS = {
    EntityName.airtable_connection.value: ("api_key",),
}


def mask_secret(value: str) -> str:
    return MASK_PREFIX + value[-4:] if len(value) > 4 else MASK_PREFIX


def redact(entity_name: str, document: Dict[str, Any]) -> Dict[str, Any]:
    """Mask secret fields of a public document"""
    fields = SECRET_FIELDS.get(entity_name, ())
    if not fields:
        return document
    redacted = dict(document)
    for field in fields:
        value = redacted.get(field)
        if isinstance(value, str) and value:
            redacted[field] = mask_secret(value)
    return redacted


def restore_masked(
    entity_name: str, body: Dict[str, Any], existing: Mapping[str, Any]
) -> Dict[str, Any]:
    """Replace masked secrets in an update body with the stored values"""
    fields = SECRET_FIELDS.get(entity_name, ())
    if not fields:
        return body
    restored = dict(body)
    for field in fields:
        value = restored.get(field)
        if isinstance(value, str) and value.startswith(MASK_PREFIX) and field in existing:
            restored[field] = existing[field]
    return restored
